"""
Confidence Classifier Service Module

Maps how decisive a forecast is to a qualitative LOW / MEDIUM / HIGH tier.
"""

from afl_edge.domain.value_objects.value_objects import (
    ConfidenceTier,
    EngineConfig,
    DEFAULT_ENGINE_CONFIG,
)


class ConfidenceClassifier:
    """
    Classifies match probabilities and player stat variability into tiers.
    """

    def __init__(self, config: EngineConfig = DEFAULT_ENGINE_CONFIG):
        self.config = config

    @staticmethod
    def dominant_probability(probability: float) -> float:
        """Probability of the favoured side, in [0.5, 1.0]."""
        return max(probability, 1.0 - probability)

    def classify_probability(self, probability: float) -> ConfidenceTier:
        """
        Tier for a win probability (0-1) of either side.

        Both sides of the same fixture get the same tier since only the
        dominant probability matters.
        """
        dominant = self.dominant_probability(probability)
        if dominant >= self.config.high_confidence_threshold:
            return ConfidenceTier.HIGH
        elif dominant >= self.config.medium_confidence_threshold:
            return ConfidenceTier.MEDIUM
        return ConfidenceTier.LOW

    def classify_variability(self, std_dev: float) -> ConfidenceTier:
        """Tier for a player's recent-window standard deviation (lower is better)."""
        if std_dev < self.config.variability_high_threshold:
            return ConfidenceTier.HIGH
        elif std_dev < self.config.variability_medium_threshold:
            return ConfidenceTier.MEDIUM
        return ConfidenceTier.LOW

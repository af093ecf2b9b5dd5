"""
Domain Value Objects Module

Value objects are immutable objects that are defined by their attributes rather than identity.
The engine configuration lives here so every weight, threshold and league-average
fallback is a single injected value instead of a module-level global.
"""

from dataclasses import dataclass, field
from enum import Enum


class ConfidenceTier(str, Enum):
    """Qualitative confidence tiers, ordered LOW < MEDIUM < HIGH."""
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"

    @property
    def rank(self) -> int:
        return _TIER_RANKS[self]


_TIER_RANKS = {
    ConfidenceTier.LOW: 0,
    ConfidenceTier.MEDIUM: 1,
    ConfidenceTier.HIGH: 2,
}


class TrendDirection(str, Enum):
    """Direction of a player's most recent output against their season average."""
    UP = "up"
    DOWN = "down"
    FLAT = "flat"


@dataclass(frozen=True)
class FactorWeights:
    """
    Fixed weights of the six match factors.

    They sum to 1.0; this is a property of the configuration, not something
    checked per request.
    """
    recent_form: float = 0.30
    h2h: float = 0.20
    scoring_margin: float = 0.20
    venue: float = 0.15
    clearance: float = 0.10
    travel: float = 0.05

    @property
    def total(self) -> float:
        return (
            self.recent_form + self.h2h + self.scoring_margin
            + self.venue + self.clearance + self.travel
        )


@dataclass(frozen=True)
class EngineConfig:
    """
    Immutable configuration of the prediction engine.

    Attributes:
        weights: Factor weights
        neutral_edge: Edge used when there is no evidence either way
        margin_clamp: Scoring margin differential that saturates the margin factor
        clearance_clamp: Clearance differential that saturates the clearance factor
        venue_full_confidence_sample: Venue games needed before the raw win rate is trusted
        travel_disadvantage: Edge of a travelling team facing a home team
        travel_advantage: Edge of a home team facing a travelling team
        league_avg_score: Fallback points per game when a team has none
        league_avg_clearances: Fallback clearances per game when a team has none
        score_attack_weight: Share of own scoring in the score blend (rest is opponent conceded)
        score_skew_range: Max multiplicative shift applied from the win probability
        score_floor: Minimum predicted score
        high_confidence_threshold: Dominant probability for HIGH
        medium_confidence_threshold: Dominant probability for MEDIUM
        prop_weight_schedule: Recency weights of a player's recent window
        prop_fallback_weight: Weight of any slot beyond the schedule
        prop_window: Size of a player's recent window
        stat_conceded_baseline: League-average conceded value per stat (centers the opponent factor)
        prop_adjustment_range: Max share of a prop prediction the opponent factor can move
        variability_high_threshold: Std deviation below which a prop is HIGH confidence
        variability_medium_threshold: Std deviation below which a prop is MEDIUM confidence
    """
    weights: FactorWeights = field(default_factory=FactorWeights)
    neutral_edge: float = 0.5
    margin_clamp: float = 40.0
    clearance_clamp: float = 15.0
    venue_full_confidence_sample: int = 10
    travel_disadvantage: float = 0.42
    travel_advantage: float = 0.58
    league_avg_score: float = 80.0
    league_avg_clearances: float = 34.0
    score_attack_weight: float = 0.6
    score_skew_range: float = 0.15
    score_floor: int = 40
    high_confidence_threshold: float = 0.70
    medium_confidence_threshold: float = 0.58
    prop_weight_schedule: tuple[float, ...] = (0.35, 0.25, 0.20, 0.12, 0.08)
    prop_fallback_weight: float = 0.05
    prop_window: int = 5
    stat_conceded_baseline: float = 25.0
    prop_adjustment_range: float = 0.15
    variability_high_threshold: float = 4.0
    variability_medium_threshold: float = 8.0

    def prop_weight(self, slot: int) -> float:
        """Recency weight of the given window slot (0 = most recent)."""
        if slot < len(self.prop_weight_schedule):
            return self.prop_weight_schedule[slot]
        return self.prop_fallback_weight


DEFAULT_ENGINE_CONFIG = EngineConfig()

"""
Prediction Service Module

This domain service contains the core match prediction logic:
1. Six weighted factors (form, head to head, scoring margin, venue,
   clearances, travel) scored as normalized edges
2. A weighted composite turned into a win probability
3. A score line blended from attack and opponent defence, skewed by
   the win probability

This is a pure domain service with no external dependencies. Given the same
inputs it returns the same prediction.
"""

import logging
import math
from dataclasses import dataclass
from typing import Callable, Optional

from afl_edge.domain import constants
from afl_edge.domain.entities.entities import (
    Factor,
    MatchPrediction,
    TeamAggregateStats,
    TeamForecast,
    Venue,
)
from afl_edge.domain.services.confidence_classifier import ConfidenceClassifier
from afl_edge.domain.services.factor_scorer import FactorScorer
from afl_edge.domain.value_objects.value_objects import EngineConfig, DEFAULT_ENGINE_CONFIG


logger = logging.getLogger(__name__)

EdgeFunction = Callable[[TeamAggregateStats, TeamAggregateStats], tuple[float, float]]


@dataclass(frozen=True)
class FactorDefinition:
    """A factor of the model: its name, weight and home/away edge function."""
    name: str
    weight: float
    edges: EdgeFunction


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up."""
    return int(math.floor(value + 0.5))


class MatchPredictor:
    """
    Domain service for generating match predictions.

    The factor list is built once at construction from the injected
    configuration and never mutated, so one instance can serve concurrent
    callers.
    """

    def __init__(
        self,
        config: EngineConfig = DEFAULT_ENGINE_CONFIG,
        scorer: Optional[FactorScorer] = None,
        classifier: Optional[ConfidenceClassifier] = None,
    ):
        self.config = config
        self.scorer = scorer or FactorScorer(config)
        self.classifier = classifier or ConfidenceClassifier(config)
        self.factors = self._build_factors()

    def _build_factors(self) -> tuple[FactorDefinition, ...]:
        weights = self.config.weights
        return (
            FactorDefinition(constants.FACTOR_RECENT_FORM, weights.recent_form, self.scorer.form_edges),
            FactorDefinition(constants.FACTOR_H2H, weights.h2h, self.scorer.h2h_edges),
            FactorDefinition(constants.FACTOR_SCORING_MARGIN, weights.scoring_margin, self.scorer.scoring_margin_edges),
            FactorDefinition(constants.FACTOR_VENUE, weights.venue, self.scorer.venue_edges),
            FactorDefinition(constants.FACTOR_CLEARANCE, weights.clearance, self.scorer.clearance_edges),
            FactorDefinition(constants.FACTOR_TRAVEL, weights.travel, self.scorer.travel_edges),
        )

    def predict(
        self,
        home: TeamAggregateStats,
        away: TeamAggregateStats,
        venue: Optional[Venue] = None,
    ) -> MatchPrediction:
        """
        Generate a full prediction for a fixture.

        Args:
            home: Aggregated statistics of the home team
            away: Aggregated statistics of the away team
            venue: Fixture venue (echoed in the output only)

        Returns:
            MatchPrediction with probabilities, score line, tier and factor breakdown
        """
        key_factors = self.score_factors(home, away)

        home_prob, away_prob = self.calculate_win_probabilities(key_factors)
        home_score, away_score = self.calculate_predicted_scores(home, away, home_prob, away_prob)

        confidence = self.classifier.classify_probability(max(home_prob, away_prob) / 100)
        predicted_winner = home.code if home_prob >= away_prob else away.code

        logger.debug(
            f"{home.code} v {away.code}: {home_prob}% - {away_prob}%, "
            f"score {home_score}-{away_score}, confidence {confidence.value}"
        )

        return MatchPrediction(
            home=TeamForecast(team=home, win_probability=home_prob, predicted_score=home_score),
            away=TeamForecast(team=away, win_probability=away_prob, predicted_score=away_score),
            predicted_winner=predicted_winner,
            predicted_margin=abs(home_score - away_score),
            confidence=confidence,
            key_factors=key_factors,
            venue=venue,
        )

    def score_factors(self, home: TeamAggregateStats, away: TeamAggregateStats) -> list[Factor]:
        """Score every factor, keeping the canonical factor order."""
        factors = []
        for definition in self.factors:
            home_edge, away_edge = definition.edges(home, away)
            factors.append(Factor(
                name=definition.name,
                weight=definition.weight,
                home_edge=home_edge,
                away_edge=away_edge,
                advantage_code=home.code if home_edge >= away_edge else away.code,
            ))
        return factors

    def calculate_win_probabilities(self, factors: list[Factor]) -> tuple[float, float]:
        """
        Combine factor edges into home and away win percentages.

        The away percentage is derived from the rounded home percentage so
        that the two always sum to exactly 100.

        Returns:
            Tuple of (home_percentage, away_percentage), one decimal each
        """
        home_total = sum(f.weight * f.home_edge for f in factors)
        away_total = sum(f.weight * f.away_edge for f in factors)

        total = home_total + away_total
        home_share = home_total / total if total > 0 else self.config.neutral_edge

        home_prob = round(home_share * 100, 1)
        away_prob = round(100 - home_prob, 1)
        return home_prob, away_prob

    def calculate_predicted_scores(
        self,
        home: TeamAggregateStats,
        away: TeamAggregateStats,
        home_prob: float,
        away_prob: float,
    ) -> tuple[int, int]:
        """
        Predict the score line.

        Each side's base score blends its own scoring average with what the
        opponent concedes, then moves up or down (at most by
        ``score_skew_range``) with how far its win probability is from 50%.
        Scores never drop below ``score_floor``.

        Returns:
            Tuple of (home_score, away_score)
        """
        home_base = self._base_score(home, away)
        away_base = self._base_score(away, home)
        return (
            self._skew_score(home_base, home_prob),
            self._skew_score(away_base, away_prob),
        )

    def _base_score(self, team: TeamAggregateStats, opponent: TeamAggregateStats) -> int:
        cfg = self.config
        attack = team.avg_score or cfg.league_avg_score
        opponent_conceded = opponent.avg_conceded or cfg.league_avg_score
        return round_half_up(
            attack * cfg.score_attack_weight
            + opponent_conceded * (1 - cfg.score_attack_weight)
        )

    def _skew_score(self, base: int, win_probability: float) -> int:
        skew = self.config.score_skew_range
        multiplier = (1 - skew) + (win_probability / 50) * skew
        return max(self.config.score_floor, round_half_up(base * multiplier))

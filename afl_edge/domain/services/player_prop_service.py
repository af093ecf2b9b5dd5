"""
Player Prop Service Module

Forecasts one player's value for one stat category (disposals, goals, ...)
from their own recent history, optionally nudged by how much the opponent
usually concedes in that stat.
"""

import logging
from typing import Mapping, Optional, Sequence

import numpy as np

from afl_edge.domain.entities.entities import PlayerPropPrediction
from afl_edge.domain.services.confidence_classifier import ConfidenceClassifier
from afl_edge.domain.value_objects.value_objects import (
    EngineConfig,
    TrendDirection,
    DEFAULT_ENGINE_CONFIG,
)


logger = logging.getLogger(__name__)


class PlayerPropPredictor:
    """
    Domain service for player stat predictions.

    Callers are expected to pre-filter players to a minimum history; an empty
    history is the only case where no prediction is returned.
    """

    def __init__(
        self,
        config: EngineConfig = DEFAULT_ENGINE_CONFIG,
        classifier: Optional[ConfidenceClassifier] = None,
    ):
        self.config = config
        self.classifier = classifier or ConfidenceClassifier(config)

    def predict(
        self,
        history: Sequence[float],
        stat_code: str,
        player: str = "",
        player_code: Optional[str] = None,
        opponent_defense: Optional[Mapping[str, float]] = None,
        squad: Optional[str] = None,
    ) -> Optional[PlayerPropPrediction]:
        """
        Predict a player's next value for a stat.

        Args:
            history: Observations, most recent first
            stat_code: Stat category (e.g. "DISPOSAL")
            player: Player display name
            player_code: Provider identifier of the player
            opponent_defense: Opponent's average conceded per stat code
            squad: Team code of the player

        Returns:
            PlayerPropPrediction, or None when the history is empty
        """
        if not history:
            return None

        window = [float(v) for v in history[:self.config.prop_window]]

        weighted_avg = self.weighted_average(window)
        season_avg = float(np.mean(history))
        adjustment = self.opponent_adjustment(stat_code, opponent_defense)

        spread = self.config.prop_adjustment_range
        predicted = weighted_avg * ((1 - spread) + adjustment * spread)

        variability = float(np.std(window))
        tier = self.classifier.classify_variability(variability)

        logger.debug(
            f"{player or player_code} {stat_code}: predicted {predicted:.1f} "
            f"(weighted {weighted_avg:.1f}, std {variability:.2f})"
        )

        return PlayerPropPrediction(
            player=player,
            player_code=player_code,
            stat_code=stat_code,
            predicted=round(predicted, 1),
            weighted_avg=round(weighted_avg, 1),
            season_avg=round(season_avg, 1),
            confidence_tier=tier,
            last5=window,
            trend_direction=self.trend_direction(history[0], season_avg),
            squad=squad,
        )

    def weighted_average(self, window: Sequence[float]) -> float:
        """
        Recency-weighted average of the recent window.

        The weights follow the configured schedule (most recent first) and
        the result is divided by the sum of the weights actually used, so
        shorter windows are not biased downwards.
        """
        weights = [self.config.prop_weight(i) for i in range(len(window))]
        weight_total = sum(weights)
        if weight_total <= 0:
            return 0.0
        return sum(v * w for v, w in zip(window, weights)) / weight_total

    def opponent_adjustment(
        self,
        stat_code: str,
        opponent_defense: Optional[Mapping[str, float]],
    ) -> float:
        """Opponent conceded figure relative to the league baseline (1.0 = average)."""
        if not opponent_defense:
            return 1.0
        conceded = opponent_defense.get(stat_code)
        if conceded is None or self.config.stat_conceded_baseline <= 0:
            return 1.0
        return conceded / self.config.stat_conceded_baseline

    @staticmethod
    def trend_direction(most_recent: float, season_avg: float) -> TrendDirection:
        if most_recent > season_avg:
            return TrendDirection.UP
        elif most_recent < season_avg:
            return TrendDirection.DOWN
        return TrendDirection.FLAT

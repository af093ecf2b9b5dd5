"""
Factor Scorer Module

Turns one category of raw team statistic into a normalized 0-1 "edge" per team.

Each statistic has its own normalization rule:
1. Recency-weighted form (linearly decreasing weights)
2. Plain win rates (head to head)
3. Win rates regressed toward 0.5 for small samples (venue record)
4. Clamped, linearly rescaled differentials (scoring margin, clearances)
5. Fixed asymmetric constants (interstate travel)

This is a pure domain service with no external dependencies.
"""

from typing import Sequence

from afl_edge.domain.entities.entities import MatchResult, TeamAggregateStats
from afl_edge.domain.value_objects.value_objects import EngineConfig, DEFAULT_ENGINE_CONFIG


NEUTRAL = 0.5


class FactorScorer:
    """
    Domain service computing per-factor edges for a fixture.

    The static methods are the raw normalization rules; the ``*_edges``
    methods apply them to a home/away pair using the injected configuration.
    """

    def __init__(self, config: EngineConfig = DEFAULT_ENGINE_CONFIG):
        self.config = config

    @staticmethod
    def form_score(form: Sequence[MatchResult]) -> float:
        """
        Recency-weighted form score.

        The most recent game gets weight ``len(form)``, the next one
        ``len(form) - 1`` and so on down to 1. A win scores the full weight,
        a draw half of it and a loss nothing.

        Args:
            form: Match results, most recent first

        Returns:
            Weighted share of available points (0.5 when form is empty)

        Example:
            form_score([W, W, W, L, W])  # (5 + 4 + 3 + 1) / 15 = 0.867
        """
        if not form:
            return NEUTRAL

        score = 0.0
        total_weight = 0
        for i, result in enumerate(form):
            weight = len(form) - i
            total_weight += weight
            if result == MatchResult.WIN:
                score += weight
            elif result == MatchResult.DRAW:
                score += weight * 0.5

        return score / total_weight if total_weight > 0 else NEUTRAL

    @staticmethod
    def rate_score(wins: int, played: int) -> float:
        """Win rate, neutral when nothing has been played."""
        if played <= 0:
            return NEUTRAL
        return wins / played

    @staticmethod
    def regressed_rate_score(wins: int, played: int, full_confidence_sample: int = 10) -> float:
        """
        Win rate shrunk toward 0.5 in proportion to the sample size.

        Two venue games should not produce an extreme edge, so the raw rate
        is only fully trusted once ``full_confidence_sample`` games have
        been played.

        Example:
            regressed_rate_score(2, 2, 10)  # 0.5 + 0.5 * 0.2 = 0.6
        """
        if played <= 0 or full_confidence_sample <= 0:
            return NEUTRAL

        raw = wins / played
        trust = min(played / full_confidence_sample, 1.0)
        return NEUTRAL + (raw - NEUTRAL) * trust

    @staticmethod
    def margin_score(margin: float, clamp_bound: float) -> float:
        """Clamp a differential to [-bound, bound] and rescale it to [0, 1]."""
        if clamp_bound <= 0:
            return NEUTRAL
        clamped = max(-clamp_bound, min(clamp_bound, margin))
        return (clamped + clamp_bound) / (2 * clamp_bound)

    @staticmethod
    def travel_score(
        team_travelling: bool,
        opponent_travelling: bool,
        disadvantage: float = 0.42,
        advantage: float = 0.58,
    ) -> float:
        """Fixed edge for interstate travel; neutral when both or neither travel."""
        if team_travelling and not opponent_travelling:
            return disadvantage
        if opponent_travelling and not team_travelling:
            return advantage
        return NEUTRAL

    @staticmethod
    def normalize(a: float, b: float) -> float:
        """Share of ``a`` in ``a + b`` (a's edge over b)."""
        if a + b == 0:
            return NEUTRAL
        return a / (a + b)

    # ------------------------------------------------------------------
    # Home/away pairs
    # ------------------------------------------------------------------

    def form_edges(self, home: TeamAggregateStats, away: TeamAggregateStats) -> tuple[float, float]:
        home_form = self.form_score(home.form)
        away_form = self.form_score(away.form)
        return self.normalize(home_form, away_form), self.normalize(away_form, home_form)

    def h2h_edges(self, home: TeamAggregateStats, away: TeamAggregateStats) -> tuple[float, float]:
        home_rate = self.rate_score(home.h2h_wins, home.h2h_played)
        away_rate = self.rate_score(away.h2h_wins, away.h2h_played)
        return self.normalize(home_rate, away_rate), self.normalize(away_rate, home_rate)

    def scoring_margin_edges(self, home: TeamAggregateStats, away: TeamAggregateStats) -> tuple[float, float]:
        diff = (home.scoring_margin or 0.0) - (away.scoring_margin or 0.0)
        clamp = self.config.margin_clamp
        return self.margin_score(diff, clamp), self.margin_score(-diff, clamp)

    def venue_edges(self, home: TeamAggregateStats, away: TeamAggregateStats) -> tuple[float, float]:
        sample = self.config.venue_full_confidence_sample
        home_rate = self.regressed_rate_score(home.venue_wins, home.venue_played, sample)
        away_rate = self.regressed_rate_score(away.venue_wins, away.venue_played, sample)
        return self.normalize(home_rate, away_rate), self.normalize(away_rate, home_rate)

    def clearance_edges(self, home: TeamAggregateStats, away: TeamAggregateStats) -> tuple[float, float]:
        # Missing clearance counts fall back to the league average
        home_clearances = home.avg_clearances or self.config.league_avg_clearances
        away_clearances = away.avg_clearances or self.config.league_avg_clearances
        diff = home_clearances - away_clearances
        clamp = self.config.clearance_clamp
        return self.margin_score(diff, clamp), self.margin_score(-diff, clamp)

    def travel_edges(self, home: TeamAggregateStats, away: TeamAggregateStats) -> tuple[float, float]:
        cfg = self.config
        return (
            self.travel_score(
                home.travelling_interstate, away.travelling_interstate,
                cfg.travel_disadvantage, cfg.travel_advantage,
            ),
            self.travel_score(
                away.travelling_interstate, home.travelling_interstate,
                cfg.travel_disadvantage, cfg.travel_advantage,
            ),
        )

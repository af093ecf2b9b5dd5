"""
Unit Tests for Factor Scorer

Tests the per-factor normalization rules and the home/away edge pairs.
"""

import pytest

from afl_edge.domain.entities.entities import MatchResult, TeamAggregateStats
from afl_edge.domain.services.factor_scorer import FactorScorer
from afl_edge.domain.value_objects.value_objects import EngineConfig

W, L, D = MatchResult.WIN, MatchResult.LOSS, MatchResult.DRAW


class TestFormScore:
    """Tests for recency-weighted form."""

    def test_empty_form_is_neutral(self):
        assert FactorScorer.form_score([]) == 0.5

    def test_all_wins(self):
        assert FactorScorer.form_score([W] * 5) == 1.0

    def test_all_losses(self):
        assert FactorScorer.form_score([L] * 5) == 0.0

    def test_draws_count_half(self):
        assert FactorScorer.form_score([D, D, D]) == pytest.approx(0.5)

    def test_recent_results_weigh_more(self):
        """A recent win outweighs an older one."""
        recent_win = FactorScorer.form_score([W, L])
        old_win = FactorScorer.form_score([L, W])
        assert recent_win == pytest.approx(2 / 3)
        assert old_win == pytest.approx(1 / 3)
        assert recent_win > old_win

    def test_mixed_form(self):
        # weights 5, 4, 3, 2, 1 with the loss in the fourth slot
        assert FactorScorer.form_score([W, W, W, L, W]) == pytest.approx(13 / 15)


class TestRateScores:
    """Tests for plain and regressed win rates."""

    @pytest.mark.parametrize("wins", [0, 3, 7])
    def test_rate_with_no_games_is_neutral(self, wins):
        assert FactorScorer.rate_score(wins, 0) == 0.5

    def test_rate(self):
        assert FactorScorer.rate_score(3, 4) == 0.75

    def test_regressed_rate_with_no_games_is_neutral(self):
        assert FactorScorer.regressed_rate_score(0, 0, 10) == 0.5

    def test_small_sample_is_shrunk(self):
        """Two wins from two games must not give an extreme edge."""
        assert FactorScorer.regressed_rate_score(2, 2, 10) == pytest.approx(0.6)

    def test_full_sample_keeps_raw_rate(self):
        assert FactorScorer.regressed_rate_score(10, 10, 10) == pytest.approx(1.0)
        assert FactorScorer.regressed_rate_score(7, 20, 10) == pytest.approx(0.35)

    def test_converges_to_raw_rate(self):
        """The gap to the raw rate shrinks as the sample grows."""
        gaps = [
            abs(1.0 - FactorScorer.regressed_rate_score(played, played, 10))
            for played in (1, 2, 5, 8, 10, 15)
        ]
        assert gaps == sorted(gaps, reverse=True)
        assert gaps[0] == pytest.approx(0.45)
        assert gaps[-1] == pytest.approx(0.0)


class TestMarginScore:
    """Tests for clamped differentials."""

    def test_saturates_at_bounds(self):
        assert FactorScorer.margin_score(-40, 40) == 0.0
        assert FactorScorer.margin_score(40, 40) == 1.0

    def test_beyond_bounds_is_clamped(self):
        assert FactorScorer.margin_score(-120, 40) == 0.0
        assert FactorScorer.margin_score(120, 40) == 1.0

    def test_even_is_neutral(self):
        assert FactorScorer.margin_score(0, 15) == 0.5

    def test_monotonic(self):
        values = [FactorScorer.margin_score(m, 40) for m in range(-60, 61, 5)]
        assert values == sorted(values)
        assert all(0.0 <= v <= 1.0 for v in values)


class TestTravelScore:
    """Tests for interstate travel constants."""

    def test_travelling_team_is_disadvantaged(self):
        assert FactorScorer.travel_score(True, False) == 0.42

    def test_home_team_against_travellers_is_advantaged(self):
        assert FactorScorer.travel_score(False, True) == 0.58

    @pytest.mark.parametrize("both", [True, False])
    def test_same_situation_is_neutral(self, both):
        assert FactorScorer.travel_score(both, both) == 0.5


class TestEdgePairs:
    """Tests for the home/away edge pairs."""

    @pytest.fixture
    def scorer(self):
        return FactorScorer(EngineConfig())

    def test_normalize_zero_total_is_neutral(self):
        assert FactorScorer.normalize(0, 0) == 0.5

    def test_form_edges_are_complementary(self, scorer, strong_home, weak_away):
        home_edge, away_edge = scorer.form_edges(strong_home, weak_away)
        assert home_edge + away_edge == pytest.approx(1.0)
        assert home_edge > away_edge

    def test_h2h_edges(self, scorer, strong_home, weak_away):
        home_edge, away_edge = scorer.h2h_edges(strong_home, weak_away)
        assert home_edge == pytest.approx(0.7)
        assert away_edge == pytest.approx(0.3)

    def test_scoring_margin_edges(self, scorer, strong_home, weak_away):
        # differential 21.4 - (-5.0) = 26.4 over a clamp of 40
        home_edge, away_edge = scorer.scoring_margin_edges(strong_home, weak_away)
        assert home_edge == pytest.approx(0.83)
        assert away_edge == pytest.approx(0.17)

    def test_venue_edges_regress_small_samples(self, scorer, strong_home, weak_away):
        home_edge, away_edge = scorer.venue_edges(strong_home, weak_away)
        assert home_edge == pytest.approx(0.75 / 1.05)
        assert away_edge == pytest.approx(0.30 / 1.05)

    def test_clearance_edges(self, scorer, strong_home, weak_away):
        home_edge, away_edge = scorer.clearance_edges(strong_home, weak_away)
        assert home_edge == pytest.approx(21.4 / 30)
        assert home_edge + away_edge == pytest.approx(1.0)

    def test_missing_clearances_use_league_average(self, scorer):
        home = TeamAggregateStats(code="A", name="A")
        away = TeamAggregateStats(code="B", name="B", avg_clearances=34.0)
        assert scorer.clearance_edges(home, away) == (0.5, 0.5)

    def test_travel_edges(self, scorer, strong_home, weak_away):
        assert scorer.travel_edges(strong_home, weak_away) == (0.58, 0.42)

    def test_travel_constants_come_from_config(self, strong_home, weak_away):
        scorer = FactorScorer(EngineConfig(travel_disadvantage=0.35, travel_advantage=0.65))
        assert scorer.travel_edges(strong_home, weak_away) == (0.65, 0.35)

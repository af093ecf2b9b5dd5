"""
Unit Tests for Application Use Cases

Tests orchestration between request DTOs, domain services and response DTOs.
"""

import pytest

from afl_edge.application.dtos.dtos import (
    CompletedGameDTO,
    GamesPredictionRequestDTO,
    MatchPredictionRequestDTO,
    PlayerDTO,
    PlayerPropsRequestDTO,
    RoundPredictionRequestDTO,
    TeamAggregateStatsDTO,
    VenueDTO,
)
from afl_edge.application.use_cases.use_cases import (
    PlayerPropsUseCase,
    PredictFromGamesUseCase,
    PredictMatchUseCase,
    PredictRoundUseCase,
)
from afl_edge.domain.exceptions import InsufficientDataException
from afl_edge.domain.services.line_assessment_service import LineAssessmentService
from afl_edge.domain.services.player_prop_service import PlayerPropPredictor
from afl_edge.domain.services.prediction_service import MatchPredictor
from afl_edge.domain.services.statistics_service import StatisticsService
from afl_edge.domain.value_objects.value_objects import ConfidenceTier


@pytest.fixture
def predictor():
    return MatchPredictor()


@pytest.fixture
def line_service():
    return LineAssessmentService()


@pytest.fixture
def match_request(strong_home, weak_away):
    return MatchPredictionRequestDTO(
        home=TeamAggregateStatsDTO.model_validate(strong_home),
        away=TeamAggregateStatsDTO.model_validate(weak_away),
        venue=VenueDTO(id="scg", name="Sydney Cricket Ground", code="SCG"),
    )


@pytest.fixture
def games_request(season_games):
    return GamesPredictionRequestDTO(
        home_code="SYD",
        away_code="WCE",
        home_name="Sydney",
        away_name="West Coast",
        venue=VenueDTO(id="scg", name="Sydney Cricket Ground", code="SCG"),
        away_travelling_interstate=True,
        games=[CompletedGameDTO.model_validate(g) for g in season_games],
    )


class TestPredictMatchUseCase:
    """Tests for PredictMatchUseCase."""

    def test_execute(self, predictor, line_service, match_request):
        response = PredictMatchUseCase(predictor, line_service).execute(match_request)

        assert response.prediction.home.win_probability == 73.6
        assert response.prediction.away.win_probability == 26.4
        assert response.prediction.predicted_winner == "SYD"
        assert response.prediction.confidence == ConfidenceTier.HIGH
        assert response.prediction.venue.code == "SCG"
        assert len(response.prediction.key_factors) == 6
        assert response.line_assessment.recommendation == "Strong lean to SYD - consider handicap"
        assert response.generated_at.tzinfo is not None


class TestPredictFromGamesUseCase:
    """Tests for PredictFromGamesUseCase."""

    @pytest.fixture
    def use_case(self, predictor, line_service):
        return PredictFromGamesUseCase(predictor, StatisticsService(), line_service, form_window=6, h2h_window=10)

    def test_builds_aggregates_from_games(self, use_case, games_request):
        response = use_case.execute(games_request)
        home = response.prediction.home.team
        away = response.prediction.away.team

        assert home.name == "Sydney"
        assert home.avg_score == 86.0
        assert (home.h2h_wins, home.h2h_played) == (2, 3)
        assert (away.h2h_wins, away.h2h_played) == (0, 3)
        assert (home.venue_wins, home.venue_played) == (2, 3)
        assert (away.venue_wins, away.venue_played) == (0, 2)
        assert home.travelling_interstate is False
        assert away.travelling_interstate is True
        assert response.prediction.predicted_winner == "SYD"

    def test_probabilities_sum_to_100(self, use_case, games_request):
        prediction = use_case.execute(games_request).prediction
        assert prediction.home.win_probability + prediction.away.win_probability == pytest.approx(100.0)

    def test_without_venue_records_are_empty(self, use_case, games_request):
        games_request.venue = None
        response = use_case.execute(games_request)
        assert response.prediction.home.team.venue_played == 0
        assert response.prediction.venue is None

    def test_team_without_games_raises(self, use_case, games_request):
        games_request.away_code = "GCS"
        with pytest.raises(InsufficientDataException, match="GCS"):
            use_case.execute(games_request)

    def test_no_games_at_all_raises(self, use_case, games_request):
        games_request.games = []
        with pytest.raises(InsufficientDataException):
            use_case.execute(games_request)


class TestPredictRoundUseCase:
    """Tests for PredictRoundUseCase."""

    def test_keeps_request_order(self, predictor, line_service, match_request, strong_home, weak_away):
        reversed_request = MatchPredictionRequestDTO(
            home=TeamAggregateStatsDTO.model_validate(weak_away),
            away=TeamAggregateStatsDTO.model_validate(strong_home),
        )
        request = RoundPredictionRequestDTO(fixtures=[match_request, reversed_request, match_request])

        response = PredictRoundUseCase(predictor, line_service, max_workers=3).execute(request)

        assert response.count == 3
        assert [p.prediction.home.team.code for p in response.predictions] == ["SYD", "WCE", "SYD"]
        assert all(p.prediction.predicted_winner == "SYD" for p in response.predictions)

    def test_single_worker(self, predictor, line_service, match_request):
        request = RoundPredictionRequestDTO(fixtures=[match_request])
        response = PredictRoundUseCase(predictor, line_service, max_workers=0).execute(request)
        assert response.count == 1


class TestPlayerPropsUseCase:
    """Tests for PlayerPropsUseCase."""

    @pytest.fixture
    def use_case(self):
        return PlayerPropsUseCase(
            PlayerPropPredictor(),
            stat_codes=["DISPOSAL", "GOAL"],
            min_history=3,
            top_n=2,
            max_players=30,
            history_window=10,
        )

    @pytest.fixture
    def props_request(self):
        return PlayerPropsRequestDTO(
            home_code="SYD",
            away_code="WCE",
            players=[
                PlayerDTO(name="A", code="a", squad="SYD",
                          stat_history={"DISPOSAL": [30, 28, 26, 27], "GOAL": [1, 0, 2]}),
                PlayerDTO(name="B", code="b", squad="WCE",
                          stat_history={"DISPOSAL": [20, 20, 20]}),
                PlayerDTO(name="C", code="c", squad="SYD",
                          stat_history={"disposal": [20, None, 20, 20], "GOAL": [3, 3]}),
            ],
            opponent_defense={"WCE": {"DISPOSAL": 30.0}},
        )

    def test_groups_and_ranks_by_stat(self, use_case, props_request):
        response = use_case.execute(props_request)

        assert set(response.player_props) == {"DISPOSAL", "GOAL"}
        disposals = response.player_props["DISPOSAL"]
        assert [p.player for p in disposals] == ["A", "C"]
        assert disposals[0].predicted >= disposals[1].predicted

    def test_total_counts_all_predictions(self, use_case, props_request):
        # A has two stats, B and C one each; C's goals are below the minimum history
        assert use_case.execute(props_request).total_predictions == 4

    def test_opponent_defense_applies_to_opponent_squad(self, use_case, props_request):
        response = use_case.execute(props_request)
        c = next(p for p in response.player_props["DISPOSAL"] if p.player == "C")
        assert c.weighted_avg == 20.0
        assert c.predicted == 20.6

    def test_short_histories_are_skipped(self, use_case):
        request = PlayerPropsRequestDTO(players=[PlayerDTO(name="New", stat_history={"DISPOSAL": [10, 12]})])
        response = use_case.execute(request)
        assert response.player_props == {}
        assert response.total_predictions == 0

    def test_player_limit(self, props_request):
        use_case = PlayerPropsUseCase(PlayerPropPredictor(), stat_codes=["DISPOSAL"], max_players=1)
        response = use_case.execute(props_request)
        assert [p.player for p in response.player_props["DISPOSAL"]] == ["A"]

    def test_stat_codes_in_opponent_defense_ignore_case(self, use_case):
        request = PlayerPropsRequestDTO(
            home_code="SYD",
            away_code="WCE",
            players=[PlayerDTO(name="A", squad="SYD", stat_history={"disposal": [10] * 5})],
            opponent_defense={"WCE": {"disposal": 30.0}},
        )
        prop = use_case.execute(request).player_props["DISPOSAL"][0]
        assert prop.predicted == 10.3

    def test_team_codes_ignore_case(self, use_case):
        """Test the opponent is found when squad, fixture and defense codes differ in case."""
        request = PlayerPropsRequestDTO(
            home_code="syd",
            away_code="Wce",
            players=[PlayerDTO(name="A", squad="SYD", stat_history={"DISPOSAL": [10] * 5})],
            opponent_defense={"wce": {"DISPOSAL": 30.0}},
        )
        prop = use_case.execute(request).player_props["DISPOSAL"][0]
        assert prop.predicted == 10.3

    def test_player_from_neither_team_is_not_adjusted(self, use_case):
        request = PlayerPropsRequestDTO(
            home_code="SYD",
            away_code="WCE",
            players=[PlayerDTO(name="A", squad="COL", stat_history={"DISPOSAL": [10] * 5})],
            opponent_defense={"WCE": {"DISPOSAL": 30.0}, "SYD": {"DISPOSAL": 30.0}},
        )
        prop = use_case.execute(request).player_props["DISPOSAL"][0]
        assert prop.predicted == 10.0

"""
Application Use Cases Module

Use cases represent application-specific business rules and orchestrate
the flow of data between the API layer and the domain services.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from afl_edge import config
from afl_edge.domain.entities.entities import MatchPrediction, PlayerPropPrediction
from afl_edge.domain.exceptions import InsufficientDataException
from afl_edge.domain.services.line_assessment_service import LineAssessmentService
from afl_edge.domain.services.player_prop_service import PlayerPropPredictor
from afl_edge.domain.services.prediction_service import MatchPredictor
from afl_edge.domain.services.statistics_service import StatisticsService
from afl_edge.application.dtos.dtos import (
    GamesPredictionRequestDTO,
    LineAssessmentDTO,
    MatchPredictionDTO,
    MatchPredictionRequestDTO,
    MatchPredictionResponseDTO,
    PlayerPropPredictionDTO,
    PlayerPropsRequestDTO,
    PlayerPropsResponseDTO,
    RoundPredictionRequestDTO,
    RoundPredictionsResponseDTO,
)


logger = logging.getLogger(__name__)


def _to_response(
    prediction: MatchPrediction,
    line_service: LineAssessmentService,
) -> MatchPredictionResponseDTO:
    return MatchPredictionResponseDTO(
        prediction=MatchPredictionDTO.model_validate(prediction),
        line_assessment=LineAssessmentDTO.model_validate(line_service.assess(prediction)),
    )


class PredictMatchUseCase:
    """Use case for predicting one fixture from pre-built aggregates."""

    def __init__(self, predictor: MatchPredictor, line_service: LineAssessmentService):
        self.predictor = predictor
        self.line_service = line_service

    def execute(self, request: MatchPredictionRequestDTO) -> MatchPredictionResponseDTO:
        prediction = self.predictor.predict(
            request.home.to_entity(),
            request.away.to_entity(),
            request.venue.to_entity() if request.venue else None,
        )
        return _to_response(prediction, self.line_service)


class PredictFromGamesUseCase:
    """
    Use case for predicting a fixture from raw completed-game records.

    Builds both teams' aggregates (recent form window, head to head, venue
    record, travel flags) and runs the match predictor on them.
    """

    def __init__(
        self,
        predictor: MatchPredictor,
        statistics_service: StatisticsService,
        line_service: LineAssessmentService,
        form_window: int = config.TEAM_FORM_WINDOW,
        h2h_window: int = config.H2H_WINDOW,
    ):
        self.predictor = predictor
        self.statistics_service = statistics_service
        self.line_service = line_service
        self.form_window = form_window
        self.h2h_window = h2h_window

    def execute(self, request: GamesPredictionRequestDTO) -> MatchPredictionResponseDTO:
        """
        Raises:
            InsufficientDataException: when either team has no completed games
        """
        games = [g.to_entity() for g in request.games]
        stats = self.statistics_service

        home = stats.build_team_stats(request.home_code, games, self.form_window, request.home_name)
        away = stats.build_team_stats(request.away_code, games, self.form_window, request.away_name)

        if home is None or away is None:
            missing = [
                code for code, team in ((request.home_code, home), (request.away_code, away))
                if team is None
            ]
            logger.warning(f"No completed games for {', '.join(missing)}")
            raise InsufficientDataException(
                f"Not enough match history to generate a prediction (no completed games for {', '.join(missing)})"
            )

        home.h2h_wins, home.h2h_played = stats.calc_h2h(home.code, away.code, games, self.h2h_window)
        away.h2h_wins, away.h2h_played = stats.calc_h2h(away.code, home.code, games, self.h2h_window)

        venue = request.venue.to_entity() if request.venue else None
        if venue is not None:
            venue_code = venue.code or venue.id
            home.venue_wins, home.venue_played = stats.calc_venue_record(home.code, venue_code, games)
            away.venue_wins, away.venue_played = stats.calc_venue_record(away.code, venue_code, games)

        home.travelling_interstate = request.home_travelling_interstate
        away.travelling_interstate = request.away_travelling_interstate

        prediction = self.predictor.predict(home, away, venue)
        return _to_response(prediction, self.line_service)


class PredictRoundUseCase:
    """
    Use case for predicting every fixture of a round.

    Fixtures are independent, so they are spread over a thread pool; the
    predictor holds no mutable state and is shared by all workers.
    """

    def __init__(
        self,
        predictor: MatchPredictor,
        line_service: LineAssessmentService,
        max_workers: int = config.MAX_WORKERS,
    ):
        self.single = PredictMatchUseCase(predictor, line_service)
        self.max_workers = max(1, max_workers)

    def execute(self, request: RoundPredictionRequestDTO) -> RoundPredictionsResponseDTO:
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            predictions = list(executor.map(self.single.execute, request.fixtures))

        logger.info(f"Predicted {len(predictions)} fixtures")
        return RoundPredictionsResponseDTO(count=len(predictions), predictions=predictions)


class PlayerPropsUseCase:
    """
    Use case for the player props board of a match.

    Every player/stat pair with enough history gets a prediction; the board
    keeps the highest predictions per stat.
    """

    def __init__(
        self,
        prop_predictor: PlayerPropPredictor,
        stat_codes: Optional[list[str]] = None,
        min_history: int = config.MIN_PLAYER_HISTORY,
        top_n: int = config.TOP_PROPS_PER_STAT,
        max_players: int = config.MAX_PROP_PLAYERS,
        history_window: int = config.PLAYER_HISTORY_WINDOW,
    ):
        self.prop_predictor = prop_predictor
        self.stat_codes = [code.upper() for code in (stat_codes or config.PROP_STAT_CODES)]
        self.min_history = min_history
        self.top_n = top_n
        self.max_players = max_players
        self.history_window = history_window

    def execute(self, request: PlayerPropsRequestDTO) -> PlayerPropsResponseDTO:
        predictions: list[PlayerPropPrediction] = []

        defense_by_team = request.defense_by_team()

        for player_dto in request.players[:self.max_players]:
            player = player_dto.to_entity(self.history_window)
            opponent_defense = defense_by_team.get(
                self._opponent_of(player.squad, request) or ""
            )

            for stat_code in self.stat_codes:
                history = player.stat_history.get(stat_code, [])
                if len(history) < self.min_history:
                    continue

                prediction = self.prop_predictor.predict(
                    history,
                    stat_code,
                    player=player.name,
                    player_code=player.code,
                    opponent_defense=opponent_defense,
                    squad=player.squad,
                )
                if prediction:
                    predictions.append(prediction)

        grouped: dict[str, list[PlayerPropPredictionDTO]] = {}
        for stat_code in self.stat_codes:
            ranked = sorted(
                (p for p in predictions if p.stat_code == stat_code),
                key=lambda p: p.predicted,
                reverse=True,
            )
            if ranked:
                grouped[stat_code] = [
                    PlayerPropPredictionDTO.model_validate(p) for p in ranked[:self.top_n]
                ]

        logger.info(f"Built {len(predictions)} prop predictions for {len(request.players)} players")
        return PlayerPropsResponseDTO(player_props=grouped, total_predictions=len(predictions))

    @staticmethod
    def _opponent_of(squad: Optional[str], request: PlayerPropsRequestDTO) -> Optional[str]:
        if squad is None:
            return None
        normalize = StatisticsService.normalize_code
        squad_code = normalize(squad)
        if request.home_code and squad_code == normalize(request.home_code):
            return normalize(request.away_code)
        if request.away_code and squad_code == normalize(request.away_code):
            return normalize(request.home_code)
        return None

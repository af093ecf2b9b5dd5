"""
API Dependencies Module

Provides dependency injection for FastAPI routes.
Contains factory functions for creating domain services and use cases.
"""

from functools import lru_cache

from afl_edge import config
from afl_edge.domain.services.confidence_classifier import ConfidenceClassifier
from afl_edge.domain.services.line_assessment_service import LineAssessmentService
from afl_edge.domain.services.player_prop_service import PlayerPropPredictor
from afl_edge.domain.services.prediction_service import MatchPredictor
from afl_edge.domain.services.statistics_service import StatisticsService
from afl_edge.domain.value_objects.value_objects import EngineConfig
from afl_edge.application.use_cases.use_cases import (
    PlayerPropsUseCase,
    PredictFromGamesUseCase,
    PredictMatchUseCase,
    PredictRoundUseCase,
)


@lru_cache()
def get_engine_config() -> EngineConfig:
    """Get engine configuration (cached)."""
    return EngineConfig()


@lru_cache()
def get_confidence_classifier() -> ConfidenceClassifier:
    """Get confidence classifier (cached)."""
    return ConfidenceClassifier(get_engine_config())


@lru_cache()
def get_match_predictor() -> MatchPredictor:
    """Get match predictor (cached)."""
    return MatchPredictor(get_engine_config(), classifier=get_confidence_classifier())


@lru_cache()
def get_player_prop_predictor() -> PlayerPropPredictor:
    """Get player prop predictor (cached)."""
    return PlayerPropPredictor(get_engine_config(), get_confidence_classifier())


@lru_cache()
def get_statistics_service() -> StatisticsService:
    """Get statistics service (cached)."""
    return StatisticsService(get_engine_config())


@lru_cache()
def get_line_assessment_service() -> LineAssessmentService:
    """Get line assessment service (cached)."""
    return LineAssessmentService()


def get_predict_match_use_case() -> PredictMatchUseCase:
    return PredictMatchUseCase(get_match_predictor(), get_line_assessment_service())


def get_predict_from_games_use_case() -> PredictFromGamesUseCase:
    return PredictFromGamesUseCase(
        get_match_predictor(),
        get_statistics_service(),
        get_line_assessment_service(),
    )


def get_predict_round_use_case() -> PredictRoundUseCase:
    return PredictRoundUseCase(
        get_match_predictor(),
        get_line_assessment_service(),
        max_workers=config.MAX_WORKERS,
    )


def get_player_props_use_case() -> PlayerPropsUseCase:
    return PlayerPropsUseCase(get_player_prop_predictor())

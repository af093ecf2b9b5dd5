"""
Predictions Router

API endpoints for match predictions.
"""

from fastapi import APIRouter, Depends, HTTPException

from afl_edge.application.dtos.dtos import (
    ErrorResponseDTO,
    GamesPredictionRequestDTO,
    MatchPredictionRequestDTO,
    MatchPredictionResponseDTO,
    RoundPredictionRequestDTO,
    RoundPredictionsResponseDTO,
)
from afl_edge.application.use_cases.use_cases import (
    PredictFromGamesUseCase,
    PredictMatchUseCase,
    PredictRoundUseCase,
)
from afl_edge.api.dependencies import (
    get_predict_from_games_use_case,
    get_predict_match_use_case,
    get_predict_round_use_case,
)
from afl_edge.domain.exceptions import InsufficientDataException


router = APIRouter(prefix="/predictions", tags=["Predictions"])


@router.post(
    "/match",
    response_model=MatchPredictionResponseDTO,
    summary="Predict a match",
    description="Returns win probabilities, predicted score line, confidence and factor breakdown for two team aggregates.",
)
def predict_match(
    request: MatchPredictionRequestDTO,
    use_case: PredictMatchUseCase = Depends(get_predict_match_use_case),
) -> MatchPredictionResponseDTO:
    """Predict a match from pre-built team aggregates."""
    return use_case.execute(request)


@router.post(
    "/games",
    response_model=MatchPredictionResponseDTO,
    responses={
        422: {"model": ErrorResponseDTO, "description": "Not enough match history"},
    },
    summary="Predict a match from game records",
    description="Aggregates completed games (oldest first) for both teams, then predicts the match.",
)
def predict_from_games(
    request: GamesPredictionRequestDTO,
    use_case: PredictFromGamesUseCase = Depends(get_predict_from_games_use_case),
) -> MatchPredictionResponseDTO:
    """Predict a match from raw completed games."""
    try:
        return use_case.execute(request)
    except InsufficientDataException as e:
        raise HTTPException(
            status_code=422,
            detail={
                "error": "insufficient_data",
                "message": str(e),
                "details": {"hint": "This usually happens early in the season (round 1-2)"},
            },
        )


@router.post(
    "/round",
    response_model=RoundPredictionsResponseDTO,
    summary="Predict a round",
    description="Predicts every fixture of a round. Predictions keep the request order.",
)
def predict_round(
    request: RoundPredictionRequestDTO,
    use_case: PredictRoundUseCase = Depends(get_predict_round_use_case),
) -> RoundPredictionsResponseDTO:
    """Predict all fixtures of a round."""
    return use_case.execute(request)

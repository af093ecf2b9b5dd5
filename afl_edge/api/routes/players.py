"""
Players Router

API endpoints for player prop predictions.
"""

from fastapi import APIRouter, Depends

from afl_edge.application.dtos.dtos import PlayerPropsRequestDTO, PlayerPropsResponseDTO
from afl_edge.application.use_cases.use_cases import PlayerPropsUseCase
from afl_edge.api.dependencies import get_player_props_use_case


router = APIRouter(prefix="/players", tags=["Players"])


@router.post(
    "/props",
    response_model=PlayerPropsResponseDTO,
    summary="Player props board",
    description="Top player stat predictions per stat code. Players need at least three observations of a stat.",
)
def get_player_props(
    request: PlayerPropsRequestDTO,
    use_case: PlayerPropsUseCase = Depends(get_player_props_use_case),
) -> PlayerPropsResponseDTO:
    return use_case.execute(request)

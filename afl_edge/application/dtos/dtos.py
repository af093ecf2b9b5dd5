"""
Data Transfer Objects (DTOs) Module

DTOs are used to transfer data between layers and to/from the API.
They use Pydantic for validation and serialization.

Wire names are camelCase (``winProbability``, ``keyFactors``, ...) because the
UI renders them directly; renaming a field is a breaking change.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from afl_edge.domain.entities.entities import (
    CompletedGame,
    MatchResult,
    PlayerStatProfile,
    TeamAggregateStats,
    Venue,
)
from afl_edge.domain.services.statistics_service import StatisticsService
from afl_edge.domain.value_objects.value_objects import ConfidenceTier, TrendDirection
from afl_edge.utils.time_utils import get_current_time


class CamelModel(BaseModel):
    """Base DTO: camelCase on the wire, snake_case in Python, readable from entities."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ============================================================
# Shared DTOs
# ============================================================

class TeamAggregateStatsDTO(CamelModel):
    """Aggregated statistics of one team over its recent completed matches."""
    code: str = Field(..., min_length=1, description="Short team label")
    name: str = Field(..., min_length=1, description="Team name")
    form: list[MatchResult] = Field(
        default_factory=list, max_length=10, description="Results (W/L/D), most recent first"
    )
    h2h_wins: int = Field(default=0, ge=0, alias="h2hWins")
    h2h_played: int = Field(default=0, ge=0, alias="h2hPlayed")
    venue_wins: int = Field(default=0, ge=0)
    venue_played: int = Field(default=0, ge=0)
    avg_score: Optional[float] = Field(default=None, ge=0, description="Points scored per game")
    avg_conceded: Optional[float] = Field(default=None, ge=0, description="Points conceded per game")
    avg_clearances: Optional[float] = Field(default=None, ge=0, description="Clearances per game")
    travelling_interstate: bool = False
    scoring_margin: Optional[float] = Field(default=None, description="avgScore - avgConceded")
    recent_games: int = Field(default=0, ge=0)

    def to_entity(self) -> TeamAggregateStats:
        return TeamAggregateStats(
            code=self.code,
            name=self.name,
            form=list(self.form),
            h2h_wins=self.h2h_wins,
            h2h_played=self.h2h_played,
            venue_wins=self.venue_wins,
            venue_played=self.venue_played,
            avg_score=self.avg_score,
            avg_conceded=self.avg_conceded,
            avg_clearances=self.avg_clearances,
            travelling_interstate=self.travelling_interstate,
            scoring_margin=self.scoring_margin,
            recent_games=self.recent_games,
        )


class VenueDTO(CamelModel):
    """Venue data transfer object."""
    id: str
    name: str
    code: Optional[str] = None

    def to_entity(self) -> Venue:
        return Venue(id=self.id, name=self.name, code=self.code)


# ============================================================
# Request DTOs
# ============================================================

class MatchPredictionRequestDTO(CamelModel):
    """Request for a single match prediction from pre-built aggregates."""
    home: TeamAggregateStatsDTO
    away: TeamAggregateStatsDTO
    venue: Optional[VenueDTO] = None


class RoundPredictionRequestDTO(CamelModel):
    """Request for predictions of a whole round."""
    fixtures: list[MatchPredictionRequestDTO] = Field(..., min_length=1)


class CompletedGameDTO(CamelModel):
    """A game record from an upstream provider."""
    id: str
    home_code: str
    away_code: str
    home_score: int = Field(default=0, ge=0)
    away_score: int = Field(default=0, ge=0)
    venue_code: Optional[str] = None
    home_clearances: Optional[float] = Field(default=None, ge=0)
    away_clearances: Optional[float] = Field(default=None, ge=0)
    complete: bool = True

    def to_entity(self) -> CompletedGame:
        return CompletedGame(
            id=self.id,
            home_code=self.home_code,
            away_code=self.away_code,
            home_score=self.home_score,
            away_score=self.away_score,
            venue_code=self.venue_code,
            home_clearances=self.home_clearances,
            away_clearances=self.away_clearances,
            complete=self.complete,
        )


class GamesPredictionRequestDTO(CamelModel):
    """Request for a match prediction built from raw game records (oldest first)."""
    home_code: str = Field(..., min_length=1)
    away_code: str = Field(..., min_length=1)
    home_name: Optional[str] = None
    away_name: Optional[str] = None
    venue: Optional[VenueDTO] = None
    home_travelling_interstate: bool = False
    away_travelling_interstate: bool = False
    games: list[CompletedGameDTO] = Field(default_factory=list)


class PlayerDTO(CamelModel):
    """A player with raw stat observations (most recent first, null = did not play)."""
    name: str
    code: Optional[str] = None
    squad: Optional[str] = None
    stat_history: dict[str, list[Optional[float]]] = Field(default_factory=dict)

    def to_entity(self, last_n: int = 10) -> PlayerStatProfile:
        return PlayerStatProfile(
            name=self.name,
            code=self.code,
            squad=self.squad,
            stat_history={
                stat_code.upper(): StatisticsService.build_player_stat_history(values, last_n)
                for stat_code, values in self.stat_history.items()
            },
        )


class PlayerPropsRequestDTO(CamelModel):
    """Request for a player props board."""
    players: list[PlayerDTO] = Field(default_factory=list)
    home_code: Optional[str] = None
    away_code: Optional[str] = None
    opponent_defense: dict[str, dict[str, float]] = Field(
        default_factory=dict,
        description="Average conceded per stat code, keyed by the conceding team's code",
    )

    def defense_by_team(self) -> dict[str, dict[str, float]]:
        """Opponent defense with normalized team codes and upper-case stat codes."""
        return {
            StatisticsService.normalize_code(team_code): {
                stat_code.upper(): value for stat_code, value in stats.items()
            }
            for team_code, stats in self.opponent_defense.items()
        }


# ============================================================
# Response DTOs
# ============================================================

class FactorDTO(CamelModel):
    """One row of the scoring breakdown."""
    name: str
    weight: float = Field(..., ge=0, le=1)
    home_edge: float = Field(..., ge=0, le=1)
    away_edge: float = Field(..., ge=0, le=1)
    advantage_code: str


class TeamForecastDTO(CamelModel):
    """Forecast for one side of a fixture."""
    team: TeamAggregateStatsDTO
    win_probability: float = Field(..., ge=0, le=100)
    predicted_score: int = Field(..., ge=0)


class MatchPredictionDTO(CamelModel):
    """Prediction data transfer object."""
    home: TeamForecastDTO
    away: TeamForecastDTO
    predicted_winner: str
    predicted_margin: int = Field(..., ge=0)
    confidence: ConfidenceTier
    key_factors: list[FactorDTO] = Field(default_factory=list)
    venue: Optional[VenueDTO] = None


class LineAssessmentDTO(CamelModel):
    """Line market lean."""
    predicted_winner: str
    predicted_margin: int
    recommendation: str


class MatchPredictionResponseDTO(CamelModel):
    """Combined prediction and line assessment."""
    prediction: MatchPredictionDTO
    line_assessment: LineAssessmentDTO
    generated_at: datetime = Field(default_factory=get_current_time)


class RoundPredictionsResponseDTO(CamelModel):
    """Response containing the predictions of a round, in request order."""
    count: int
    predictions: list[MatchPredictionResponseDTO]
    generated_at: datetime = Field(default_factory=get_current_time)


class PlayerPropPredictionDTO(CamelModel):
    """Player prop prediction data transfer object."""
    player: str
    player_code: Optional[str] = None
    squad: Optional[str] = None
    stat_code: str
    predicted: float
    weighted_avg: float
    season_avg: float
    confidence_tier: ConfidenceTier
    last5: list[float]
    trend_direction: TrendDirection


class PlayerPropsResponseDTO(CamelModel):
    """Top player props grouped by stat code."""
    player_props: dict[str, list[PlayerPropPredictionDTO]]
    total_predictions: int


class HealthResponseDTO(CamelModel):
    """Health check response."""
    status: str = "healthy"
    version: str = "1.0.0"
    timestamp: datetime = Field(default_factory=get_current_time)


class ErrorResponseDTO(CamelModel):
    """Error response."""
    error: str
    message: str
    details: Optional[dict] = None

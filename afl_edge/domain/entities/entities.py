"""
Domain Entities Module

This module contains the core domain entities for the AFL prediction engine.
These entities represent the core business concepts and are independent of any infrastructure.
All of them are request-scoped: built from upstream aggregates right before a
prediction call and discarded afterwards.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from afl_edge.domain.value_objects.value_objects import ConfidenceTier, TrendDirection


class MatchResult(str, Enum):
    """Result of a completed match from one team's point of view."""
    WIN = "W"
    LOSS = "L"
    DRAW = "D"


@dataclass(frozen=True)
class Venue:
    """
    Represents the ground a fixture is played at.

    Passed through to the output only; the engine never uses it numerically.
    """
    id: str
    name: str
    code: Optional[str] = None


@dataclass
class TeamAggregateStats:
    """
    Pre-aggregated statistics for one team over its last N completed matches.

    Attributes:
        code: Short team label (e.g. "SYD")
        name: Full team name
        form: Recent results, most recent first (0-10 entries)
        h2h_wins: Wins against this opponent in recent meetings
        h2h_played: Recent meetings against this opponent
        venue_wins: Wins at the fixture venue
        venue_played: Matches played at the fixture venue
        avg_score: Points scored per game (None = unknown)
        avg_conceded: Points conceded per game (None = unknown)
        avg_clearances: Clearances per game, possession proxy (None = unknown)
        travelling_interstate: True if the team is not playing in its home region
        scoring_margin: avg_score - avg_conceded, derived when not supplied
        recent_games: Number of completed matches the aggregate covers
    """
    code: str
    name: str
    form: list[MatchResult] = field(default_factory=list)
    h2h_wins: int = 0
    h2h_played: int = 0
    venue_wins: int = 0
    venue_played: int = 0
    avg_score: Optional[float] = None
    avg_conceded: Optional[float] = None
    avg_clearances: Optional[float] = None
    travelling_interstate: bool = False
    scoring_margin: Optional[float] = None
    recent_games: int = 0

    def __post_init__(self):
        if self.scoring_margin is None:
            self.scoring_margin = round((self.avg_score or 0.0) - (self.avg_conceded or 0.0), 1)


@dataclass(frozen=True)
class Factor:
    """One row of the explanatory scoring breakdown."""
    name: str
    weight: float
    home_edge: float
    away_edge: float
    advantage_code: str


@dataclass(frozen=True)
class TeamForecast:
    """Forecast for one side of a fixture."""
    team: TeamAggregateStats
    win_probability: float  # percentage 0-100, one decimal
    predicted_score: int


@dataclass
class MatchPrediction:
    """
    Full forecast for a fixture.

    Attributes:
        home: Home side forecast
        away: Away side forecast
        predicted_winner: Code of the team with the higher win probability
        predicted_margin: Absolute difference of the predicted scores
        confidence: Qualitative tier for the dominant side
        key_factors: Scoring breakdown in canonical factor order
        venue: Venue echo
    """
    home: TeamForecast
    away: TeamForecast
    predicted_winner: str
    predicted_margin: int
    confidence: ConfidenceTier
    key_factors: list[Factor] = field(default_factory=list)
    venue: Optional[Venue] = None

    def __post_init__(self):
        total = self.home.win_probability + self.away.win_probability
        if abs(total - 100.0) > 0.05:
            raise ValueError(f"Win probabilities must sum to 100, got {total}")


@dataclass(frozen=True)
class LineAssessment:
    """Qualitative lean on the line (handicap) market."""
    predicted_winner: str
    predicted_margin: int
    recommendation: str


@dataclass
class PlayerPropPrediction:
    """
    Forecast of a single player's statistic for an upcoming fixture.

    Attributes:
        player: Player display name
        player_code: Provider identifier of the player
        stat_code: Statistic category (e.g. "DISPOSAL")
        predicted: Forecast value
        weighted_avg: Recency-weighted average of the recent window
        season_avg: Unweighted mean of the full history
        confidence_tier: Tier derived from the recent window's variability
        last5: Echo of the recent window, most recent first
        trend_direction: Most recent observation against the season average
        squad: Team code the player belongs to
    """
    player: str
    stat_code: str
    predicted: float
    weighted_avg: float
    season_avg: float
    confidence_tier: ConfidenceTier
    last5: list[float]
    trend_direction: TrendDirection
    player_code: Optional[str] = None
    squad: Optional[str] = None


@dataclass
class PlayerStatProfile:
    """A player's stat histories keyed by stat code, most recent first."""
    name: str
    code: Optional[str] = None
    squad: Optional[str] = None
    stat_history: dict[str, list[float]] = field(default_factory=dict)


@dataclass(frozen=True)
class CompletedGame:
    """
    A finished (or scheduled) match as reported by an upstream provider.

    Used to build team aggregates; scores are in points.
    """
    id: str
    home_code: str
    away_code: str
    home_score: int = 0
    away_score: int = 0
    venue_code: Optional[str] = None
    home_clearances: Optional[float] = None
    away_clearances: Optional[float] = None
    complete: bool = True

    def is_home(self, team_code: str) -> bool:
        return self.home_code == team_code

    def score_for(self, team_code: str) -> int:
        return self.home_score if self.is_home(team_code) else self.away_score

    def score_against(self, team_code: str) -> int:
        return self.away_score if self.is_home(team_code) else self.home_score

    def clearances_for(self, team_code: str) -> Optional[float]:
        return self.home_clearances if self.is_home(team_code) else self.away_clearances

    def result_for(self, team_code: str) -> MatchResult:
        """Get the game result from the team's point of view."""
        scored = self.score_for(team_code)
        against = self.score_against(team_code)
        if scored > against:
            return MatchResult.WIN
        elif scored < against:
            return MatchResult.LOSS
        return MatchResult.DRAW

"""
Statistics Domain Service

Handles calculation of team aggregates, head-to-head and venue records,
and player stat histories from completed game records.
"""

from typing import Optional, Sequence

from afl_edge.domain.entities.entities import CompletedGame, MatchResult, TeamAggregateStats
from afl_edge.domain.value_objects.value_objects import EngineConfig, DEFAULT_ENGINE_CONFIG


class StatisticsService:
    def __init__(self, config: EngineConfig = DEFAULT_ENGINE_CONFIG):
        self.config = config

    @staticmethod
    def normalize_code(code: str) -> str:
        """Normalize a team code for comparison."""
        return (code or "").strip().upper()

    @classmethod
    def _team_games(
        cls,
        team_code: str,
        games: Sequence[CompletedGame],
    ) -> tuple[str, list[CompletedGame]]:
        """Resolve the code as spelled in the games and keep completed games involving the team."""
        wanted = cls.normalize_code(team_code)
        resolved = team_code
        team_games = []
        for game in games:
            if not game.complete:
                continue
            if cls.normalize_code(game.home_code) == wanted:
                resolved = game.home_code
            elif cls.normalize_code(game.away_code) == wanted:
                resolved = game.away_code
            else:
                continue
            team_games.append(game)
        return resolved, team_games

    def clearance_proxy(self, avg_score: float, avg_conceded: float) -> float:
        """
        Estimate clearances from scoring flow for providers without clearance data.

        A team with an even scoring margin sits at the league average.
        """
        return round((avg_score - avg_conceded) / 3 + self.config.league_avg_clearances, 1)

    def build_team_stats(
        self,
        team_code: str,
        games: Sequence[CompletedGame],
        last_n: int = 6,
        name: Optional[str] = None,
    ) -> Optional[TeamAggregateStats]:
        """
        Aggregate a team's last N completed games.

        Args:
            team_code: Code of the team
            games: Game records in chronological order (oldest first)
            last_n: How many recent games to use
            name: Display name of the team (defaults to the code)

        Returns:
            TeamAggregateStats, or None if the team has no completed games.
            Head-to-head, venue and travel fields are left at their defaults.
        """
        code, team_games = self._team_games(team_code, games)
        team_games = team_games[-last_n:] if last_n > 0 else []
        if not team_games:
            return None

        scores = [g.score_for(code) for g in team_games]
        conceded = [g.score_against(code) for g in team_games]
        form = [g.result_for(code) for g in reversed(team_games)]

        avg_score = sum(scores) / len(scores)
        avg_conceded = sum(conceded) / len(conceded)

        clearances = [g.clearances_for(code) for g in team_games]
        if any(c is not None for c in clearances):
            # Games without clearance data count as a league-average game
            per_game = [c if c is not None else self.config.league_avg_clearances for c in clearances]
            avg_clearances = round(sum(per_game) / len(per_game), 1)
        else:
            avg_clearances = self.clearance_proxy(avg_score, avg_conceded)

        return TeamAggregateStats(
            code=code,
            name=name or code,
            form=form,
            avg_score=round(avg_score, 1),
            avg_conceded=round(avg_conceded, 1),
            avg_clearances=avg_clearances,
            scoring_margin=round(avg_score - avg_conceded, 1),
            recent_games=len(team_games),
        )

    @classmethod
    def calc_h2h(
        cls,
        team_code: str,
        opponent_code: str,
        games: Sequence[CompletedGame],
        last_n: int = 10,
    ) -> tuple[int, int]:
        """
        Head-to-head record of a team against an opponent.

        Returns:
            Tuple of (wins, played) over the last N meetings
        """
        code, team_games = cls._team_games(team_code, games)
        opponent = cls.normalize_code(opponent_code)
        meetings = [
            g for g in team_games
            if opponent in (cls.normalize_code(g.home_code), cls.normalize_code(g.away_code))
        ]
        meetings = meetings[-last_n:] if last_n > 0 else []
        wins = sum(1 for g in meetings if g.result_for(code) == MatchResult.WIN)
        return wins, len(meetings)

    @classmethod
    def calc_venue_record(
        cls,
        team_code: str,
        venue_code: str,
        games: Sequence[CompletedGame],
    ) -> tuple[int, int]:
        """
        Record of a team at a venue.

        Returns:
            Tuple of (wins, played)
        """
        code, team_games = cls._team_games(team_code, games)
        venue = cls.normalize_code(venue_code)
        at_venue = [g for g in team_games if g.venue_code and cls.normalize_code(g.venue_code) == venue]
        wins = sum(1 for g in at_venue if g.result_for(code) == MatchResult.WIN)
        return wins, len(at_venue)

    @staticmethod
    def build_player_stat_history(
        observations: Sequence[Optional[float]],
        last_n: int = 10,
    ) -> list[float]:
        """
        Clean a player's stat observations (most recent first).

        Games the player missed come through as None and are dropped.
        """
        history = [float(v) for v in observations if v is not None]
        return history[:last_n]

"""
Shared fixtures: a strong home side hosting a weaker travelling side, and a
small season of completed games.
"""

import pytest

from afl_edge.domain.entities.entities import (
    CompletedGame,
    MatchResult,
    TeamAggregateStats,
    Venue,
)

W, L, D = MatchResult.WIN, MatchResult.LOSS, MatchResult.DRAW


@pytest.fixture
def strong_home():
    """Home side in good form, at its own ground."""
    return TeamAggregateStats(
        code="SYD",
        name="Sydney",
        form=[W, W, W, L, W],
        h2h_wins=7,
        h2h_played=10,
        venue_wins=7,
        venue_played=9,
        avg_score=96.2,
        avg_conceded=74.8,
        avg_clearances=38.4,
        travelling_interstate=False,
    )


@pytest.fixture
def weak_away():
    """Travelling side with weaker form and a negative margin."""
    return TeamAggregateStats(
        code="WCE",
        name="West Coast",
        form=[L, W, L, L, D],
        h2h_wins=3,
        h2h_played=10,
        venue_wins=2,
        venue_played=8,
        avg_score=80.0,
        avg_conceded=85.0,
        avg_clearances=32.0,
        travelling_interstate=True,
    )


@pytest.fixture
def venue():
    return Venue(id="scg", name="Sydney Cricket Ground", code="SCG")


@pytest.fixture
def season_games():
    """Completed games, oldest first, plus one fixture still to be played."""
    return [
        CompletedGame(id="1", home_code="SYD", away_code="WCE", home_score=90, away_score=70,
                      venue_code="SCG", home_clearances=40, away_clearances=30),
        CompletedGame(id="2", home_code="COL", away_code="SYD", home_score=80, away_score=85,
                      venue_code="MCG"),
        CompletedGame(id="3", home_code="SYD", away_code="COL", home_score=60, away_score=75,
                      venue_code="SCG"),
        CompletedGame(id="4", home_code="WCE", away_code="SYD", home_score=100, away_score=100,
                      venue_code="OPT"),
        CompletedGame(id="5", home_code="SYD", away_code="WCE", home_score=95, away_score=65,
                      venue_code="SCG"),
        CompletedGame(id="6", home_code="SYD", away_code="COL", venue_code="SCG", complete=False),
    ]

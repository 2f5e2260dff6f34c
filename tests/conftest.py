"""Shared fixtures for the draft room test suite."""

import pytest

from draftroom.models import League, Player, Tournament
from draftroom.services.draft_engine import DraftOrchestrator


# ------------------------------------------------------------------
# Catalog
# ------------------------------------------------------------------

@pytest.fixture
def tournament(db):
    return Tournament.objects.create(name="T20 World Cup 2026", short_name="T20WC")


@pytest.fixture
def players(tournament):
    """Twelve players across the four playing roles."""
    roles = ["batter", "bowler", "allrounder", "keeper"]
    return [
        Player.objects.create(
            tournament=tournament,
            name=f"Player {i}",
            team="IND" if i % 2 else "AUS",
            role=roles[i % len(roles)],
        )
        for i in range(1, 13)
    ]


# ------------------------------------------------------------------
# Leagues + teams
# ------------------------------------------------------------------

@pytest.fixture
def engine():
    return DraftOrchestrator()


@pytest.fixture
def make_league(tournament):
    def _make(**overrides):
        defaults = {
            "name": "Office League",
            "tournament": tournament,
            "draft_type": League.SNAKE,
            "max_teams": 4,
            "roster_size": 2,
        }
        defaults.update(overrides)
        return League.objects.create(**defaults)

    return _make


@pytest.fixture
def make_teams(engine):
    def _make(league, names):
        return [engine.join_league(league.id, name=n, owner_name=f"Owner {n}") for n in names]

    return _make


@pytest.fixture
def abc_league(make_league, make_teams):
    """Teams A, B, C in a full 3-seat snake league, two rounds."""
    league = make_league(max_teams=3, roster_size=2)
    a, b, c = make_teams(league, ["A", "B", "C"])
    return league, a, b, c


@pytest.fixture
def started_abc(abc_league, engine):
    league, a, b, c = abc_league
    engine.start_draft(league.id)
    return league, a, b, c

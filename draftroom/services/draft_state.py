# draftroom/services/draft_state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Optional, Sequence

from django.db import DEFAULT_DB_ALIAS
from django.utils import timezone

from draftroom.exceptions import AlreadyStarted, DraftNotActive, InvalidTransition
from draftroom.models import DraftPick, League, RosterEntry, TurnAssignment
from draftroom.services.draft_order import TurnSlot, generate_turn_order

ALLOWED_TRANSITIONS: Dict[str, FrozenSet[str]] = {
    League.PENDING: frozenset({League.ACTIVE}),
    League.ACTIVE: frozenset({League.COMPLETED, League.PENDING}),
    League.COMPLETED: frozenset({League.PENDING}),
}

# status + cursor are always saved as one unit
CURSOR_FIELDS = [
    "draft_status",
    "current_round",
    "current_pick_in_round",
    "current_pick",
    "started_at",
    "completed_at",
]


@dataclass(frozen=True)
class DraftCursor:
    """Where a league's draft stands right now."""
    round_number: int
    pick_in_round: int
    overall_pick: int  # picks made so far
    on_clock_pick: Optional[int] = None
    on_clock_team_id: Optional[int] = None


def _transition(league: League, target: str) -> None:
    if target not in ALLOWED_TRANSITIONS.get(league.draft_status, frozenset()):
        raise InvalidTransition(f"Cannot move draft from {league.draft_status} to {target}.")
    league.draft_status = target


def require_status(league: League, *allowed: str) -> None:
    if league.draft_status not in allowed:
        raise DraftNotActive(f"Draft is {league.draft_status.lower()}.")


def activate(league: League, team_ids: Sequence[int], *, using: str = DEFAULT_DB_ALIAS) -> List[TurnSlot]:
    """
    PENDING -> ACTIVE: generate the order, store it, put pick 1 on the clock.
    """
    if league.draft_status != League.PENDING:
        raise AlreadyStarted(f"Draft is already {league.draft_status.lower()}.")

    slots = generate_turn_order(
        team_ids=team_ids,
        max_teams=league.max_teams,
        roster_size=league.roster_size,
        draft_type=league.draft_type,
    )

    TurnAssignment.objects.using(using).bulk_create(
        [
            TurnAssignment(
                league=league,
                round_number=s.round_number,
                pick_in_round=s.pick_in_round,
                overall_pick=s.overall_pick,
                team_id=s.team_id,
            )
            for s in slots
        ],
        batch_size=500,
    )

    _transition(league, League.ACTIVE)
    first = slots[0]
    league.current_round = first.round_number
    league.current_pick_in_round = first.pick_in_round
    league.current_pick = 0
    league.started_at = timezone.now()
    league.completed_at = None
    league.save(using=using, update_fields=CURSOR_FIELDS)
    return slots


def turn_on_clock(league: League, *, using: str = DEFAULT_DB_ALIAS) -> TurnAssignment:
    require_status(league, League.ACTIVE)
    return TurnAssignment.objects.using(using).get(
        league=league,
        overall_pick=league.current_pick + 1,
    )


def current_cursor(league: League, *, using: str = DEFAULT_DB_ALIAS) -> DraftCursor:
    if league.draft_status != League.ACTIVE:
        return DraftCursor(
            round_number=league.current_round,
            pick_in_round=league.current_pick_in_round,
            overall_pick=league.current_pick,
        )

    turn = turn_on_clock(league, using=using)
    return DraftCursor(
        round_number=turn.round_number,
        pick_in_round=turn.pick_in_round,
        overall_pick=league.current_pick,
        on_clock_pick=turn.overall_pick,
        on_clock_team_id=turn.team_id,
    )


def cursor_from_order(league: League, order: Sequence[TurnSlot]) -> DraftCursor:
    """
    Same cursor as current_cursor(), but read off an order the caller already
    fetched. An ACTIVE league whose order has gone missing (a reset landed
    between the two reads) just has nobody on the clock.
    """
    idle = DraftCursor(
        round_number=league.current_round,
        pick_in_round=league.current_pick_in_round,
        overall_pick=league.current_pick,
    )
    if league.draft_status != League.ACTIVE or league.current_pick >= len(order):
        return idle

    turn = order[league.current_pick]
    if turn.overall_pick != league.current_pick + 1:
        return idle
    return DraftCursor(
        round_number=turn.round_number,
        pick_in_round=turn.pick_in_round,
        overall_pick=league.current_pick,
        on_clock_pick=turn.overall_pick,
        on_clock_team_id=turn.team_id,
    )


def advance(league: League, *, using: str = DEFAULT_DB_ALIAS) -> DraftCursor:
    """
    Called after a pick lands: next turn on the clock, or COMPLETED after
    the last one.
    """
    require_status(league, League.ACTIVE)
    league.current_pick += 1

    next_turn = (
        TurnAssignment.objects.using(using)
        .filter(league=league, overall_pick=league.current_pick + 1)
        .first()
    )
    if next_turn is None:
        _transition(league, League.COMPLETED)
        league.completed_at = timezone.now()
    else:
        league.current_round = next_turn.round_number
        league.current_pick_in_round = next_turn.pick_in_round

    league.save(using=using, update_fields=CURSOR_FIELDS)
    return current_cursor(league, using=using)


def rewind(league: League, *, using: str = DEFAULT_DB_ALIAS) -> bool:
    """
    ACTIVE/COMPLETED -> PENDING. Wipes order, picks and roster entries.
    Returns False when the league was already pending (nothing to do).
    """
    if league.draft_status == League.PENDING:
        return False

    RosterEntry.objects.using(using).filter(team__league=league).delete()
    DraftPick.objects.using(using).filter(league=league).delete()
    TurnAssignment.objects.using(using).filter(league=league).delete()

    _transition(league, League.PENDING)
    league.current_round = 1
    league.current_pick_in_round = 1
    league.current_pick = 0
    league.started_at = None
    league.completed_at = None
    league.save(using=using, update_fields=CURSOR_FIELDS)
    return True

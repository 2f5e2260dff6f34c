# draftroom/services/pick_admission.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from django.db import DEFAULT_DB_ALIAS
from django.utils import timezone

from draftroom.exceptions import NotFound, OutOfTurn, PlayerAlreadyDrafted
from draftroom.models import DraftPick, FantasyTeam, League, Player, RosterEntry
from draftroom.services import draft_state
from draftroom.services.draft_state import DraftCursor
from draftroom.services.roster import normalize_slot, roster_entry_for_pick


@dataclass(frozen=True)
class Admission:
    pick: DraftPick
    roster_entry: RosterEntry
    next_cursor: DraftCursor


def _validate_player_available(league: League, player: Player, *, using: str) -> None:
    # Player cannot be picked twice in the same league
    if DraftPick.objects.using(using).filter(league=league, player=player).exists():
        raise PlayerAlreadyDrafted(f"{player.name} has already been drafted in this league.")


def admit_pick(
    *,
    league: League,
    team_id: int,
    player_id: int,
    slot: Optional[str] = None,
    using: str = DEFAULT_DB_ALIAS,
) -> Admission:
    """
    Validate one pick attempt against the league's current turn, then
    record pick + roster row and move the clock.

    The caller must hold the league row lock and run this inside one
    transaction; every check happens before the first write, so a failed
    check leaves nothing behind.
    """
    draft_state.require_status(league, League.ACTIVE)

    if not FantasyTeam.objects.using(using).filter(pk=team_id, league=league).exists():
        raise NotFound(f"Team {team_id} is not part of this league.")

    slot = normalize_slot(slot)

    turn = draft_state.turn_on_clock(league, using=using)
    if turn.team_id != team_id:
        raise OutOfTurn(
            f"Pick #{turn.overall_pick} belongs to team {turn.team_id}, not team {team_id}."
        )

    try:
        player = Player.objects.using(using).get(pk=player_id, tournament_id=league.tournament_id)
    except Player.DoesNotExist:
        raise NotFound(f"Player {player_id} is not in this league's player pool.")

    _validate_player_available(league, player, using=using)

    pick = DraftPick.objects.using(using).create(
        league=league,
        team_id=turn.team_id,
        player=player,
        round_number=turn.round_number,
        pick_in_round=turn.pick_in_round,
        overall_pick=turn.overall_pick,
        made_at=timezone.now(),
    )

    entry = roster_entry_for_pick(pick, slot)
    entry.save(using=using)

    next_cursor = draft_state.advance(league, using=using)
    return Admission(pick=pick, roster_entry=entry, next_cursor=next_cursor)

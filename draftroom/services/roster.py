# draftroom/services/roster.py

from __future__ import annotations

from typing import List, Optional

from draftroom.exceptions import InvalidConfiguration
from draftroom.models import DraftPick, FantasyTeam, RosterEntry

DEFAULT_SLOT = "flex"
SLOT_MAX_LENGTH = RosterEntry._meta.get_field("slot").max_length


def normalize_slot(slot: Optional[str] = None) -> str:
    label = (slot or "").strip() or DEFAULT_SLOT
    if len(label) > SLOT_MAX_LENGTH:
        raise InvalidConfiguration(f"Roster slot label must be at most {SLOT_MAX_LENGTH} characters.")
    return label


def roster_entry_for_pick(pick: DraftPick, slot: Optional[str] = None) -> RosterEntry:
    """
    Unsaved roster row mirroring a pick. The slot is only a label; whether
    the player can actually fill it is not checked here.
    """
    return RosterEntry(
        team_id=pick.team_id,
        player_id=pick.player_id,
        slot=normalize_slot(slot),
        acquired_via=RosterEntry.DRAFT,
        acquired_at=pick.made_at,
        pick=pick,
    )


def team_roster(team: FantasyTeam, *, using: Optional[str] = None) -> List[RosterEntry]:
    qs = RosterEntry.objects.filter(team=team)
    if using:
        qs = qs.using(using)
    return list(qs.select_related("player", "pick").order_by("acquired_at", "id"))

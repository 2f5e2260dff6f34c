# draftroom/services/draft_order.py

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from draftroom.exceptions import InvalidConfiguration
from draftroom.models import League


@dataclass(frozen=True)
class TurnSlot:
    """One entry of the generated pick order."""
    round_number: int
    pick_in_round: int  # 1..team_count
    overall_pick: int   # 1..team_count * roster_size, no gaps
    team_id: int


def teams_for_round(base_order: Sequence[int], round_number: int, *, draft_type: str) -> List[int]:
    """
    SNAKE: odd rounds base, even rounds reversed
    LINEAR: every round base
    """
    if draft_type == League.LINEAR or round_number % 2 == 1:
        return list(base_order)
    return list(reversed(base_order))


def generate_turn_order(
    *,
    team_ids: Sequence[int],
    max_teams: int,
    roster_size: int,
    draft_type: str,
) -> List[TurnSlot]:
    """
    Builds the full pick order for a league, round-major.

    team_ids is the round-1 order. A league that is not full is allowed;
    empty seats simply never appear in the order. Same input, same output.
    """
    if draft_type not in (League.SNAKE, League.LINEAR):
        raise InvalidConfiguration(f"Unknown draft type: {draft_type!r}.")
    if max_teams < 2:
        raise InvalidConfiguration("A league needs at least 2 seats.")
    if roster_size < 1:
        raise InvalidConfiguration("Roster size must be >= 1.")
    if len(team_ids) < 2:
        raise InvalidConfiguration("Need at least 2 teams in the league to run a draft.")
    if len(team_ids) > max_teams:
        raise InvalidConfiguration(
            f"League has {len(team_ids)} teams but only {max_teams} seats."
        )
    if len(set(team_ids)) != len(team_ids):
        raise InvalidConfiguration("A team can only hold one seat in the draft order.")

    slots: List[TurnSlot] = []
    overall = 1

    for round_number in range(1, roster_size + 1):
        for pick_in_round, team_id in enumerate(
            teams_for_round(team_ids, round_number, draft_type=draft_type), start=1
        ):
            slots.append(
                TurnSlot(
                    round_number=round_number,
                    pick_in_round=pick_in_round,
                    overall_pick=overall,
                    team_id=team_id,
                )
            )
            overall += 1

    return slots

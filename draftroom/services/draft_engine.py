# draftroom/services/draft_engine.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from django.db import DEFAULT_DB_ALIAS, IntegrityError, transaction
from django.db.models import Max

from draftroom.exceptions import (
    AlreadyStarted,
    DraftError,
    InvalidConfiguration,
    LeagueFull,
    NotFound,
    OutOfTurn,
    PlayerAlreadyDrafted,
)
from draftroom.models import DraftPick, FantasyTeam, League, Player, RosterEntry, TurnAssignment
from draftroom.services import draft_state, pick_admission
from draftroom.services.draft_order import TurnSlot
from draftroom.services.draft_state import DraftCursor
from draftroom.services.roster import team_roster

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DraftSnapshot:
    league_id: int
    status: str
    draft_type: str
    order: List[TurnSlot]
    cursor: DraftCursor
    picks: List[DraftPick]
    roster_entry_count: int


@dataclass(frozen=True)
class PickResult:
    pick: DraftPick
    roster_entry: RosterEntry
    next_cursor: DraftCursor
    status: str


class DraftOrchestrator:
    """
    Entry point for everything that reads or changes a league's draft.

    Handles:
    - starting a draft (order generated once, stored as TurnAssignment rows)
    - admitting picks in strict turn order
    - resetting a draft back to pending
    - seating teams before the draft starts

    Every mutating call runs in one transaction on `using` and locks the
    league row first, so two requests against the same league are applied
    one after the other while different leagues never wait on each other.
    """

    def __init__(self, using: str = DEFAULT_DB_ALIAS):
        self.using = using

    # ================================================================
    # Lookups
    # ================================================================

    def _get_league(self, league_id: int) -> League:
        try:
            return League.objects.using(self.using).get(pk=league_id)
        except League.DoesNotExist:
            raise NotFound(f"League id={league_id} not found.")

    def _lock_league(self, league_id: int) -> League:
        # must be called inside transaction.atomic
        try:
            return League.objects.using(self.using).select_for_update().get(pk=league_id)
        except League.DoesNotExist:
            raise NotFound(f"League id={league_id} not found.")

    def _team_ids(self, league: League) -> List[int]:
        return list(
            FantasyTeam.objects.using(self.using)
            .filter(league=league)
            .order_by("draft_position", "id")
            .values_list("id", flat=True)
        )

    # ================================================================
    # Draft lifecycle
    # ================================================================

    def start_draft(self, league_id: int, draft_type: Optional[str] = None) -> DraftSnapshot:
        with transaction.atomic(using=self.using):
            league = self._lock_league(league_id)
            if draft_type is not None and draft_type != league.draft_type:
                if draft_type not in (League.SNAKE, League.LINEAR):
                    raise InvalidConfiguration(f"Unknown draft type {draft_type!r}.")
                if league.draft_status != League.PENDING:
                    raise AlreadyStarted("Draft type is fixed once the draft has started.")
                league.draft_type = draft_type
                league.save(using=self.using, update_fields=["draft_type"])
            slots = draft_state.activate(league, self._team_ids(league), using=self.using)

        logger.info(
            "Draft started for league %s: %s, %d picks",
            league_id, league.draft_type, len(slots),
        )
        return self.get_draft_state(league_id)

    def submit_pick(
        self,
        league_id: int,
        team_id: int,
        player_id: int,
        slot: Optional[str] = None,
    ) -> PickResult:
        try:
            with transaction.atomic(using=self.using):
                league = self._lock_league(league_id)
                admission = pick_admission.admit_pick(
                    league=league,
                    team_id=team_id,
                    player_id=player_id,
                    slot=slot,
                    using=self.using,
                )
        except IntegrityError as exc:
            # the storage constraints caught what the checks above should have
            error = self._conflict_error(league_id, player_id)
            logger.warning(
                "Pick rejected by storage constraint in league %s (team %s, player %s): %s",
                league_id, team_id, player_id, exc,
            )
            raise error from exc
        except DraftError as exc:
            logger.warning(
                "Pick rejected in league %s (team %s, player %s): %s",
                league_id, team_id, player_id, exc.code,
            )
            raise

        pick = admission.pick
        logger.info(
            "League %s pick #%d (round %d, pick %d): team %s took player %s",
            league_id, pick.overall_pick, pick.round_number, pick.pick_in_round,
            pick.team_id, pick.player_id,
        )
        if league.draft_status == League.COMPLETED:
            logger.info("Draft completed for league %s after %d picks", league_id, league.current_pick)

        return PickResult(
            pick=pick,
            roster_entry=admission.roster_entry,
            next_cursor=admission.next_cursor,
            status=league.draft_status,
        )

    def _conflict_error(self, league_id: int, player_id: int) -> DraftError:
        taken = DraftPick.objects.using(self.using).filter(league_id=league_id, player_id=player_id).exists()
        if taken:
            return PlayerAlreadyDrafted("Player has already been drafted in this league.")
        return OutOfTurn("That pick has already been made. Refresh the draft state.")

    def reset_draft(self, league_id: int) -> DraftSnapshot:
        with transaction.atomic(using=self.using):
            league = self._lock_league(league_id)
            picks_made = league.current_pick
            changed = draft_state.rewind(league, using=self.using)

        if changed:
            logger.info("Draft reset for league %s (%d picks discarded)", league_id, picks_made)
        return self.get_draft_state(league_id)

    def get_draft_state(self, league_id: int) -> DraftSnapshot:
        with transaction.atomic(using=self.using):
            league = self._get_league(league_id)

            order = [
                TurnSlot(
                    round_number=t.round_number,
                    pick_in_round=t.pick_in_round,
                    overall_pick=t.overall_pick,
                    team_id=t.team_id,
                )
                for t in TurnAssignment.objects.using(self.using).filter(league=league).order_by("overall_pick")
            ]
            picks = self.list_picks(league.id)
            roster_entry_count = RosterEntry.objects.using(self.using).filter(team__league=league).count()

        # cursor comes from the order read above, never from a second lookup
        return DraftSnapshot(
            league_id=league.id,
            status=league.draft_status,
            draft_type=league.draft_type,
            order=order,
            cursor=draft_state.cursor_from_order(league, order),
            picks=picks,
            roster_entry_count=roster_entry_count,
        )

    def list_picks(self, league_id: int) -> List[DraftPick]:
        return list(
            DraftPick.objects.using(self.using)
            .filter(league_id=league_id)
            .select_related("team", "player")
            .order_by("overall_pick")
        )

    def available_players(
        self,
        league_id: int,
        *,
        role: Optional[str] = None,
        query: Optional[str] = None,
    ) -> List[Player]:
        """
        Players of the league's tournament nobody in the league has drafted yet.
        """
        league = self._get_league(league_id)

        players = (
            Player.objects.using(self.using)
            .filter(tournament_id=league.tournament_id, is_active=True)
            .exclude(draft_picks__league=league)
        )
        if role:
            players = players.filter(role=role)
        if query:
            players = players.filter(name__icontains=query)
        return list(players.order_by("name", "id"))

    # ================================================================
    # Seating (before the draft)
    # ================================================================

    def join_league(self, league_id: int, *, name: str, owner_name: str) -> FantasyTeam:
        """
        Add a team to a pending league. It takes the next free seat.
        """
        with transaction.atomic(using=self.using):
            league = self._lock_league(league_id)
            if league.draft_status != League.PENDING:
                raise AlreadyStarted("Teams cannot join once the draft has started.")

            teams = FantasyTeam.objects.using(self.using).filter(league=league)
            if teams.count() >= league.max_teams:
                raise LeagueFull(f"League already has {league.max_teams} teams.")

            last = teams.aggregate(last=Max("draft_position"))["last"] or 0
            team = FantasyTeam.objects.using(self.using).create(
                league=league,
                name=name,
                owner_name=owner_name,
                draft_position=last + 1,
            )

        logger.info("Team %s joined league %s at seat %d", team.id, league_id, team.draft_position)
        return team

    def set_draft_positions(self, league_id: int, team_ids: Sequence[int]) -> List[FantasyTeam]:
        """
        Commissioner sets the exact round-1 order.

        team_ids = [3, 1, 5, 2, ...]
        """
        with transaction.atomic(using=self.using):
            league = self._lock_league(league_id)
            if league.draft_status != League.PENDING:
                raise AlreadyStarted("Draft order is fixed once the draft has started.")

            teams = {t.id: t for t in FantasyTeam.objects.using(self.using).filter(league=league)}
            if not teams:
                raise InvalidConfiguration("League has no teams to seat.")
            if len(set(team_ids)) != len(team_ids) or set(team_ids) != set(teams):
                raise InvalidConfiguration("Draft order must list every team in the league exactly once.")

            # two passes so the (league, draft_position) constraint never sees a clash
            offset = max(t.draft_position for t in teams.values()) + len(teams)
            for t in teams.values():
                t.draft_position += offset
            FantasyTeam.objects.using(self.using).bulk_update(list(teams.values()), ["draft_position"])

            ordered = [teams[team_id] for team_id in team_ids]
            for position, team in enumerate(ordered, start=1):
                team.draft_position = position
            FantasyTeam.objects.using(self.using).bulk_update(ordered, ["draft_position"])

        logger.info("Draft order set for league %s: %s", league_id, list(team_ids))
        return ordered

    def roster_for_team(self, team_id: int) -> List[RosterEntry]:
        try:
            team = FantasyTeam.objects.using(self.using).get(pk=team_id)
        except FantasyTeam.DoesNotExist:
            raise NotFound(f"Team id={team_id} not found.")
        return team_roster(team, using=self.using)

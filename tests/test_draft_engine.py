"""Tests for the draft orchestrator - start, pick admission, reset, seating."""

import threading

import pytest
from django.db import IntegrityError, connections, transaction
from django.utils import timezone

from draftroom.exceptions import (
    AlreadyStarted,
    DraftNotActive,
    InvalidConfiguration,
    LeagueFull,
    NotFound,
    OutOfTurn,
    PlayerAlreadyDrafted,
)
from draftroom.models import DraftPick, FantasyTeam, League, Player, RosterEntry, Tournament, TurnAssignment
from draftroom.services import pick_admission
from draftroom.services.draft_engine import DraftOrchestrator


def _row_counts(league):
    return (
        DraftPick.objects.filter(league=league).count(),
        RosterEntry.objects.filter(team__league=league).count(),
    )


# ── Start ────────────────────────────────────────────────────────────


@pytest.mark.django_db
class TestStartDraft:
    def test_snake_order_for_three_teams(self, abc_league, engine):
        league, a, b, c = abc_league

        snapshot = engine.start_draft(league.id)

        assert snapshot.status == League.ACTIVE
        assert [s.team_id for s in snapshot.order] == [a.id, b.id, c.id, c.id, b.id, a.id]
        assert [s.overall_pick for s in snapshot.order] == [1, 2, 3, 4, 5, 6]
        assert snapshot.cursor.on_clock_team_id == a.id

    def test_linear_order(self, make_league, make_teams, engine):
        league = make_league(draft_type=League.LINEAR, max_teams=3, roster_size=2)
        a, b, c = make_teams(league, ["A", "B", "C"])

        snapshot = engine.start_draft(league.id)

        assert [s.team_id for s in snapshot.order] == [a.id, b.id, c.id, a.id, b.id, c.id]

    def test_partial_league_is_allowed(self, make_league, make_teams, engine):
        league = make_league(max_teams=10, roster_size=3)
        make_teams(league, ["A", "B", "C"])

        snapshot = engine.start_draft(league.id)

        assert len(snapshot.order) == 9

    def test_already_started(self, started_abc, engine):
        league, *_ = started_abc
        with pytest.raises(AlreadyStarted):
            engine.start_draft(league.id)

    def test_one_team_is_invalid(self, make_league, make_teams, engine):
        league = make_league()
        make_teams(league, ["Solo"])

        with pytest.raises(InvalidConfiguration):
            engine.start_draft(league.id)

        league.refresh_from_db()
        assert league.draft_status == League.PENDING

    def test_unknown_league(self, engine, db):
        with pytest.raises(NotFound):
            engine.start_draft(999999)

    def test_draft_type_override(self, abc_league, engine):
        league, a, b, c = abc_league

        snapshot = engine.start_draft(league.id, draft_type=League.LINEAR)

        assert snapshot.draft_type == League.LINEAR
        assert [s.team_id for s in snapshot.order] == [a.id, b.id, c.id, a.id, b.id, c.id]
        league.refresh_from_db()
        assert league.draft_type == League.LINEAR

    def test_failed_start_keeps_draft_type(self, make_league, make_teams, engine):
        league = make_league(draft_type=League.SNAKE)
        make_teams(league, ["Solo"])

        with pytest.raises(InvalidConfiguration):
            engine.start_draft(league.id, draft_type=League.LINEAR)

        league.refresh_from_db()
        assert league.draft_type == League.SNAKE
        assert league.draft_status == League.PENDING

    def test_unknown_draft_type(self, abc_league, engine):
        league, *_ = abc_league
        with pytest.raises(InvalidConfiguration):
            engine.start_draft(league.id, draft_type="AUCTION")
        league.refresh_from_db()
        assert league.draft_status == League.PENDING


# ── Concrete scenario: [A, B, C], roster_size=2, snake ──────────────


@pytest.mark.django_db
class TestPickScenario:
    def test_wrong_team_at_pick_one_is_out_of_turn(self, started_abc, engine, players):
        league, a, b, c = started_abc

        with pytest.raises(OutOfTurn):
            engine.submit_pick(league.id, b.id, players[0].id)

        assert _row_counts(league) == (0, 0)
        assert engine.get_draft_state(league.id).cursor.on_clock_team_id == a.id

    def test_six_picks_in_order_complete_the_draft(self, started_abc, engine, players):
        league, a, b, c = started_abc
        order = [a, b, c, c, b, a]

        results = [engine.submit_pick(league.id, team.id, players[i].id) for i, team in enumerate(order)]

        assert [r.status for r in results] == [League.ACTIVE] * 5 + [League.COMPLETED]
        league.refresh_from_db()
        assert league.draft_status == League.COMPLETED
        assert league.current_pick == 6
        assert results[-1].next_cursor.on_clock_team_id is None

    def test_picks_after_completion_are_rejected(self, started_abc, engine, players):
        league, a, b, c = started_abc
        for i, team in enumerate([a, b, c, c, b, a]):
            engine.submit_pick(league.id, team.id, players[i].id)

        with pytest.raises(DraftNotActive):
            engine.submit_pick(league.id, a.id, players[6].id)

    def test_second_round_starts_with_last_seat(self, started_abc, engine, players):
        league, a, b, c = started_abc
        for i, team in enumerate([a, b, c]):
            engine.submit_pick(league.id, team.id, players[i].id)

        result = engine.submit_pick(league.id, c.id, players[3].id)

        assert (result.pick.round_number, result.pick.pick_in_round, result.pick.overall_pick) == (2, 1, 4)


# ── Pick admission ───────────────────────────────────────────────────


@pytest.mark.django_db
class TestSubmitPick:
    def test_returns_pick_roster_entry_and_cursor(self, started_abc, engine, players):
        league, a, b, c = started_abc

        result = engine.submit_pick(league.id, a.id, players[0].id, "keeper")

        assert result.pick.team_id == a.id
        assert result.pick.player_id == players[0].id
        assert (result.pick.round_number, result.pick.pick_in_round, result.pick.overall_pick) == (1, 1, 1)
        assert result.roster_entry.pk is not None
        assert result.roster_entry.pick_id == result.pick.id
        assert result.roster_entry.slot == "keeper"
        assert result.next_cursor.overall_pick == 1
        assert result.next_cursor.on_clock_team_id == b.id

    def test_slot_defaults_to_flex(self, started_abc, engine, players):
        league, a, *_ = started_abc
        result = engine.submit_pick(league.id, a.id, players[0].id)
        assert result.roster_entry.slot == "flex"

    def test_player_already_drafted(self, started_abc, engine, players):
        league, a, b, c = started_abc
        engine.submit_pick(league.id, a.id, players[0].id)

        with pytest.raises(PlayerAlreadyDrafted):
            engine.submit_pick(league.id, b.id, players[0].id)

        assert _row_counts(league) == (1, 1)
        assert DraftPick.objects.get(league=league, player=players[0]).team_id == a.id
        assert engine.get_draft_state(league.id).cursor.on_clock_team_id == b.id

    def test_same_player_in_another_league_is_fine(self, started_abc, engine, players, make_league, make_teams):
        league, a, *_ = started_abc
        other = make_league(name="Second League")
        x, y = make_teams(other, ["X", "Y"])
        engine.start_draft(other.id)

        engine.submit_pick(league.id, a.id, players[0].id)
        engine.submit_pick(other.id, x.id, players[0].id)

        assert DraftPick.objects.filter(player=players[0]).count() == 2

    def test_not_active_while_pending(self, abc_league, engine, players):
        league, a, *_ = abc_league
        with pytest.raises(DraftNotActive):
            engine.submit_pick(league.id, a.id, players[0].id)
        assert _row_counts(league) == (0, 0)

    def test_player_outside_tournament_pool(self, started_abc, engine):
        league, a, *_ = started_abc
        elsewhere = Tournament.objects.create(name="Other Cup", short_name="OC")
        stranger = Player.objects.create(tournament=elsewhere, name="Stranger", team="NZ")

        with pytest.raises(NotFound):
            engine.submit_pick(league.id, a.id, stranger.id)
        assert _row_counts(league) == (0, 0)

    def test_unknown_league(self, engine, db):
        with pytest.raises(NotFound):
            engine.submit_pick(999999, 1, 1)

    def test_unknown_team(self, started_abc, engine, players):
        league, *_ = started_abc
        with pytest.raises(NotFound):
            engine.submit_pick(league.id, 999999, players[0].id)
        assert _row_counts(league) == (0, 0)

    def test_team_from_another_league(self, started_abc, engine, players, make_league, make_teams):
        league, *_ = started_abc
        other = make_league(name="Second League")
        outsider, _ = make_teams(other, ["X", "Y"])

        with pytest.raises(NotFound):
            engine.submit_pick(league.id, outsider.id, players[0].id)
        assert _row_counts(league) == (0, 0)

    def test_slot_label_too_long(self, started_abc, engine, players):
        league, a, *_ = started_abc

        with pytest.raises(InvalidConfiguration):
            engine.submit_pick(league.id, a.id, players[0].id, "x" * 21)

        assert _row_counts(league) == (0, 0)
        league.refresh_from_db()
        assert league.current_pick == 0

    def test_overall_picks_are_dense(self, make_league, make_teams, engine, players):
        league = make_league(max_teams=4, roster_size=3)
        teams = make_teams(league, ["A", "B", "C", "D"])
        snapshot = engine.start_draft(league.id)

        for i, slot in enumerate(snapshot.order[:7]):
            engine.submit_pick(league.id, slot.team_id, players[i].id)

        overall = sorted(DraftPick.objects.filter(league=league).values_list("overall_pick", flat=True))
        assert overall == list(range(1, 8))
        assert RosterEntry.objects.filter(team__in=teams).count() == 7


@pytest.mark.django_db
class TestStorageConstraints:
    def test_duplicate_player_pick_rejected_by_database(self, started_abc, engine, players):
        league, a, b, c = started_abc
        first = engine.submit_pick(league.id, a.id, players[0].id).pick

        with pytest.raises(IntegrityError):
            with transaction.atomic():
                DraftPick.objects.create(
                    league=league,
                    team=b,
                    player=players[0],
                    round_number=1,
                    pick_in_round=2,
                    overall_pick=2,
                    made_at=timezone.now(),
                )

        assert DraftPick.objects.filter(league=league).get() == first

    def test_constraint_violation_is_reported_as_already_drafted(self, started_abc, engine, players, monkeypatch):
        league, a, b, c = started_abc
        engine.submit_pick(league.id, a.id, players[0].id)

        # skip the read-side check so only the unique constraint stands in the way
        monkeypatch.setattr(pick_admission, "_validate_player_available", lambda *args, **kwargs: None)

        with pytest.raises(PlayerAlreadyDrafted):
            engine.submit_pick(league.id, b.id, players[0].id)

        assert _row_counts(league) == (1, 1)
        league.refresh_from_db()
        assert league.current_pick == 1
        assert engine.get_draft_state(league.id).cursor.on_clock_team_id == b.id


# ── Reset ────────────────────────────────────────────────────────────


@pytest.mark.django_db
class TestResetDraft:
    def test_reset_wipes_picks_rosters_and_order(self, started_abc, engine, players):
        league, a, b, c = started_abc
        for i, team in enumerate([a, b, c, c]):
            engine.submit_pick(league.id, team.id, players[i].id)

        engine.reset_draft(league.id)
        snapshot = engine.get_draft_state(league.id)

        assert snapshot.status == League.PENDING
        assert snapshot.picks == []
        assert snapshot.order == []
        assert snapshot.roster_entry_count == 0
        assert snapshot.cursor.overall_pick == 0
        assert _row_counts(league) == (0, 0)

    def test_reset_after_completion(self, started_abc, engine, players):
        league, a, b, c = started_abc
        for i, team in enumerate([a, b, c, c, b, a]):
            engine.submit_pick(league.id, team.id, players[i].id)

        snapshot = engine.reset_draft(league.id)

        assert snapshot.status == League.PENDING
        assert snapshot.roster_entry_count == 0

    def test_reset_is_idempotent(self, abc_league, engine):
        league, *_ = abc_league
        assert engine.reset_draft(league.id).status == League.PENDING
        assert engine.reset_draft(league.id).status == League.PENDING

    def test_draft_can_restart_after_reset(self, started_abc, engine, players):
        league, a, *_ = started_abc
        engine.submit_pick(league.id, a.id, players[0].id)
        engine.reset_draft(league.id)

        snapshot = engine.start_draft(league.id)
        result = engine.submit_pick(league.id, a.id, players[0].id)

        assert len(snapshot.order) == 6
        assert result.pick.overall_pick == 1

    def test_unknown_league(self, engine, db):
        with pytest.raises(NotFound):
            engine.reset_draft(999999)


# ── Draft state ──────────────────────────────────────────────────────


@pytest.mark.django_db
class TestGetDraftState:
    def test_pending_league(self, abc_league, engine):
        league, *_ = abc_league
        snapshot = engine.get_draft_state(league.id)

        assert snapshot.status == League.PENDING
        assert snapshot.order == []
        assert snapshot.cursor.on_clock_team_id is None

    def test_picks_listed_in_overall_order(self, started_abc, engine, players):
        league, a, b, c = started_abc
        for i, team in enumerate([a, b, c]):
            engine.submit_pick(league.id, team.id, players[i].id)

        snapshot = engine.get_draft_state(league.id)

        assert [p.overall_pick for p in snapshot.picks] == [1, 2, 3]
        assert [p.player_id for p in snapshot.picks] == [players[0].id, players[1].id, players[2].id]
        assert snapshot.roster_entry_count == 3

    def test_order_removed_between_reads(self, started_abc, engine, monkeypatch):
        league, *_ = started_abc
        get_league = DraftOrchestrator._get_league

        # a reset commits right after the league row was read as ACTIVE
        def read_then_lose_order(self, league_id):
            found = get_league(self, league_id)
            TurnAssignment.objects.filter(league_id=league_id).delete()
            return found

        monkeypatch.setattr(DraftOrchestrator, "_get_league", read_then_lose_order)

        snapshot = engine.get_draft_state(league.id)

        assert snapshot.status == League.ACTIVE
        assert snapshot.order == []
        assert snapshot.cursor.on_clock_team_id is None
        assert snapshot.cursor.overall_pick == 0

    def test_does_not_mutate(self, started_abc, engine):
        league, *_ = started_abc
        before = League.objects.get(pk=league.pk)
        engine.get_draft_state(league.id)
        engine.get_draft_state(league.id)
        after = League.objects.get(pk=league.pk)
        assert (before.draft_status, before.current_pick) == (after.draft_status, after.current_pick)


# ── Seating ──────────────────────────────────────────────────────────


@pytest.mark.django_db
class TestSeating:
    def test_join_takes_next_seat(self, make_league, make_teams):
        league = make_league()
        teams = make_teams(league, ["A", "B", "C"])
        assert [t.draft_position for t in teams] == [1, 2, 3]

    def test_join_full_league(self, make_league, make_teams, engine):
        league = make_league(max_teams=2)
        make_teams(league, ["A", "B"])

        with pytest.raises(LeagueFull):
            engine.join_league(league.id, name="C", owner_name="Owner C")

    def test_join_after_start(self, make_league, make_teams, engine):
        league = make_league()
        make_teams(league, ["A", "B"])
        engine.start_draft(league.id)

        with pytest.raises(AlreadyStarted):
            engine.join_league(league.id, name="Late", owner_name="Owner Late")

    def test_set_draft_positions_changes_round_one(self, abc_league, engine):
        league, a, b, c = abc_league

        engine.set_draft_positions(league.id, [c.id, a.id, b.id])
        snapshot = engine.start_draft(league.id)

        assert [s.team_id for s in snapshot.order[:3]] == [c.id, a.id, b.id]
        assert [s.team_id for s in snapshot.order[3:]] == [b.id, a.id, c.id]
        assert list(FantasyTeam.objects.filter(league=league).values_list("draft_position", flat=True)) == [1, 2, 3]

    def test_set_draft_positions_must_name_every_team(self, abc_league, engine):
        league, a, b, c = abc_league
        with pytest.raises(InvalidConfiguration):
            engine.set_draft_positions(league.id, [a.id, b.id])
        with pytest.raises(InvalidConfiguration):
            engine.set_draft_positions(league.id, [a.id, a.id, b.id])

    def test_set_draft_positions_with_no_teams(self, make_league, engine):
        league = make_league()
        with pytest.raises(InvalidConfiguration):
            engine.set_draft_positions(league.id, [])

    def test_set_draft_positions_after_start(self, started_abc, engine):
        league, a, b, c = started_abc
        with pytest.raises(AlreadyStarted):
            engine.set_draft_positions(league.id, [c.id, b.id, a.id])

    def test_roster_for_team(self, started_abc, engine, players):
        league, a, b, c = started_abc
        for i, team in enumerate([a, b, c, c, b, a]):
            engine.submit_pick(league.id, team.id, players[i].id)

        roster = engine.roster_for_team(a.id)

        assert [e.player_id for e in roster] == [players[0].id, players[5].id]
        assert all(e.acquired_via == RosterEntry.DRAFT for e in roster)

    def test_roster_for_unknown_team(self, engine, db):
        with pytest.raises(NotFound):
            engine.roster_for_team(999999)


# ── Available players ────────────────────────────────────────────────


@pytest.mark.django_db
class TestAvailablePlayers:
    def test_everyone_available_before_any_pick(self, abc_league, engine, players):
        league, *_ = abc_league
        assert {p.id for p in engine.available_players(league.id)} == {p.id for p in players}

    def test_drafted_players_drop_out(self, started_abc, engine, players):
        league, a, b, c = started_abc
        engine.submit_pick(league.id, a.id, players[0].id)
        engine.submit_pick(league.id, b.id, players[1].id)

        available = {p.id for p in engine.available_players(league.id)}

        assert players[0].id not in available
        assert players[1].id not in available
        assert len(available) == len(players) - 2

    def test_picks_in_other_leagues_do_not_count(self, started_abc, engine, players, make_league, make_teams):
        league, *_ = started_abc
        other = make_league(name="Second League")
        x, _ = make_teams(other, ["X", "Y"])
        engine.start_draft(other.id)
        engine.submit_pick(other.id, x.id, players[0].id)

        assert players[0].id in {p.id for p in engine.available_players(league.id)}

    def test_only_the_league_tournament_pool(self, abc_league, engine, players):
        league, *_ = abc_league
        elsewhere = Tournament.objects.create(name="Other Cup", short_name="OC")
        stranger = Player.objects.create(tournament=elsewhere, name="Stranger", team="NZ")
        benched = Player.objects.create(tournament=league.tournament, name="Benched", team="NZ", is_active=False)

        available = {p.id for p in engine.available_players(league.id)}

        assert stranger.id not in available
        assert benched.id not in available

    def test_role_and_name_filters(self, abc_league, engine, players):
        league, *_ = abc_league

        bowlers = engine.available_players(league.id, role="bowler")
        assert bowlers and all(p.role == "bowler" for p in bowlers)

        found = engine.available_players(league.id, query="player 1")
        assert {p.name for p in found} == {"Player 1", "Player 10", "Player 11", "Player 12"}

    def test_unknown_league(self, engine, db):
        with pytest.raises(NotFound):
            engine.available_players(999999)


# ── Concurrency ──────────────────────────────────────────────────────


@pytest.mark.django_db(transaction=True)
def test_racing_submissions_admit_exactly_one():
    tournament = Tournament.objects.create(name="Race Cup", short_name="RC")
    pool = [Player.objects.create(tournament=tournament, name=f"P{i}", team="IND") for i in range(2)]
    league = League.objects.create(name="Race", tournament=tournament, max_teams=2, roster_size=2)
    engine = DraftOrchestrator()
    a = engine.join_league(league.id, name="A", owner_name="Owner A")
    engine.join_league(league.id, name="B", owner_name="Owner B")
    engine.start_draft(league.id)

    barrier = threading.Barrier(2)
    outcomes = []

    def attempt(player_id):
        try:
            barrier.wait()
            engine.submit_pick(league.id, a.id, player_id)
            outcomes.append("ok")
        except (OutOfTurn, PlayerAlreadyDrafted) as exc:
            outcomes.append(exc.code)
        finally:
            connections.close_all()

    threads = [threading.Thread(target=attempt, args=(p.id,)) for p in pool]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(outcomes) == ["ok", "out_of_turn"]
    assert DraftPick.objects.filter(league=league).count() == 1

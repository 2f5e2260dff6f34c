import random

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from draftroom.exceptions import DraftError
from draftroom.models import FantasyTeam, League
from draftroom.services.draft_engine import DraftOrchestrator


class Command(BaseCommand):
    help = "Start the draft for a league: generate the pick order (snake or linear) and open pick 1."

    def add_arguments(self, parser):
        parser.add_argument(
            "league_id",
            type=int,
            help="League ID to start the draft for",
        )
        parser.add_argument(
            "--seed",
            choices=["position", "alpha", "random"],
            default="position",
            help="How to seat teams before the order is generated (default: keep join order).",
        )
        parser.add_argument(
            "--type",
            choices=[League.SNAKE, League.LINEAR],
            default=None,
            help="Override draft type (optional).",
        )

    def handle(self, *args, **options):
        league_id = options["league_id"]
        seed = options["seed"]
        override_type = options["type"]

        try:
            league = League.objects.get(id=league_id)
        except League.DoesNotExist:
            raise CommandError(f"League id={league_id} not found.")

        teams = list(FantasyTeam.objects.filter(league=league).order_by("draft_position", "id"))
        if seed == "alpha":
            teams.sort(key=lambda t: (t.name or "").lower())
        elif seed == "random":
            random.shuffle(teams)

        engine = DraftOrchestrator()

        # reseating and starting succeed or fail together
        try:
            with transaction.atomic():
                if seed != "position":
                    engine.set_draft_positions(league_id, [t.id for t in teams])
                snapshot = engine.start_draft(league_id, draft_type=override_type)
        except DraftError as exc:
            raise CommandError(f"{exc.code}: {exc}")

        names = {t.id: t.name for t in FantasyTeam.objects.filter(league=league)}

        self.stdout.write(self.style.SUCCESS("Draft started successfully."))
        self.stdout.write(f"League: {league.name} (id={league.id})")
        self.stdout.write(f"Teams: {len(names)} of {league.max_teams} seats")
        self.stdout.write(f"Draft type: {snapshot.draft_type}")
        self.stdout.write(f"Rounds: {league.roster_size}")
        self.stdout.write(f"Seed: {seed}")
        self.stdout.write("Round 1 order:")
        for slot in snapshot.order:
            if slot.round_number != 1:
                break
            self.stdout.write(f"  {slot.pick_in_round}. {names[slot.team_id]}")

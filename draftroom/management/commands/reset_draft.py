from django.core.management.base import BaseCommand, CommandError

from draftroom.exceptions import DraftError
from draftroom.services.draft_engine import DraftOrchestrator


class Command(BaseCommand):
    help = "Reset a league's draft to pending. Deletes the pick order, every pick and every drafted roster entry."

    def add_arguments(self, parser):
        parser.add_argument("league_id", type=int, help="League ID to reset")
        parser.add_argument(
            "--yes",
            action="store_true",
            help="Required. Confirms that all picks for the league should be wiped.",
        )

    def handle(self, *args, **options):
        league_id = options["league_id"]

        if not options["yes"]:
            raise CommandError("Refusing to reset without --yes.")

        try:
            snapshot = DraftOrchestrator().reset_draft(league_id)
        except DraftError as exc:
            raise CommandError(f"{exc.code}: {exc}")

        self.stdout.write(self.style.SUCCESS(f"Draft for league id={league_id} is {snapshot.status}."))

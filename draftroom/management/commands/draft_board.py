from django.core.management.base import BaseCommand, CommandError

from draftroom.exceptions import DraftError
from draftroom.models import FantasyTeam
from draftroom.services.draft_engine import DraftOrchestrator


class Command(BaseCommand):
    help = "Print the pick order for a league with the players taken so far."

    def add_arguments(self, parser):
        parser.add_argument("league_id", type=int, help="League ID")

    def handle(self, *args, **options):
        league_id = options["league_id"]

        try:
            snapshot = DraftOrchestrator().get_draft_state(league_id)
        except DraftError as exc:
            raise CommandError(f"{exc.code}: {exc}")

        self.stdout.write(f"Status: {snapshot.status} ({snapshot.draft_type})")
        if not snapshot.order:
            self.stdout.write("No pick order yet. Run start_draft first.")
            return

        names = {t.id: t.name for t in FantasyTeam.objects.filter(league_id=league_id)}
        taken = {p.overall_pick: p.player.name for p in snapshot.picks}

        for slot in snapshot.order:
            marker = ">>" if slot.overall_pick == snapshot.cursor.on_clock_pick else "  "
            player = taken.get(slot.overall_pick, "")
            self.stdout.write(
                f"{marker} R{slot.round_number}.{slot.pick_in_round:<3} #{slot.overall_pick:<4} "
                f"{names[slot.team_id]:<24} {player}".rstrip()
            )

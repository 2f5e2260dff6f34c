from django.contrib import messages

from draftroom.exceptions import DraftError
from draftroom.services.draft_engine import DraftOrchestrator


def action_start_draft(modeladmin, request, queryset):
    """
    Admin action: start the draft for selected leagues.
    """
    engine = DraftOrchestrator()
    for league in queryset:
        try:
            snapshot = engine.start_draft(league.id)
        except DraftError as exc:
            messages.error(request, f"{league.name}: {exc}")
            continue
        messages.success(request, f"{league.name}: draft started ({len(snapshot.order)} picks).")


action_start_draft.short_description = "Start draft"


def action_reset_draft(modeladmin, request, queryset):
    """
    Admin action: reset the draft (deletes picks, drafted roster rows and the order).
    """
    engine = DraftOrchestrator()
    for league in queryset:
        try:
            engine.reset_draft(league.id)
        except DraftError as exc:
            messages.error(request, f"{league.name}: {exc}")
            continue
        messages.success(request, f"{league.name}: draft reset.")


action_reset_draft.short_description = "Reset draft"

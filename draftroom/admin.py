from django.contrib import admin
from .models import (
    Tournament,
    Player,
    League,
    FantasyTeam,
    TurnAssignment,
    DraftPick,
    RosterEntry,
)
from .admin_actions import action_start_draft, action_reset_draft


# ======================
# TOURNAMENT
# ======================
@admin.register(Tournament)
class TournamentAdmin(admin.ModelAdmin):
    list_display = ("name", "short_name", "start_date", "end_date", "is_active")
    search_fields = ("name", "short_name")


# ======================
# PLAYER
# ======================
@admin.register(Player)
class PlayerAdmin(admin.ModelAdmin):
    list_display = ("name", "team", "role", "tournament", "is_active")
    search_fields = ("name", "team")
    list_filter = ("tournament", "role", "is_active")
    ordering = ("name",)


# ======================
# LEAGUE
# ======================
@admin.register(League)
class LeagueAdmin(admin.ModelAdmin):
    list_display = (
        "name",
        "tournament",
        "draft_type",
        "draft_status",
        "max_teams",
        "roster_size",
        "current_round",
        "current_pick",
    )
    search_fields = ("name",)
    list_filter = ("draft_status", "draft_type", "tournament")
    # status and cursor only move through the draft engine
    readonly_fields = (
        "draft_status",
        "current_round",
        "current_pick_in_round",
        "current_pick",
        "started_at",
        "completed_at",
    )
    actions = [action_start_draft, action_reset_draft]


# ======================
# TEAM
# ======================
@admin.register(FantasyTeam)
class FantasyTeamAdmin(admin.ModelAdmin):
    list_display = ("name", "owner_name", "league", "draft_position")
    search_fields = ("name", "owner_name")
    list_filter = ("league",)
    ordering = ("league", "draft_position")


# ======================
# DRAFT
# ======================
@admin.register(TurnAssignment)
class TurnAssignmentAdmin(admin.ModelAdmin):
    list_display = ("league", "overall_pick", "round_number", "pick_in_round", "team")
    list_filter = ("league",)
    ordering = ("league", "overall_pick")

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False


@admin.register(DraftPick)
class DraftPickAdmin(admin.ModelAdmin):
    list_display = (
        "league",
        "overall_pick",
        "round_number",
        "pick_in_round",
        "team",
        "player",
        "made_at",
    )
    list_filter = ("league", "round_number", "team")

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False


# ======================
# ROSTER
# ======================
@admin.register(RosterEntry)
class RosterEntryAdmin(admin.ModelAdmin):
    list_display = ("team", "player", "slot", "acquired_via", "acquired_at")
    search_fields = ("team__name", "player__name")
    list_filter = ("team", "acquired_via")

# draftroom/api/urls.py

from django.urls import path

from .draft_views import (
    available_players,
    draft_picks,
    draft_state,
    join_league,
    reset_draft,
    start_draft,
    team_roster,
)

urlpatterns = [
    # Draft room
    path("leagues/<int:league_id>/draft/", draft_state, name="draft_state"),
    path("leagues/<int:league_id>/draft/start/", start_draft, name="draft_start"),
    path("leagues/<int:league_id>/draft/picks/", draft_picks, name="draft_picks"),
    path("leagues/<int:league_id>/draft/reset/", reset_draft, name="draft_reset"),
    path("leagues/<int:league_id>/draft/available/", available_players, name="draft_available"),

    # Teams
    path("leagues/<int:league_id>/teams/", join_league, name="league_join"),
    path("teams/<int:team_id>/roster/", team_roster, name="team_roster"),
]

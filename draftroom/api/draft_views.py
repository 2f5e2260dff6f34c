# draftroom/api/draft_views.py

from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from draftroom.serializers import (
    DraftPickSerializer,
    DraftStateSerializer,
    FantasyTeamSerializer,
    PickRequestSerializer,
    PickResultSerializer,
    PlayerSerializer,
    RosterEntrySerializer,
)
from draftroom.services.draft_engine import DraftOrchestrator


@api_view(["GET"])
def draft_state(request, league_id):
    """
    Read-only, safe to poll.
    Example: /api/leagues/4/draft/
    """
    snapshot = DraftOrchestrator().get_draft_state(league_id)
    return Response(DraftStateSerializer(snapshot).data)


@api_view(["POST"])
def start_draft(request, league_id):
    snapshot = DraftOrchestrator().start_draft(league_id)
    return Response(DraftStateSerializer(snapshot).data)


@api_view(["GET", "POST"])
def draft_picks(request, league_id):
    """
    GET: pick history in overall order.
    POST: {"team_id": 3, "player_id": 120, "slot": "bowler"}
    """
    engine = DraftOrchestrator()

    if request.method == "GET":
        picks = engine.get_draft_state(league_id).picks
        return Response({"picks": DraftPickSerializer(picks, many=True).data})

    payload = PickRequestSerializer(data=request.data)
    payload.is_valid(raise_exception=True)

    result = engine.submit_pick(
        league_id,
        payload.validated_data["team_id"],
        payload.validated_data["player_id"],
        payload.validated_data.get("slot"),
    )
    return Response(PickResultSerializer(result).data, status=status.HTTP_201_CREATED)


@api_view(["POST"])
def reset_draft(request, league_id):
    snapshot = DraftOrchestrator().reset_draft(league_id)
    return Response(DraftStateSerializer(snapshot).data)


@api_view(["POST"])
def join_league(request, league_id):
    payload = FantasyTeamSerializer(data=request.data)
    payload.is_valid(raise_exception=True)

    team = DraftOrchestrator().join_league(
        league_id,
        name=payload.validated_data["name"],
        owner_name=payload.validated_data["owner_name"],
    )
    return Response(FantasyTeamSerializer(team).data, status=status.HTTP_201_CREATED)


@api_view(["GET"])
def team_roster(request, team_id):
    roster = DraftOrchestrator().roster_for_team(team_id)
    return Response({"roster": RosterEntrySerializer(roster, many=True).data})


@api_view(["GET"])
def available_players(request, league_id):
    """
    Undrafted players in the league's pool, optionally narrowed by role or name fragment.
    Example: /api/leagues/4/draft/available/?role=bowler&q=bum
    """
    players = DraftOrchestrator().available_players(
        league_id,
        role=request.GET.get("role", "").strip() or None,
        query=request.GET.get("q", "").strip() or None,
    )
    return Response({"results": PlayerSerializer(players, many=True).data})

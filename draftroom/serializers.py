from rest_framework import serializers

from draftroom.models import DraftPick, FantasyTeam, Player, RosterEntry


class PlayerSerializer(serializers.ModelSerializer):
    class Meta:
        model = Player
        fields = ["id", "name", "team", "role", "tournament"]


class DraftPickSerializer(serializers.ModelSerializer):
    team_name = serializers.CharField(source="team.name", read_only=True)
    owner_name = serializers.CharField(source="team.owner_name", read_only=True)
    player_name = serializers.CharField(source="player.name", read_only=True)
    player_team = serializers.CharField(source="player.team", read_only=True)
    player_role = serializers.CharField(source="player.role", read_only=True)

    class Meta:
        model = DraftPick
        fields = [
            "id",
            "league",
            "team",
            "team_name",
            "owner_name",
            "player",
            "player_name",
            "player_team",
            "player_role",
            "round_number",
            "pick_in_round",
            "overall_pick",
            "made_at",
        ]


class RosterEntrySerializer(serializers.ModelSerializer):
    player_name = serializers.CharField(source="player.name", read_only=True)
    player_team = serializers.CharField(source="player.team", read_only=True)
    player_role = serializers.CharField(source="player.role", read_only=True)

    class Meta:
        model = RosterEntry
        fields = [
            "id",
            "team",
            "player",
            "player_name",
            "player_team",
            "player_role",
            "slot",
            "acquired_via",
            "acquired_at",
            "pick",
        ]


class FantasyTeamSerializer(serializers.ModelSerializer):
    class Meta:
        model = FantasyTeam
        fields = ["id", "league", "name", "owner_name", "draft_position", "created_at"]
        read_only_fields = ["league", "draft_position", "created_at"]


# ================================================================
# Draft engine payloads (plain dataclasses, not models)
# ================================================================

class TurnSlotSerializer(serializers.Serializer):
    round_number = serializers.IntegerField()
    pick_in_round = serializers.IntegerField()
    overall_pick = serializers.IntegerField()
    team_id = serializers.IntegerField()


class DraftCursorSerializer(serializers.Serializer):
    round_number = serializers.IntegerField()
    pick_in_round = serializers.IntegerField()
    overall_pick = serializers.IntegerField()
    on_clock_pick = serializers.IntegerField(allow_null=True)
    on_clock_team_id = serializers.IntegerField(allow_null=True)


class DraftStateSerializer(serializers.Serializer):
    league_id = serializers.IntegerField()
    status = serializers.CharField()
    draft_type = serializers.CharField()
    order = TurnSlotSerializer(many=True)
    cursor = DraftCursorSerializer()
    picks = DraftPickSerializer(many=True)
    roster_entry_count = serializers.IntegerField()


class PickResultSerializer(serializers.Serializer):
    pick = DraftPickSerializer()
    roster_entry = RosterEntrySerializer()
    next_cursor = DraftCursorSerializer()
    status = serializers.CharField()


class PickRequestSerializer(serializers.Serializer):
    team_id = serializers.IntegerField(min_value=1)
    player_id = serializers.IntegerField(min_value=1)
    slot = serializers.CharField(max_length=20, required=False, allow_blank=True)

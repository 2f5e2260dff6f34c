import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Tournament",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=100)),
                ("short_name", models.CharField(max_length=20)),
                ("start_date", models.DateField(blank=True, null=True)),
                ("end_date", models.DateField(blank=True, null=True)),
                ("is_active", models.BooleanField(default=True)),
            ],
        ),
        migrations.CreateModel(
            name="Player",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=100)),
                ("team", models.CharField(help_text="Country or club code, e.g. IND, AUS.", max_length=10)),
                (
                    "role",
                    models.CharField(
                        choices=[
                            ("batter", "Batter"),
                            ("bowler", "Bowler"),
                            ("allrounder", "All-rounder"),
                            ("keeper", "Wicket-keeper"),
                        ],
                        default="batter",
                        max_length=12,
                    ),
                ),
                ("is_active", models.BooleanField(default=True)),
                (
                    "tournament",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="players",
                        to="draftroom.tournament",
                    ),
                ),
            ],
        ),
        migrations.CreateModel(
            name="League",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=100)),
                (
                    "draft_type",
                    models.CharField(choices=[("SNAKE", "Snake"), ("LINEAR", "Linear")], default="SNAKE", max_length=10),
                ),
                ("max_teams", models.PositiveIntegerField(default=10, help_text="Number of seats in the league.")),
                (
                    "roster_size",
                    models.PositiveIntegerField(default=16, help_text="Players each team drafts (one per round)."),
                ),
                ("draft_date", models.DateTimeField(blank=True, null=True)),
                (
                    "draft_status",
                    models.CharField(
                        choices=[("PENDING", "Pending"), ("ACTIVE", "Active"), ("COMPLETED", "Completed")],
                        default="PENDING",
                        max_length=10,
                    ),
                ),
                ("current_round", models.PositiveIntegerField(default=1)),
                ("current_pick_in_round", models.PositiveIntegerField(default=1)),
                (
                    "current_pick",
                    models.PositiveIntegerField(
                        default=0,
                        help_text="Number of picks made so far; the team on the clock holds pick current_pick + 1.",
                    ),
                ),
                ("started_at", models.DateTimeField(blank=True, null=True)),
                ("completed_at", models.DateTimeField(blank=True, null=True)),
                (
                    "tournament",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="leagues",
                        to="draftroom.tournament",
                    ),
                ),
            ],
            options={
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(current_pick__lte=models.F("max_teams") * models.F("roster_size")),
                        name="league_current_pick_within_draft",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="FantasyTeam",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=100)),
                ("owner_name", models.CharField(max_length=100)),
                (
                    "draft_position",
                    models.PositiveIntegerField(help_text="Seat in the round-1 order (1 = first pick)."),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "league",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="teams",
                        to="draftroom.league",
                    ),
                ),
            ],
            options={
                "ordering": ["draft_position", "id"],
                "unique_together": {("league", "draft_position")},
            },
        ),
        migrations.CreateModel(
            name="TurnAssignment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("round_number", models.PositiveIntegerField()),
                ("pick_in_round", models.PositiveIntegerField()),
                ("overall_pick", models.PositiveIntegerField()),
                (
                    "league",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="turn_assignments",
                        to="draftroom.league",
                    ),
                ),
                (
                    "team",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="turn_assignments",
                        to="draftroom.fantasyteam",
                    ),
                ),
            ],
            options={
                "ordering": ["overall_pick"],
                "constraints": [
                    models.UniqueConstraint(fields=("league", "overall_pick"), name="turn_unique_overall_pick"),
                    models.UniqueConstraint(
                        fields=("league", "round_number", "pick_in_round"),
                        name="turn_unique_round_slot",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="DraftPick",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("round_number", models.PositiveIntegerField()),
                ("pick_in_round", models.PositiveIntegerField()),
                ("overall_pick", models.PositiveIntegerField()),
                ("made_at", models.DateTimeField()),
                (
                    "league",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="draft_picks",
                        to="draftroom.league",
                    ),
                ),
                (
                    "player",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="draft_picks",
                        to="draftroom.player",
                    ),
                ),
                (
                    "team",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="draft_picks",
                        to="draftroom.fantasyteam",
                    ),
                ),
            ],
            options={
                "ordering": ["overall_pick"],
                "constraints": [
                    models.UniqueConstraint(fields=("league", "player"), name="pick_unique_player_per_league"),
                    models.UniqueConstraint(fields=("league", "overall_pick"), name="pick_unique_overall_pick"),
                ],
            },
        ),
        migrations.CreateModel(
            name="RosterEntry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("slot", models.CharField(default="flex", max_length=20)),
                (
                    "acquired_via",
                    models.CharField(choices=[("draft", "Draft")], default="draft", max_length=20),
                ),
                ("acquired_at", models.DateTimeField()),
                (
                    "pick",
                    models.OneToOneField(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="roster_entry",
                        to="draftroom.draftpick",
                    ),
                ),
                (
                    "player",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="roster_entries",
                        to="draftroom.player",
                    ),
                ),
                (
                    "team",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="roster_entries",
                        to="draftroom.fantasyteam",
                    ),
                ),
            ],
            options={
                "verbose_name_plural": "roster entries",
                "unique_together": {("team", "player")},
            },
        ),
    ]

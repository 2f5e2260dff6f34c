from django.db import models
from django.db.models import Q


# ================================================================
# TOURNAMENT + PLAYER POOL (catalog, read-only to the draft)
# ================================================================

class Tournament(models.Model):
    name = models.CharField(max_length=100)
    short_name = models.CharField(max_length=20)
    start_date = models.DateField(null=True, blank=True)
    end_date = models.DateField(null=True, blank=True)
    is_active = models.BooleanField(default=True)

    def __str__(self):
        return self.name


class Player(models.Model):
    ROLES = [
        ("batter", "Batter"),
        ("bowler", "Bowler"),
        ("allrounder", "All-rounder"),
        ("keeper", "Wicket-keeper"),
    ]

    tournament = models.ForeignKey(Tournament, on_delete=models.CASCADE, related_name="players")
    name = models.CharField(max_length=100)
    team = models.CharField(max_length=10, help_text="Country or club code, e.g. IND, AUS.")
    role = models.CharField(max_length=12, choices=ROLES, default="batter")
    is_active = models.BooleanField(default=True)

    def __str__(self):
        return f"{self.name} ({self.team}, {self.role})"


# ================================================================
# LEAGUE (one draft instance per league)
# ================================================================

class League(models.Model):
    SNAKE = "SNAKE"
    LINEAR = "LINEAR"
    DRAFT_TYPES = [
        (SNAKE, "Snake"),
        (LINEAR, "Linear"),
    ]

    PENDING = "PENDING"
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    DRAFT_STATUSES = [
        (PENDING, "Pending"),
        (ACTIVE, "Active"),
        (COMPLETED, "Completed"),
    ]

    name = models.CharField(max_length=100)
    tournament = models.ForeignKey(Tournament, on_delete=models.CASCADE, related_name="leagues")

    draft_type = models.CharField(max_length=10, choices=DRAFT_TYPES, default=SNAKE)
    max_teams = models.PositiveIntegerField(
        default=10,
        help_text="Number of seats in the league."
    )
    roster_size = models.PositiveIntegerField(
        default=16,
        help_text="Players each team drafts (one per round)."
    )
    draft_date = models.DateTimeField(null=True, blank=True)

    # -------- Draft status + cursor (always written together) --------
    draft_status = models.CharField(max_length=10, choices=DRAFT_STATUSES, default=PENDING)
    current_round = models.PositiveIntegerField(default=1)
    current_pick_in_round = models.PositiveIntegerField(default=1)
    current_pick = models.PositiveIntegerField(
        default=0,
        help_text="Number of picks made so far; the team on the clock holds pick current_pick + 1."
    )
    started_at = models.DateTimeField(null=True, blank=True)
    completed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        constraints = [
            models.CheckConstraint(
                condition=Q(current_pick__lte=models.F("max_teams") * models.F("roster_size")),
                name="league_current_pick_within_draft",
            ),
        ]

    @property
    def total_picks_capacity(self):
        return self.max_teams * self.roster_size

    def __str__(self):
        return f"{self.name} ({self.tournament.short_name})"


# ================================================================
# FANTASY TEAMS (draft participants)
# ================================================================

class FantasyTeam(models.Model):
    league = models.ForeignKey(League, on_delete=models.CASCADE, related_name="teams")
    name = models.CharField(max_length=100)
    owner_name = models.CharField(max_length=100)
    draft_position = models.PositiveIntegerField(help_text="Seat in the round-1 order (1 = first pick).")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["draft_position", "id"]
        unique_together = ("league", "draft_position")

    def __str__(self):
        return f"{self.name} ({self.league.name})"


# ================================================================
# DRAFT ORDER + PICKS
# ================================================================

class TurnAssignment(models.Model):
    """
    One slot of the generated pick order. Written once when the draft
    starts and only deleted by a reset.
    """
    league = models.ForeignKey(League, on_delete=models.CASCADE, related_name="turn_assignments")
    round_number = models.PositiveIntegerField()
    pick_in_round = models.PositiveIntegerField()
    overall_pick = models.PositiveIntegerField()
    team = models.ForeignKey(FantasyTeam, on_delete=models.CASCADE, related_name="turn_assignments")

    class Meta:
        ordering = ["overall_pick"]
        constraints = [
            models.UniqueConstraint(fields=["league", "overall_pick"], name="turn_unique_overall_pick"),
            models.UniqueConstraint(
                fields=["league", "round_number", "pick_in_round"],
                name="turn_unique_round_slot",
            ),
        ]

    def __str__(self):
        return f"Round {self.round_number}, Pick {self.pick_in_round} (#{self.overall_pick}): {self.team.name}"


class DraftPick(models.Model):
    league = models.ForeignKey(League, on_delete=models.CASCADE, related_name="draft_picks")
    team = models.ForeignKey(FantasyTeam, on_delete=models.CASCADE, related_name="draft_picks")
    player = models.ForeignKey(Player, on_delete=models.PROTECT, related_name="draft_picks")
    round_number = models.PositiveIntegerField()
    pick_in_round = models.PositiveIntegerField()
    overall_pick = models.PositiveIntegerField()
    made_at = models.DateTimeField()

    class Meta:
        ordering = ["overall_pick"]
        constraints = [
            # a player is owned by at most one team per league
            models.UniqueConstraint(fields=["league", "player"], name="pick_unique_player_per_league"),
            models.UniqueConstraint(fields=["league", "overall_pick"], name="pick_unique_overall_pick"),
        ]

    def __str__(self):
        return f"#{self.overall_pick} {self.team.name} — {self.player.name}"


# ================================================================
# ROSTERS
# ================================================================

class RosterEntry(models.Model):
    DRAFT = "draft"
    ACQUISITION_TYPES = [
        (DRAFT, "Draft"),
    ]

    team = models.ForeignKey(FantasyTeam, on_delete=models.CASCADE, related_name="roster_entries")
    player = models.ForeignKey(Player, on_delete=models.PROTECT, related_name="roster_entries")
    slot = models.CharField(max_length=20, default="flex")
    acquired_via = models.CharField(max_length=20, choices=ACQUISITION_TYPES, default=DRAFT)
    acquired_at = models.DateTimeField()
    pick = models.OneToOneField(
        DraftPick,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="roster_entry",
    )

    class Meta:
        unique_together = ("team", "player")
        verbose_name_plural = "roster entries"

    def __str__(self):
        return f"{self.team} — {self.player} [{self.slot}]"

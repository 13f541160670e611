from django.db import models
from django.db.models import Q
from django.conf import settings


class Project(models.Model):
    """
    A collaborative project built through the 5-stage wizard.

    Draft while completion_stage is 1-4; published once stage 5 is saved.
    Only the creator may advance stages.
    """
    STATUS_DRAFT = "draft"
    STATUS_PUBLISHED = "published"
    STATUS_COMPLETED = "completed"

    STATUS_CHOICES = [
        (STATUS_DRAFT, "Draft"),
        (STATUS_PUBLISHED, "Published"),
        (STATUS_COMPLETED, "Completed"),
    ]

    FINAL_STAGE = 5

    creator = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="created_projects",
    )

    # Stage 1
    title = models.CharField(max_length=255)
    project_type = models.CharField(max_length=100)
    description = models.TextField()
    picture = models.CharField(max_length=255, blank=True)

    status = models.CharField(
        max_length=32,
        choices=STATUS_CHOICES,
        default=STATUS_DRAFT,
    )
    completion_stage = models.PositiveSmallIntegerField(default=1)

    # Stage 2
    duration = models.CharField(max_length=100, blank=True)
    total_team = models.PositiveIntegerField(default=0)
    start_date = models.DateField(null=True, blank=True)
    end_date = models.DateField(null=True, blank=True)
    location = models.CharField(max_length=255, blank=True)
    budget = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)
    registration_deadline = models.DateTimeField(null=True, blank=True)

    # Stage 3
    time_commitment = models.CharField(max_length=255, blank=True)
    required_skills = models.ManyToManyField(
        "catalog.Skill",
        blank=True,
        related_name="required_by_projects",
    )

    # Stage 5
    benefits = models.ManyToManyField("catalog.Benefit", blank=True, related_name="projects")
    tags = models.ManyToManyField("catalog.Tag", blank=True, related_name="projects")
    timeline = models.ManyToManyField(
        "catalog.Timeline",
        through="ProjectTimeline",
        blank=True,
        related_name="projects",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status", "registration_deadline"], name="project_status_deadline_idx"),
            models.Index(fields=["creator", "status"], name="project_creator_status_idx"),
        ]

    def __str__(self):
        return f"{self.title} ({self.status})"

    @property
    def is_published(self):
        return self.status == self.STATUS_PUBLISHED


class ProjectCondition(models.Model):
    project = models.ForeignKey(Project, on_delete=models.CASCADE, related_name="conditions")
    description = models.TextField()
    position = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["position", "id"]

    def __str__(self):
        return self.description[:50]


class ProjectRole(models.Model):
    """
    A recruitable position. slots_available counts the positions still open.
    """
    project = models.ForeignKey(Project, on_delete=models.CASCADE, related_name="roles")
    name = models.CharField(max_length=100)
    slots_available = models.PositiveIntegerField(default=0)
    description = models.TextField(blank=True)
    skills = models.ManyToManyField("catalog.Skill", blank=True, related_name="project_roles")

    class Meta:
        ordering = ["id"]
        unique_together = ("project", "name")

    def __str__(self):
        return f"{self.name} @ {self.project_id}"


class ProjectMember(models.Model):
    STATUS_INVITED = "invited"
    STATUS_ACCEPTED = "accepted"
    STATUS_DECLINED = "declined"

    STATUS_CHOICES = [
        (STATUS_INVITED, "Invited"),
        (STATUS_ACCEPTED, "Accepted"),
        (STATUS_DECLINED, "Declined"),
    ]

    # Invited and accepted members both hold a place on the team
    ACTIVE_STATUSES = [STATUS_INVITED, STATUS_ACCEPTED]

    SOURCE_SEEDED = "seeded"
    SOURCE_APPLICATION = "application"
    SOURCE_INVITATION = "invitation"

    SOURCE_CHOICES = [
        (SOURCE_SEEDED, "Seeded by creator"),
        (SOURCE_APPLICATION, "Accepted application"),
        (SOURCE_INVITATION, "Invitation"),
    ]

    project = models.ForeignKey(Project, on_delete=models.CASCADE, related_name="members")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="project_memberships",
    )
    role = models.ForeignKey(ProjectRole, on_delete=models.CASCADE, related_name="members")
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_INVITED)
    source = models.CharField(max_length=16, choices=SOURCE_CHOICES, default=SOURCE_SEEDED)
    role_description = models.TextField(blank=True)
    skills = models.ManyToManyField("catalog.Skill", blank=True, related_name="project_members")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["created_at", "id"]
        unique_together = ("project", "user")
        indexes = [
            models.Index(fields=["user", "status"], name="member_user_status_idx"),
        ]

    def __str__(self):
        return f"{self.user} in {self.project_id} ({self.status})"

    @property
    def draws_on_role_slot(self):
        return self.source != self.SOURCE_SEEDED


class ProjectTimeline(models.Model):
    STATUS_NOT_STARTED = "not-started"
    STATUS_IN_PROGRESS = "in-progress"
    STATUS_DONE = "done"

    STATUS_CHOICES = [
        (STATUS_NOT_STARTED, "Not Started"),
        (STATUS_IN_PROGRESS, "In Progress"),
        (STATUS_DONE, "Done"),
    ]

    STATUS_COLORS = {
        STATUS_NOT_STARTED: "#6B7280",
        STATUS_IN_PROGRESS: "#F59E0B",
        STATUS_DONE: "#10B981",
    }

    project = models.ForeignKey(Project, on_delete=models.CASCADE, related_name="timeline_entries")
    timeline = models.ForeignKey("catalog.Timeline", on_delete=models.CASCADE, related_name="project_entries")
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_NOT_STARTED)
    position = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["position", "id"]
        unique_together = ("project", "timeline")

    def __str__(self):
        return f"{self.timeline} ({self.status})"

    @classmethod
    def status_options(cls):
        return [
            {"value": value, "label": label, "color": cls.STATUS_COLORS[value]}
            for value, label in cls.STATUS_CHOICES
        ]


class ProjectApplication(models.Model):
    STATUS_PENDING = "pending"
    STATUS_ACCEPTED = "accepted"
    STATUS_REJECTED = "rejected"
    STATUS_WITHDRAWN = "withdrawn"

    STATUS_CHOICES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_ACCEPTED, "Accepted"),
        (STATUS_REJECTED, "Rejected"),
        (STATUS_WITHDRAWN, "Withdrawn"),
    ]

    project = models.ForeignKey(Project, on_delete=models.CASCADE, related_name="applications")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="project_applications",
    )
    # Roles are recreated on every stage-4 save; the application outlives them
    role = models.ForeignKey(
        ProjectRole,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="applications",
    )
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_PENDING)

    why_interested = models.TextField()
    skills_experience = models.TextField()
    contribution = models.TextField()

    reviewed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="reviewed_applications",
    )
    review_notes = models.TextField(blank=True)
    reviewed_at = models.DateTimeField(null=True, blank=True)

    applied_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-applied_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["project", "user"],
                condition=~Q(status="withdrawn"),
                name="application_one_active_per_user",
            ),
        ]
        indexes = [
            models.Index(fields=["project", "status"], name="application_project_status_idx"),
        ]

    def __str__(self):
        return f"{self.user} -> {self.project_id} ({self.status})"

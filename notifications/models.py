# notifications/models.py
from django.db import models
from django.conf import settings


class Notification(models.Model):
    TYPE_DEADLINE_APPROACHING = "deadline_approaching"
    TYPE_USER_REGISTERED = "user_registered"
    TYPE_USER_ACCEPTED = "user_accepted"
    TYPE_USER_REJECTED = "user_rejected"
    TYPE_PROJECT_STATUS_CHANGE = "project_status_change"
    TYPE_ROLE_ASSIGNED = "role_assigned"
    TYPE_INVITATION_RECEIVED = "invitation_received"

    TYPE_CHOICES = [
        (TYPE_DEADLINE_APPROACHING, "Deadline Approaching"),
        (TYPE_USER_REGISTERED, "User Registered"),
        (TYPE_USER_ACCEPTED, "User Accepted"),
        (TYPE_USER_REJECTED, "User Rejected"),
        (TYPE_PROJECT_STATUS_CHANGE, "Project Status Change"),
        (TYPE_ROLE_ASSIGNED, "Role Assigned"),
        (TYPE_INVITATION_RECEIVED, "Invitation Received"),
    ]

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="notifications",
    )
    type = models.CharField(max_length=64, choices=TYPE_CHOICES)
    title = models.CharField(max_length=255)
    message = models.TextField(blank=True)
    data = models.JSONField(default=dict, blank=True)
    is_read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    # Optional linking to project
    project = models.ForeignKey(
        "projects.Project",
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="notifications",
    )

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["user", "is_read"], name="notif_user_read_idx"),
            models.Index(fields=["type"], name="notif_type_idx"),
            models.Index(fields=["project", "type", "created_at"], name="notif_project_type_idx"),
        ]

    def __str__(self):
        return f"{self.user} - {self.type} - {self.title}"

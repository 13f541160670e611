# users/models.py
from django.contrib.auth.models import AbstractUser
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


class User(AbstractUser):
    COLLAB_READY = "ready"
    COLLAB_NOT_READY = "not ready"

    COLLAB_CHOICES = [
        (COLLAB_READY, "Ready"),
        (COLLAB_NOT_READY, "Not Ready"),
    ]

    phone = models.CharField(max_length=20, blank=True, null=True)
    about_me = models.TextField(blank=True, null=True)
    location = models.CharField(max_length=255, blank=True, null=True)
    profile_picture = models.CharField(max_length=1024, blank=True, null=True)

    # Whether the user is currently open to joining projects
    status_collaboration = models.CharField(
        max_length=16,
        choices=COLLAB_CHOICES,
        default=COLLAB_NOT_READY,
    )

    skills = models.ManyToManyField(
        "catalog.Skill",
        through="UserSkill",
        related_name="users",
        blank=True,
    )

    def __str__(self):
        return self.username


class UserSkill(models.Model):
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name="user_skills")
    skill = models.ForeignKey("catalog.Skill", on_delete=models.CASCADE, related_name="user_skills")
    proficiency = models.PositiveSmallIntegerField(
        default=0,
        validators=[MinValueValidator(0), MaxValueValidator(100)],
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        unique_together = ("user", "skill")
        ordering = ["-proficiency", "skill__name"]

    def __str__(self):
        return f"{self.user.username} - {self.skill.name} ({self.proficiency})"

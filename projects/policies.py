# projects/policies.py
"""
Permission checks for projects and recruitment.

Views and services call these instead of comparing ids inline.
"""
from typing import Tuple

from django.db.models import Q, QuerySet

from .models import Project, ProjectApplication, ProjectMember


class ProjectPolicy:

    @staticmethod
    def is_creator(user, project: Project) -> bool:
        if not user or not user.is_authenticated or project is None:
            return False
        return project.creator_id == user.id

    @staticmethod
    def is_member(user, project: Project) -> bool:
        if not user or not user.is_authenticated or project is None:
            return False
        return ProjectMember.objects.filter(
            project=project,
            user=user,
            status__in=ProjectMember.ACTIVE_STATUSES,
        ).exists()

    @staticmethod
    def can_view(user, project: Project) -> bool:
        """Creator or current member."""
        return ProjectPolicy.is_creator(user, project) or ProjectPolicy.is_member(user, project)

    @staticmethod
    def can_manage(user, project: Project) -> Tuple[bool, str]:
        if ProjectPolicy.is_creator(user, project):
            return True, ""
        return False, "Only the project creator can perform this action"

    @staticmethod
    def can_view_application(user, application: ProjectApplication) -> bool:
        if not user or not user.is_authenticated:
            return False
        return application.user_id == user.id or application.project.creator_id == user.id

    # ─────────────────────────────────────────────────────────────
    # Querysets
    # ─────────────────────────────────────────────────────────────

    @staticmethod
    def visible_projects(user) -> QuerySet:
        """Projects the user created or currently belongs to."""
        return Project.objects.filter(
            Q(creator=user)
            | Q(members__user=user, members__status__in=ProjectMember.ACTIVE_STATUSES)
        ).distinct()

    @staticmethod
    def public_projects() -> QuerySet:
        return Project.objects.exclude(status=Project.STATUS_DRAFT)

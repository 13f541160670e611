# projects/services/wizard.py
"""
The 5-stage project wizard.

Each stage runs in one transaction: the project row is locked, ownership and
stage order are checked, sub-rows are replaced wholesale and the stage
counter is advanced. Any rejection rolls the whole stage back.
"""
import logging
import os
import uuid

from django.conf import settings
from django.core.files.storage import default_storage
from django.db import transaction
from django.utils import timezone

from catalog.models import Benefit, Skill, Tag, Timeline
from catalog.services import CatalogService
from core.exceptions import (
    CapacityError,
    NotFoundError,
    StageSequenceError,
    UnauthorizedError,
    ValidationError,
)
from users.models import User
from ..capacity import capacity_for_project, check_stage4_allocation
from ..models import (
    Project,
    ProjectCondition,
    ProjectMember,
    ProjectRole,
    ProjectTimeline,
)
from ..policies import ProjectPolicy
from ..state_machine import advance_stage, can_run_stage
from .base import NotifyingService

logger = logging.getLogger("synergazing.projects")


def with_relations(queryset):
    """Everything the project detail DTO and capacity projection read."""
    return queryset.select_related("creator").prefetch_related(
        "required_skills",
        "conditions",
        "roles__skills",
        "members__user",
        "members__role",
        "members__skills",
        "benefits",
        "tags",
        "timeline_entries__timeline",
    )


def _require_text(value, label):
    clean = (value or "").strip() if isinstance(value, str) else value
    if not clean:
        raise ValidationError(f"{label} is required")
    return clean


class ProjectWizard(NotifyingService):

    # ─────────────────────────────────────────────────────────────
    # Helpers
    # ─────────────────────────────────────────────────────────────

    def _lock_for_stage(self, project_id, user, stage: int) -> Project:
        """
        Load and lock the project for a stage update.
        Must be called inside transaction.atomic().
        """
        try:
            project = Project.objects.select_for_update().get(pk=project_id)
        except Project.DoesNotExist:
            raise NotFoundError("Project not found")

        ok, reason = ProjectPolicy.can_manage(user, project)
        if not ok:
            logger.warning(
                f"Stage {stage} rejected: project={project_id}, actor={user.id}. Reason: {reason}"
            )
            raise UnauthorizedError(reason)

        ok, reason = can_run_stage(project, stage)
        if not ok:
            logger.warning(
                f"Stage {stage} rejected: project={project_id}, actor={user.id}. Reason: {reason}"
            )
            raise StageSequenceError(reason)

        return project

    def _reject(self, project, stage, user, exc):
        logger.warning(
            f"Stage {stage} rejected: project={project.id}, actor={user.id}. Reason: {exc.message}"
        )
        raise exc

    @staticmethod
    def _store_picture(upload) -> str:
        if upload.size > settings.PROJECT_PICTURE_MAX_BYTES:
            raise ValidationError(
                f"Picture must be at most {settings.PROJECT_PICTURE_MAX_BYTES} bytes"
            )
        ext = os.path.splitext(upload.name)[1].lower()
        name = os.path.join(settings.PROJECT_PICTURE_DIR, f"{uuid.uuid4().hex}{ext}")
        return default_storage.save(name, upload)

    # ─────────────────────────────────────────────────────────────
    # Stages
    # ─────────────────────────────────────────────────────────────

    def create_stage1(self, creator, title, project_type, description, picture=None) -> Project:
        title = _require_text(title, "Title")
        project_type = _require_text(project_type, "Project type")
        description = _require_text(description, "Description")

        stored = self._store_picture(picture) if picture else ""
        try:
            with transaction.atomic():
                project = Project.objects.create(
                    creator=creator,
                    title=title,
                    project_type=project_type,
                    description=description,
                    picture=stored,
                    status=Project.STATUS_DRAFT,
                    completion_stage=1,
                )
        except Exception:
            if stored:
                default_storage.delete(stored)
            raise

        logger.info(f"Project created: project={project.id}, creator={creator.id}, stage=1, status=draft")
        return project

    def update_stage2(self, project_id, user, *, duration, total_team, start_date, end_date,
                      registration_deadline, location="", budget=None) -> Project:
        with transaction.atomic():
            project = self._lock_for_stage(project_id, user, 2)

            try:
                duration = _require_text(duration, "Duration")
                if total_team is None or total_team < 1:
                    raise ValidationError("Total team must be at least 1")
                if not start_date or not end_date:
                    raise ValidationError("Start date and end date are required")
                if end_date < start_date:
                    raise ValidationError("End date cannot be before start date")
                if not registration_deadline:
                    raise ValidationError("Registration deadline is required")

                capacity = capacity_for_project(project)
                if total_team < capacity.allocated:
                    raise CapacityError(
                        f"Total team cannot be smaller than the current allocation "
                        f"({capacity.filled_team} members + {capacity.total_role_slots} open slots)"
                    )
            except (ValidationError, CapacityError) as exc:
                self._reject(project, 2, user, exc)

            project.duration = duration
            project.total_team = total_team
            project.start_date = start_date
            project.end_date = end_date
            project.location = location or ""
            project.budget = budget
            project.registration_deadline = registration_deadline
            advance_stage(project, 2, actor=user)
            project.save()

        return project

    def update_stage3(self, project_id, user, *, time_commitment, skill_names, conditions) -> Project:
        with transaction.atomic():
            project = self._lock_for_stage(project_id, user, 3)

            try:
                time_commitment = _require_text(time_commitment, "Time commitment")
                skills = CatalogService.find_or_create_many(Skill, skill_names)
                if not skills:
                    raise ValidationError("At least one required skill is needed")
            except ValidationError as exc:
                self._reject(project, 3, user, exc)

            project.required_skills.clear()
            project.required_skills.add(*skills)

            ProjectCondition.objects.filter(project=project).delete()
            ProjectCondition.objects.bulk_create([
                ProjectCondition(project=project, description=text.strip(), position=index)
                for index, text in enumerate(t for t in (conditions or []) if t and t.strip())
            ])

            project.time_commitment = time_commitment
            advance_stage(project, 3, actor=user)
            project.save()

        return project

    def _validate_roles(self, roles):
        seen = set()
        for role in roles:
            name = CatalogService.normalize(role.get("name"))
            if not name:
                raise ValidationError("Role name is required")
            if name.lower() in seen:
                raise ValidationError(f"Duplicate role name: {name}")
            seen.add(name.lower())
            slots = role.get("slots_available", 0)
            if slots is None or slots < 0:
                raise ValidationError(f"Slots for role '{name}' cannot be negative")

    def _resolve_members(self, members, role_names):
        """
        Returns [(user, role_key, entry)] for the submitted members.
        """
        resolved = []
        seen_users = set()
        for entry in members:
            username = (entry.get("name") or "").strip()
            if not username:
                raise ValidationError("Member name is required")
            user = User.objects.filter(username=username).first()
            if user is None:
                raise NotFoundError(f"User '{username}' not found")
            if user.id in seen_users:
                raise ValidationError(f"User '{username}' is listed more than once")
            seen_users.add(user.id)

            role_key = CatalogService.normalize(entry.get("role_name")).lower()
            if role_key not in role_names:
                raise NotFoundError(f"Role '{entry.get('role_name')}' not found in submitted roles")
            resolved.append((user, role_key, entry))
        return resolved

    def update_stage4(self, project_id, user, *, roles, members) -> Project:
        roles = roles or []
        members = members or []

        with transaction.atomic():
            project = self._lock_for_stage(project_id, user, 4)

            try:
                self._validate_roles(roles)
                role_names = {CatalogService.normalize(r.get("name")).lower() for r in roles}
                resolved = self._resolve_members(members, role_names)

                ok, reason = check_stage4_allocation(
                    project.total_team,
                    len(resolved),
                    [r.get("slots_available", 0) for r in roles],
                )
                if not ok:
                    raise CapacityError(reason)
            except (ValidationError, NotFoundError, CapacityError) as exc:
                self._reject(project, 4, user, exc)

            # Wholesale replace; join rows go with their parents
            ProjectMember.objects.filter(project=project).delete()
            ProjectRole.objects.filter(project=project).delete()

            created_roles = {}
            for entry in roles:
                role = ProjectRole.objects.create(
                    project=project,
                    name=CatalogService.normalize(entry.get("name")),
                    slots_available=entry.get("slots_available", 0),
                    description=entry.get("description") or "",
                )
                role.skills.add(*CatalogService.find_or_create_many(Skill, entry.get("skill_names")))
                created_roles[role.name.lower()] = role

            for member_user, role_key, entry in resolved:
                member = ProjectMember.objects.create(
                    project=project,
                    user=member_user,
                    role=created_roles[role_key],
                    status=ProjectMember.STATUS_INVITED,
                    source=ProjectMember.SOURCE_SEEDED,
                    role_description=entry.get("role_description") or "",
                )
                member.skills.add(*CatalogService.find_or_create_many(Skill, entry.get("skill_names")))

            advance_stage(project, 4, actor=user)
            project.save()

        return project

    def update_stage5(self, project_id, user, *, benefit_names, timeline_names=None, tag_names=None) -> Project:
        with transaction.atomic():
            project = self._lock_for_stage(project_id, user, 5)

            try:
                benefits = CatalogService.find_or_create_many(Benefit, benefit_names)
                if not benefits:
                    raise ValidationError("At least one benefit is required")
            except ValidationError as exc:
                self._reject(project, 5, user, exc)

            timelines = CatalogService.find_or_create_many(Timeline, timeline_names)
            tags = CatalogService.find_or_create_many(Tag, tag_names)

            project.benefits.clear()
            project.benefits.add(*benefits)

            project.tags.clear()
            project.tags.add(*tags)

            ProjectTimeline.objects.filter(project=project).delete()
            ProjectTimeline.objects.bulk_create([
                ProjectTimeline(project=project, timeline=timeline, position=index)
                for index, timeline in enumerate(timelines)
            ])

            was_published = project.is_published
            advance_stage(project, 5, actor=user)
            project.save()

            if project.is_published and not was_published:
                self._notify("project_published", project_id=project.id)

        return project

    # ─────────────────────────────────────────────────────────────
    # Other creator operations
    # ─────────────────────────────────────────────────────────────

    def update_timeline_status(self, project_id, entry_id, user, status) -> ProjectTimeline:
        if status not in dict(ProjectTimeline.STATUS_CHOICES):
            raise ValidationError(
                f"Invalid timeline status. Must be one of: {', '.join(dict(ProjectTimeline.STATUS_CHOICES))}"
            )

        with transaction.atomic():
            try:
                project = Project.objects.select_for_update().get(pk=project_id)
            except Project.DoesNotExist:
                raise NotFoundError("Project not found")

            ok, reason = ProjectPolicy.can_manage(user, project)
            if not ok:
                logger.warning(f"Timeline update rejected: project={project_id}, actor={user.id}. Reason: {reason}")
                raise UnauthorizedError(reason)

            entry = (
                ProjectTimeline.objects.select_related("timeline")
                .filter(project=project, pk=entry_id)
                .first()
            )
            if entry is None:
                raise NotFoundError("Timeline entry not found")

            old_status = entry.status
            entry.status = status
            entry.save(update_fields=["status"])

        logger.info(
            f"Timeline status updated: project={project_id}, entry={entry_id}, "
            f"from={old_status}, to={status}, actor={user.id}"
        )
        return entry

    def delete_project(self, project_id, user):
        with transaction.atomic():
            try:
                project = Project.objects.select_for_update().get(pk=project_id)
            except Project.DoesNotExist:
                raise NotFoundError("Project not found")

            ok, reason = ProjectPolicy.can_manage(user, project)
            if not ok:
                logger.warning(f"Project delete rejected: project={project_id}, actor={user.id}. Reason: {reason}")
                raise UnauthorizedError(reason)

            picture = project.picture
            project.delete()

            if picture:
                transaction.on_commit(lambda: _delete_picture(picture))

        logger.info(f"Project deleted: project={project_id}, actor={user.id}")

    # ─────────────────────────────────────────────────────────────
    # Reads
    # ─────────────────────────────────────────────────────────────

    def get_project(self, project_id, user) -> Project:
        project = with_relations(Project.objects.filter(pk=project_id)).first()
        if project is None or not ProjectPolicy.can_view(user, project):
            raise NotFoundError("Project not found")
        return project

    def get_public_project(self, project_id) -> Project:
        project = with_relations(ProjectPolicy.public_projects().filter(pk=project_id)).first()
        if project is None:
            raise NotFoundError("Project not found")
        return project

    def list_public_projects(self, search=None, project_type=None, open_only=False):
        qs = ProjectPolicy.public_projects()
        if search:
            qs = qs.filter(title__icontains=search)
        if project_type:
            qs = qs.filter(project_type__iexact=project_type)
        if open_only:
            qs = qs.filter(status=Project.STATUS_PUBLISHED, registration_deadline__gt=timezone.now())
        return with_relations(qs)

    def list_user_projects(self, user):
        return with_relations(ProjectPolicy.visible_projects(user))

    def list_created_projects(self, user):
        return with_relations(Project.objects.filter(creator=user))

    def list_member_projects(self, user):
        return with_relations(
            Project.objects.filter(
                members__user=user,
                members__status__in=ProjectMember.ACTIVE_STATUSES,
            ).distinct()
        )

    def get_team_capacity(self, project_id, user):
        """
        Returns (project, TeamCapacity) for a project the user can see.
        """
        project = self.get_project(project_id, user)
        return project, capacity_for_project(project)


def _delete_picture(name):
    try:
        default_storage.delete(name)
    except Exception as e:
        logger.warning(f"Failed to delete project picture {name}: {e}")

# projects/services/membership.py
"""
Applications, invitations and team membership.

Slot accounting: ProjectRole.slots_available is the number of open
positions. Accepting an application or sending an invitation locks the role
row, takes one slot and inserts the member in the same transaction, so two
concurrent acceptances cannot both take the last slot. Declining an
invitation or removing a member reopens the slot, except for members seeded
in stage 4 (they never took one).
"""
import logging

from django.db import IntegrityError, transaction
from django.utils import timezone

from core.exceptions import (
    CapacityError,
    ConflictError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from users.models import User
from ..models import Project, ProjectApplication, ProjectMember, ProjectRole
from ..policies import ProjectPolicy
from ..state_machine import can_transition_application, can_transition_invitation
from .base import NotifyingService

logger = logging.getLogger("synergazing.projects")

SUMMARY_PREVIEW_LENGTH = 150

ACTION_ACCEPT = "accept"
ACTION_REJECT = "reject"
ACTION_DECLINE = "decline"


def truncate(text: str, length: int = SUMMARY_PREVIEW_LENGTH) -> str:
    if len(text) <= length:
        return text
    return text[:length] + "..."


class ProjectMembershipService(NotifyingService):

    # ─────────────────────────────────────────────────────────────
    # Helpers
    # ─────────────────────────────────────────────────────────────

    @staticmethod
    def _lock_project(project_id) -> Project:
        try:
            return Project.objects.select_for_update().get(pk=project_id)
        except Project.DoesNotExist:
            raise NotFoundError("Project not found")

    @staticmethod
    def _require_creator(user, project, action):
        ok, reason = ProjectPolicy.can_manage(user, project)
        if not ok:
            logger.warning(f"{action} rejected: project={project.id}, actor={user.id}. Reason: {reason}")
            raise UnauthorizedError(reason)

    @staticmethod
    def _fail(exc, action, **context):
        details = ", ".join(f"{k}={v}" for k, v in context.items())
        logger.warning(f"{action} rejected: {details}. Reason: {exc.message}")
        raise exc

    def _take_slot(self, project, role_id, user, *, source, status, role_description="") -> ProjectMember:
        """
        Lock the role, take one open slot and insert the member.
        Must be called inside transaction.atomic().
        """
        if role_id is None:
            raise ValidationError("The role for this request no longer exists")

        try:
            role = ProjectRole.objects.select_for_update().get(pk=role_id, project=project)
        except ProjectRole.DoesNotExist:
            raise NotFoundError("Role not found in this project")

        if ProjectMember.objects.filter(project=project, user=user).exists():
            raise ConflictError("User is already a member of this project")

        if role.slots_available <= 0:
            raise CapacityError(f"Role '{role.name}' has no open slots left")

        role.slots_available -= 1
        role.save(update_fields=["slots_available"])

        return ProjectMember.objects.create(
            project=project,
            user=user,
            role=role,
            status=status,
            source=source,
            role_description=role_description or "",
        )

    @staticmethod
    def _release_slot(member: ProjectMember):
        if not member.draws_on_role_slot:
            return
        role = ProjectRole.objects.select_for_update().get(pk=member.role_id)
        role.slots_available += 1
        role.save(update_fields=["slots_available"])

    # ─────────────────────────────────────────────────────────────
    # Application path
    # ─────────────────────────────────────────────────────────────

    def apply(self, user, project_id, role_id, *, why_interested, skills_experience, contribution) -> ProjectApplication:
        for value, label in (
            (why_interested, "Why interested"),
            (skills_experience, "Skills and experience"),
            (contribution, "Contribution"),
        ):
            if not (value or "").strip():
                raise ValidationError(f"{label} is required")

        with transaction.atomic():
            project = self._lock_project(project_id)
            context = {"project": project_id, "user": user.id}

            if project.status != Project.STATUS_PUBLISHED:
                self._fail(ValidationError("Project is not open for applications"), "Application", **context)
            if project.registration_deadline and timezone.now() >= project.registration_deadline:
                self._fail(ValidationError("Registration deadline has passed"), "Application", **context)
            if project.creator_id == user.id:
                self._fail(ValidationError("You cannot apply to your own project"), "Application", **context)

            role = ProjectRole.objects.filter(pk=role_id, project=project).first()
            if role is None:
                self._fail(NotFoundError("Role not found in this project"), "Application", **context)

            already_applied = (
                ProjectApplication.objects.filter(project=project, user=user)
                .exclude(status=ProjectApplication.STATUS_WITHDRAWN)
                .exists()
            )
            if already_applied:
                self._fail(ConflictError("You have already applied to this project"), "Application", **context)
            if ProjectMember.objects.filter(project=project, user=user).exists():
                self._fail(ConflictError("You are already a member of this project"), "Application", **context)

            try:
                with transaction.atomic():
                    application = ProjectApplication.objects.create(
                        project=project,
                        user=user,
                        role=role,
                        why_interested=why_interested.strip(),
                        skills_experience=skills_experience.strip(),
                        contribution=contribution.strip(),
                    )
            except IntegrityError:
                self._fail(ConflictError("You have already applied to this project"), "Application", **context)

            logger.info(
                f"Application created: application={application.id}, project={project_id}, "
                f"role={role.id}, user={user.id}, status=pending"
            )
            self._notify("user_registered", application_id=application.id)

        return application

    def review_application(self, application_id, reviewer, action, notes="") -> ProjectApplication:
        if action not in (ACTION_ACCEPT, ACTION_REJECT):
            raise ValidationError("Action must be 'accept' or 'reject'")

        new_status = (
            ProjectApplication.STATUS_ACCEPTED if action == ACTION_ACCEPT
            else ProjectApplication.STATUS_REJECTED
        )

        with transaction.atomic():
            try:
                application = ProjectApplication.objects.select_for_update().get(pk=application_id)
            except ProjectApplication.DoesNotExist:
                raise NotFoundError("Application not found")

            project = application.project
            self._require_creator(reviewer, project, "Application review")
            context = {"application": application_id, "actor": reviewer.id}

            ok, reason = can_transition_application(application, new_status)
            if not ok:
                self._fail(ValidationError(f"Application already {application.status}"), "Application review", **context)

            if new_status == ProjectApplication.STATUS_ACCEPTED:
                try:
                    self._take_slot(
                        project,
                        application.role_id,
                        application.user,
                        source=ProjectMember.SOURCE_APPLICATION,
                        status=ProjectMember.STATUS_ACCEPTED,
                    )
                except (ValidationError, NotFoundError, ConflictError, CapacityError) as exc:
                    self._fail(exc, "Application review", **context)

            old_status = application.status
            application.status = new_status
            application.reviewed_by = reviewer
            application.reviewed_at = timezone.now()
            application.review_notes = notes or ""
            application.save(update_fields=["status", "reviewed_by", "reviewed_at", "review_notes", "updated_at"])

            logger.info(
                f"Application reviewed: application={application.id}, project={project.id}, "
                f"from={old_status}, to={new_status}, actor={reviewer.id}"
            )
            kind = "user_accepted" if new_status == ProjectApplication.STATUS_ACCEPTED else "user_rejected"
            self._notify(kind, application_id=application.id)

        return application

    def withdraw_application(self, application_id, user) -> ProjectApplication:
        with transaction.atomic():
            try:
                application = ProjectApplication.objects.select_for_update().get(pk=application_id)
            except ProjectApplication.DoesNotExist:
                raise NotFoundError("Application not found")

            context = {"application": application_id, "actor": user.id}
            if application.user_id != user.id:
                self._fail(UnauthorizedError("You can only withdraw your own application"), "Withdrawal", **context)

            ok, reason = can_transition_application(application, ProjectApplication.STATUS_WITHDRAWN)
            if not ok:
                self._fail(ValidationError("Only pending applications can be withdrawn"), "Withdrawal", **context)

            application.status = ProjectApplication.STATUS_WITHDRAWN
            application.save(update_fields=["status", "updated_at"])

        logger.info(
            f"Application withdrawn: application={application_id}, project={application.project_id}, "
            f"from=pending, to=withdrawn, actor={user.id}"
        )
        return application

    # ─────────────────────────────────────────────────────────────
    # Invitation path
    # ─────────────────────────────────────────────────────────────

    def invite_member(self, project_id, inviter, target_user_id, role_id, role_description="") -> ProjectMember:
        with transaction.atomic():
            project = self._lock_project(project_id)
            self._require_creator(inviter, project, "Invitation")
            context = {"project": project_id, "target": target_user_id, "actor": inviter.id}

            target = User.objects.filter(pk=target_user_id).first()
            if target is None:
                self._fail(NotFoundError("User not found"), "Invitation", **context)
            if target.id == project.creator_id:
                self._fail(ValidationError("You cannot invite yourself"), "Invitation", **context)

            pending = ProjectApplication.objects.filter(
                project=project,
                user=target,
                status=ProjectApplication.STATUS_PENDING,
            ).exists()
            if pending:
                self._fail(
                    ConflictError("User already has a pending application for this project"),
                    "Invitation",
                    **context,
                )

            try:
                member = self._take_slot(
                    project,
                    role_id,
                    target,
                    source=ProjectMember.SOURCE_INVITATION,
                    status=ProjectMember.STATUS_INVITED,
                    role_description=role_description,
                )
            except (ValidationError, NotFoundError, ConflictError, CapacityError) as exc:
                self._fail(exc, "Invitation", **context)

            logger.info(
                f"Invitation created: project={project_id}, role={member.role_id}, "
                f"user={target.id}, status=invited, actor={inviter.id}"
            )
            self._notify("invitation_received", member_id=member.id)

        return member

    def respond_to_invitation(self, project_id, user, response) -> ProjectMember:
        if response not in (ACTION_ACCEPT, ACTION_DECLINE):
            raise ValidationError("Response must be 'accept' or 'decline'")

        new_status = (
            ProjectMember.STATUS_ACCEPTED if response == ACTION_ACCEPT
            else ProjectMember.STATUS_DECLINED
        )

        with transaction.atomic():
            member = (
                ProjectMember.objects.select_for_update()
                .filter(project_id=project_id, user=user)
                .first()
            )
            if member is None or member.status != ProjectMember.STATUS_INVITED:
                self._fail(
                    NotFoundError("No pending invitation for this project"),
                    "Invitation response",
                    project=project_id,
                    user=user.id,
                )

            ok, reason = can_transition_invitation(member, new_status)
            if not ok:
                raise ValidationError(reason)

            if new_status == ProjectMember.STATUS_DECLINED:
                self._release_slot(member)

            member.status = new_status
            member.save(update_fields=["status", "updated_at"])

            logger.info(
                f"Invitation answered: project={project_id}, user={user.id}, "
                f"from=invited, to={new_status}"
            )
            if new_status == ProjectMember.STATUS_ACCEPTED:
                self._notify("role_assigned", member_id=member.id)

        return member

    def remove_member(self, project_id, target_user_id, caller):
        with transaction.atomic():
            project = self._lock_project(project_id)
            self._require_creator(caller, project, "Member removal")
            context = {"project": project_id, "target": target_user_id, "actor": caller.id}

            if int(target_user_id) == project.creator_id:
                self._fail(ValidationError("The project creator cannot be removed"), "Member removal", **context)

            member = (
                ProjectMember.objects.select_for_update()
                .filter(project=project, user_id=target_user_id)
                .first()
            )
            if member is None:
                self._fail(NotFoundError("Member not found in this project"), "Member removal", **context)

            if member.status in ProjectMember.ACTIVE_STATUSES:
                self._release_slot(member)

            old_status = member.status
            member.delete()

        logger.info(
            f"Member removed: project={project_id}, user={target_user_id}, "
            f"from={old_status}, actor={caller.id}"
        )

    # ─────────────────────────────────────────────────────────────
    # Reads
    # ─────────────────────────────────────────────────────────────

    def list_project_applications(self, project_id, user, status=None):
        project = Project.objects.filter(pk=project_id).first()
        if project is None:
            raise NotFoundError("Project not found")
        self._require_creator(user, project, "Application listing")

        qs = ProjectApplication.objects.filter(project=project).select_related("user", "role", "project")
        if status:
            qs = qs.filter(status=status)
        return qs

    def list_project_members(self, project_id, user):
        project = Project.objects.filter(pk=project_id).first()
        if project is None:
            raise NotFoundError("Project not found")
        if not project.is_published and not ProjectPolicy.can_view(user, project):
            raise NotFoundError("Project not found")

        return (
            ProjectMember.objects.filter(project=project)
            .select_related("user", "role")
            .prefetch_related("skills")
        )

    def list_user_applications(self, user, status=None):
        qs = ProjectApplication.objects.filter(user=user).select_related("project", "role", "user")
        if status:
            qs = qs.filter(status=status)
        return qs

    def list_user_invitations(self, user):
        return (
            ProjectMember.objects.filter(user=user, status=ProjectMember.STATUS_INVITED)
            .select_related("project", "project__creator", "role", "user")
            .prefetch_related("skills")
        )

    def get_application(self, application_id, user) -> ProjectApplication:
        application = (
            ProjectApplication.objects.select_related("project", "user", "role", "reviewed_by")
            .filter(pk=application_id)
            .first()
        )
        if application is None:
            raise NotFoundError("Application not found")
        if not ProjectPolicy.can_view_application(user, application):
            raise UnauthorizedError("You are not allowed to view this application")
        return application

    def get_application_summary(self, application_id, user) -> dict:
        application = self.get_application(application_id, user)
        return {
            "id": application.id,
            "project_id": application.project_id,
            "project_title": application.project.title,
            "role_name": application.role.name if application.role else None,
            "applicant": {
                "id": application.user.id,
                "username": application.user.username,
            },
            "status": application.status,
            "skills_experience": truncate(application.skills_experience),
            "applied_at": application.applied_at,
        }

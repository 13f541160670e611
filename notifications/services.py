# notifications/services.py
"""
Project notifications.

NotificationService builds and stores notifications. NotificationDispatcher
is what lifecycle services call: it defers delivery until the surrounding
transaction commits and hands it to Celery, so a failing notification can
never undo or fail the operation that caused it.
"""
import logging
from datetime import datetime, time, timedelta

from django.db import transaction
from django.utils import timezone

from projects.models import Project, ProjectApplication, ProjectMember
from .models import Notification

logger = logging.getLogger("synergazing.notifications")


class NotificationService:

    @staticmethod
    def create(user_id, type, title, message, project=None, data=None) -> Notification:
        return Notification.objects.create(
            user_id=user_id,
            project=project,
            type=type,
            title=title,
            message=message,
            data=data or {},
        )

    @staticmethod
    def _project_data(project, **extra):
        data = {"project_id": project.id, "project_title": project.title}
        data.update(extra)
        return data

    @staticmethod
    def _team_user_ids(project):
        return list(
            ProjectMember.objects.filter(
                project=project,
                status__in=ProjectMember.ACTIVE_STATUSES,
            ).exclude(user_id=project.creator_id).values_list("user_id", flat=True)
        )

    # ─────────────────────────────────────────────────────────────
    # Lifecycle notifications
    # ─────────────────────────────────────────────────────────────

    @staticmethod
    def notify_user_registered(application_id):
        """Tell the creator someone applied."""
        application = ProjectApplication.objects.select_related("project", "user").get(pk=application_id)
        project = application.project
        applicant = application.user
        name = applicant.get_full_name() or applicant.username

        return NotificationService.create(
            project.creator_id,
            Notification.TYPE_USER_REGISTERED,
            "New Project Application",
            f"{name} has applied to join your project '{project.title}'",
            project=project,
            data=NotificationService._project_data(
                project,
                applicant_id=applicant.id,
                applicant_name=name,
                application_id=application.id,
            ),
        )

    @staticmethod
    def notify_user_accepted(application_id):
        application = ProjectApplication.objects.select_related("project", "role").get(pk=application_id)
        project = application.project
        role_name = application.role.name if application.role else ""

        message = f"Congratulations! You have been accepted into the project '{project.title}'"
        if role_name:
            message += f" as {role_name}"

        return NotificationService.create(
            application.user_id,
            Notification.TYPE_USER_ACCEPTED,
            "Application Accepted!",
            message,
            project=project,
            data=NotificationService._project_data(project, role=role_name),
        )

    @staticmethod
    def notify_user_rejected(application_id):
        application = ProjectApplication.objects.select_related("project").get(pk=application_id)
        project = application.project

        return NotificationService.create(
            application.user_id,
            Notification.TYPE_USER_REJECTED,
            "Application Update",
            f"Thank you for your interest in '{project.title}'. "
            f"Unfortunately, your application was not selected this time.",
            project=project,
            data=NotificationService._project_data(project),
        )

    @staticmethod
    def notify_role_assigned(member_id):
        member = ProjectMember.objects.select_related("project", "role").get(pk=member_id)
        project = member.project

        return NotificationService.create(
            member.user_id,
            Notification.TYPE_ROLE_ASSIGNED,
            "Role Assigned",
            f"You have been assigned the role '{member.role.name}' in project '{project.title}'",
            project=project,
            data=NotificationService._project_data(project, role=member.role.name),
        )

    @staticmethod
    def notify_invitation_received(member_id):
        member = ProjectMember.objects.select_related("project", "role").get(pk=member_id)
        project = member.project

        message = f"You have been invited to join project '{project.title}'"
        if member.role_id:
            message += f" as {member.role.name}"

        return NotificationService.create(
            member.user_id,
            Notification.TYPE_INVITATION_RECEIVED,
            "Project Invitation",
            message,
            project=project,
            data=NotificationService._project_data(project, role=member.role.name),
        )

    @staticmethod
    def notify_project_published(project_id):
        """Tell the seeded team the project is now live."""
        project = Project.objects.get(pk=project_id)
        data = NotificationService._project_data(project, new_status=project.status)

        notifications = [
            Notification(
                user_id=user_id,
                project=project,
                type=Notification.TYPE_PROJECT_STATUS_CHANGE,
                title="Project Status Update",
                message=f"Project '{project.title}' status has been updated to: {project.status}",
                data=data,
            )
            for user_id in NotificationService._team_user_ids(project)
        ]
        return Notification.objects.bulk_create(notifications)

    @staticmethod
    def notify_deadline_approaching(project_id, days_left=None):
        project = Project.objects.get(pk=project_id)
        if days_left is None:
            days_left = max(0, (project.registration_deadline - timezone.now()).days)

        message = f"The registration deadline for project '{project.title}' is in {days_left} days"
        data = NotificationService._project_data(
            project,
            registration_deadline=project.registration_deadline.isoformat(),
            days_until_deadline=days_left,
        )

        # Creator first, then the team without double-notifying the creator
        recipients = [project.creator_id] + NotificationService._team_user_ids(project)
        return Notification.objects.bulk_create([
            Notification(
                user_id=user_id,
                project=project,
                type=Notification.TYPE_DEADLINE_APPROACHING,
                title="Project Deadline Approaching",
                message=message,
                data=data,
            )
            for user_id in recipients
        ])

    @staticmethod
    def check_approaching_deadlines(days_ahead) -> int:
        """
        One reminder per project per day for deadlines falling on any of the
        given days ahead. Returns the number of projects notified.
        """
        today = timezone.localdate()
        start_of_today = timezone.make_aware(datetime.combine(today, time.min))
        notified = 0

        for days in days_ahead:
            start = timezone.make_aware(datetime.combine(today + timedelta(days=days), time.min))
            end = start + timedelta(days=1)

            projects = Project.objects.filter(
                status=Project.STATUS_PUBLISHED,
                registration_deadline__gte=start,
                registration_deadline__lt=end,
            )
            for project in projects:
                already_sent = Notification.objects.filter(
                    project=project,
                    type=Notification.TYPE_DEADLINE_APPROACHING,
                    created_at__gte=start_of_today,
                ).exists()
                if already_sent:
                    continue
                NotificationService.notify_deadline_approaching(project.id, days_left=days)
                notified += 1

        logger.info(f"Deadline reminders sent: projects={notified}, days={list(days_ahead)}")
        return notified

    # ─────────────────────────────────────────────────────────────
    # Inbox
    # ─────────────────────────────────────────────────────────────

    @staticmethod
    def unread_count(user) -> int:
        return Notification.objects.filter(user=user, is_read=False).count()

    @staticmethod
    def mark_all_read(user) -> int:
        return Notification.objects.filter(user=user, is_read=False).update(is_read=True)


class NotificationDispatcher:
    """
    Best-effort, post-commit notification delivery.

    dispatch() only registers an on_commit hook; a rolled back transaction
    sends nothing. Enqueue failures are logged and swallowed.
    """

    def dispatch(self, kind: str, **payload):
        transaction.on_commit(lambda: self.enqueue(kind, payload))

    @staticmethod
    def enqueue(kind: str, payload: dict):
        from .tasks import deliver_notification

        try:
            deliver_notification.delay(kind, payload)
        except Exception as e:
            logger.warning(f"Failed to enqueue '{kind}' notification {payload}: {e}")

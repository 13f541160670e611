from datetime import datetime, time, timedelta
from unittest import mock

from django.db import transaction
from django.test import TestCase
from django.urls import reverse
from django.utils import timezone
from rest_framework.test import APITestCase

from notifications.models import Notification
from notifications.services import NotificationDispatcher, NotificationService
from projects.models import Project, ProjectRole
from projects.services import ProjectMembershipService
from projects.tests.factories import make_project, make_user


MOTIVATION = {
    "why_interested": "I love this idea",
    "skills_experience": "Five years of Go",
    "contribution": "Backend APIs",
}


class NotificationDispatchTests(TestCase):
    def setUp(self):
        self.creator = make_user("creator", first_name="Rina", last_name="Putri")
        self.applicant = make_user("applicant", first_name="Budi", last_name="Santoso")
        self.project = make_project(self.creator, stage=5, total_team=2)
        self.role = ProjectRole.objects.get(project=self.project)
        self.service = ProjectMembershipService(notifier=NotificationDispatcher())

    def test_apply_notifies_creator_after_commit(self):
        with self.captureOnCommitCallbacks(execute=True):
            self.service.apply(self.applicant, self.project.id, self.role.id, **MOTIVATION)

        notification = Notification.objects.get(user=self.creator)
        self.assertEqual(notification.type, Notification.TYPE_USER_REGISTERED)
        self.assertEqual(notification.title, "New Project Application")
        self.assertEqual(
            notification.message,
            f"Budi Santoso has applied to join your project '{self.project.title}'",
        )
        self.assertEqual(notification.data["project_id"], self.project.id)

    def test_accept_and_invitation_messages(self):
        application = self.service.apply(self.applicant, self.project.id, self.role.id, **MOTIVATION)

        with self.captureOnCommitCallbacks(execute=True):
            self.service.review_application(application.id, self.creator, "accept")

        notification = Notification.objects.get(user=self.applicant)
        self.assertEqual(notification.type, Notification.TYPE_USER_ACCEPTED)
        self.assertEqual(
            notification.message,
            f"Congratulations! You have been accepted into the project '{self.project.title}' as Backend",
        )

    def test_rejection_message(self):
        application = self.service.apply(self.applicant, self.project.id, self.role.id, **MOTIVATION)

        with self.captureOnCommitCallbacks(execute=True):
            self.service.review_application(application.id, self.creator, "reject")

        notification = Notification.objects.get(user=self.applicant)
        self.assertEqual(notification.type, Notification.TYPE_USER_REJECTED)
        self.assertIn("was not selected this time", notification.message)

    def test_invitation_and_role_assignment(self):
        with self.captureOnCommitCallbacks(execute=True):
            self.service.invite_member(self.project.id, self.creator, self.applicant.id, self.role.id)
        with self.captureOnCommitCallbacks(execute=True):
            self.service.respond_to_invitation(self.project.id, self.applicant, "accept")

        types = list(
            Notification.objects.filter(user=self.applicant)
            .order_by("id")
            .values_list("type", flat=True)
        )
        self.assertEqual(types, [Notification.TYPE_INVITATION_RECEIVED, Notification.TYPE_ROLE_ASSIGNED])

    def test_rolled_back_transaction_sends_nothing(self):
        with self.captureOnCommitCallbacks() as callbacks:
            with self.assertRaises(RuntimeError):
                with transaction.atomic():
                    NotificationDispatcher().dispatch("user_registered", application_id=1)
                    raise RuntimeError("boom")

        self.assertEqual(callbacks, [])

    def test_failing_delivery_does_not_fail_apply(self):
        with mock.patch.object(
            NotificationService,
            "notify_user_registered",
            side_effect=RuntimeError("smtp down"),
        ):
            with self.captureOnCommitCallbacks(execute=True):
                application = self.service.apply(self.applicant, self.project.id, self.role.id, **MOTIVATION)

        self.assertEqual(application.status, "pending")
        self.assertFalse(Notification.objects.exists())

    def test_enqueue_failure_is_swallowed(self):
        with mock.patch("notifications.tasks.deliver_notification") as task:
            task.delay.side_effect = ConnectionError("broker unavailable")
            with self.assertLogs("synergazing.notifications", level="WARNING"):
                NotificationDispatcher.enqueue("user_registered", {"application_id": 1})


class DeadlineReminderTests(TestCase):
    def setUp(self):
        self.creator = make_user("creator")
        self.member = make_user("member")
        self.project = make_project(
            self.creator,
            stage=5,
            total_team=2,
            roles=[{"name": "Backend", "slots_available": 1}],
            members=[{"name": "member", "role_name": "Backend"}],
        )

    def set_deadline(self, days_ahead):
        deadline = timezone.make_aware(
            datetime.combine(timezone.localdate() + timedelta(days=days_ahead), time(12, 0))
        )
        Project.objects.filter(pk=self.project.id).update(registration_deadline=deadline)

    def test_reminder_sent_once_per_day(self):
        self.set_deadline(3)

        self.assertEqual(NotificationService.check_approaching_deadlines([1, 3, 7]), 1)
        self.assertEqual(NotificationService.check_approaching_deadlines([1, 3, 7]), 0)

        reminders = Notification.objects.filter(type=Notification.TYPE_DEADLINE_APPROACHING)
        self.assertEqual(
            sorted(reminders.values_list("user__username", flat=True)),
            ["creator", "member"],
        )
        self.assertEqual(
            reminders.first().message,
            f"The registration deadline for project '{self.project.title}' is in 3 days",
        )

    def test_deadline_outside_window(self):
        self.set_deadline(5)
        self.assertEqual(NotificationService.check_approaching_deadlines([1, 3, 7]), 0)

    def test_beat_task(self):
        from notifications.tasks import notify_approaching_deadlines

        self.set_deadline(1)
        self.assertEqual(notify_approaching_deadlines(), 1)


class NotificationAPITests(APITestCase):
    def setUp(self):
        self.user = make_user("reader")
        self.other = make_user("other")
        self.first = Notification.objects.create(
            user=self.user, type=Notification.TYPE_ROLE_ASSIGNED, title="Role Assigned", message="a"
        )
        self.second = Notification.objects.create(
            user=self.user, type=Notification.TYPE_USER_ACCEPTED, title="Application Accepted!", message="b"
        )
        Notification.objects.create(
            user=self.other, type=Notification.TYPE_USER_ACCEPTED, title="Not mine", message="c"
        )
        self.client.force_authenticate(user=self.user)

    def test_list_and_count(self):
        response = self.client.get(reverse("notifications"))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.data["data"]), 2)

        response = self.client.get(reverse("notifications-count"))
        self.assertEqual(response.data["data"]["unread_count"], 2)

    def test_mark_read_and_unread_filter(self):
        response = self.client.put(reverse("notification-read", args=[self.first.id]))
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.data["data"]["is_read"])

        response = self.client.get(reverse("notifications"), {"unread": "true"})
        self.assertEqual([n["id"] for n in response.data["data"]], [self.second.id])

    def test_mark_all_read(self):
        response = self.client.put(reverse("notifications-read-all"))

        self.assertEqual(response.data["data"]["marked_read"], 2)
        self.assertEqual(Notification.objects.filter(user=self.other, is_read=False).count(), 1)

    def test_delete_only_own(self):
        foreign = Notification.objects.get(user=self.other)

        self.assertEqual(self.client.delete(reverse("notification-detail", args=[foreign.id])).status_code, 404)
        self.assertEqual(self.client.delete(reverse("notification-detail", args=[self.first.id])).status_code, 200)
        self.assertFalse(Notification.objects.filter(pk=self.first.id).exists())

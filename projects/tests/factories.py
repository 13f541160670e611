from datetime import date, timedelta

from django.contrib.auth import get_user_model
from django.utils import timezone

from projects.services import ProjectWizard

User = get_user_model()


class RecordingNotifier:
    """Collects dispatch() calls instead of sending anything."""

    def __init__(self):
        self.sent = []

    def dispatch(self, kind, **payload):
        self.sent.append((kind, payload))

    def kinds(self):
        return [kind for kind, _ in self.sent]


class FailingNotifier:
    def dispatch(self, kind, **payload):
        raise RuntimeError("notification backend down")


def make_user(username, **extra):
    return User.objects.create_user(
        username=username,
        email=f"{username}@example.com",
        password="testpass123",
        **extra
    )


def stage2_details(total_team=2, **overrides):
    details = {
        "duration": "3 months",
        "total_team": total_team,
        "start_date": date(2030, 1, 1),
        "end_date": date(2030, 4, 1),
        "registration_deadline": timezone.now() + timedelta(days=10),
        "location": "Remote",
        "budget": None,
    }
    details.update(overrides)
    return details


def make_project(creator, stage=1, total_team=2, roles=None, members=None, wizard=None):
    """
    Walk a project through the wizard up to `stage`.
    """
    wizard = wizard or ProjectWizard()
    project = wizard.create_stage1(creator, "Build an app", "software", "An app for matching people")
    if stage >= 2:
        project = wizard.update_stage2(project.id, creator, **stage2_details(total_team))
    if stage >= 3:
        project = wizard.update_stage3(
            project.id, creator, time_commitment="10h/week", skill_names=["Go"], conditions=[]
        )
    if stage >= 4:
        if roles is None:
            roles = [{"name": "Backend", "slots_available": total_team}]
        project = wizard.update_stage4(project.id, creator, roles=roles, members=members or [])
    if stage >= 5:
        project = wizard.update_stage5(project.id, creator, benefit_names=["Certificate"])
    return project

import shutil
import tempfile

from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import override_settings
from django.urls import reverse
from rest_framework.test import APITestCase

from projects.models import Project, ProjectApplication, ProjectRole
from .factories import make_project, make_user


STAGE2_PAYLOAD = {
    "duration": "3 months",
    "total_team": 2,
    "start_date": "2030-01-01",
    "end_date": "2030-04-01",
    "location": "Remote",
    "budget": "1500.00",
    "registration_deadline": "2029-12-01T00:00:00Z",
}


class ProjectWizardAPITests(APITestCase):
    def setUp(self):
        self.creator = make_user("creator")
        self.other = make_user("other")
        self.client.force_authenticate(user=self.creator)

    def test_full_wizard_over_http(self):
        response = self.client.post(
            reverse("project-stage1"),
            {"title": "Build an app", "project_type": "software", "description": "desc"},
            format="json",
        )
        self.assertEqual(response.status_code, 201, response.data)
        self.assertTrue(response.data["success"])
        self.assertEqual(response.data["data"]["completion_stage"], 1)
        self.assertEqual(response.data["data"]["status"], "draft")
        project_id = response.data["data"]["id"]

        response = self.client.put(reverse("project-stage2", args=[project_id]), STAGE2_PAYLOAD, format="json")
        self.assertEqual(response.status_code, 200, response.data)
        self.assertEqual(response.data["data"]["total_team"], 2)

        response = self.client.put(
            reverse("project-stage3", args=[project_id]),
            {"time_commitment": "10h/week", "required_skills": "Go, Python", "conditions": ["Weekly sync"]},
            format="json",
        )
        self.assertEqual(response.status_code, 200, response.data)
        self.assertEqual(sorted(response.data["data"]["required_skills"]), ["Go", "Python"])
        self.assertEqual(response.data["data"]["conditions"], ["Weekly sync"])

        response = self.client.put(
            reverse("project-stage4", args=[project_id]),
            {"roles": [{"name": "Backend", "slots_available": 2, "skill_names": ["Go"]}], "members": []},
            format="json",
        )
        self.assertEqual(response.status_code, 200, response.data)
        data = response.data["data"]
        self.assertEqual(data["completion_stage"], 4)
        self.assertEqual(data["total_role_slots"], 2)
        self.assertEqual(data["remaining_team"], 0)
        self.assertEqual(data["roles"][0]["skills"], ["Go"])

        response = self.client.put(
            reverse("project-stage5", args=[project_id]),
            {"benefits": '["Certificate"]', "timeline": ["Kickoff"], "tags": ["ai"]},
            format="json",
        )
        self.assertEqual(response.status_code, 200, response.data)
        data = response.data["data"]
        self.assertEqual(data["status"], "published")
        self.assertEqual(data["benefits"], ["Certificate"])
        self.assertEqual(data["timeline"][0]["name"], "Kickoff")
        self.assertEqual(data["timeline"][0]["status"], "not-started")

    def test_multipart_conditions_keep_commas(self):
        project = make_project(self.creator, stage=2)
        url = reverse("project-stage3", args=[project.id])

        response = self.client.put(
            url,
            {
                "time_commitment": "10h/week",
                "required_skills": "Go, Python",
                "conditions": "Available weekends, evenings included",
            },
            format="multipart",
        )
        self.assertEqual(response.status_code, 200, response.data)
        self.assertEqual(response.data["data"]["conditions"], ["Available weekends, evenings included"])
        self.assertEqual(sorted(response.data["data"]["required_skills"]), ["Go", "Python"])

        response = self.client.put(
            url,
            {
                "time_commitment": "10h/week",
                "required_skills": "Go",
                "conditions": ["Weekly sync, Mondays", "Remote friendly"],
            },
            format="multipart",
        )
        self.assertEqual(response.status_code, 200, response.data)
        self.assertEqual(
            response.data["data"]["conditions"],
            ["Weekly sync, Mondays", "Remote friendly"],
        )

    def test_out_of_order_stage_returns_400(self):
        project = make_project(self.creator, stage=1)

        response = self.client.put(
            reverse("project-stage3", args=[project.id]),
            {"time_commitment": "10h/week", "required_skills": ["Go"]},
            format="json",
        )

        self.assertEqual(response.status_code, 400)
        self.assertFalse(response.data["success"])
        self.assertIn("Stage 2", response.data["error"])

    def test_capacity_violation_returns_400(self):
        project = make_project(self.creator, stage=3, total_team=1)

        response = self.client.put(
            reverse("project-stage4", args=[project.id]),
            {"roles": [{"name": "Backend", "slots_available": 2}]},
            format="json",
        )

        self.assertEqual(response.status_code, 400)
        self.assertIn("capacity", response.data["error"].lower())
        self.assertEqual(Project.objects.get(pk=project.id).completion_stage, 3)

    def test_other_user_gets_403(self):
        project = make_project(self.creator, stage=1)
        self.client.force_authenticate(user=self.other)

        response = self.client.put(reverse("project-stage2", args=[project.id]), STAGE2_PAYLOAD, format="json")

        self.assertEqual(response.status_code, 403)
        self.assertFalse(response.data["success"])

    def test_missing_project_gets_404(self):
        response = self.client.put(reverse("project-stage2", args=[424242]), STAGE2_PAYLOAD, format="json")
        self.assertEqual(response.status_code, 404)

    def test_serializer_errors_are_flattened(self):
        project = make_project(self.creator, stage=1)
        payload = dict(STAGE2_PAYLOAD, total_team=0)

        response = self.client.put(reverse("project-stage2", args=[project.id]), payload, format="json")

        self.assertEqual(response.status_code, 400)
        self.assertTrue(response.data["error"].startswith("total_team:"))
        self.assertIn("total_team", response.data["errors"])

    def test_unauthenticated_gets_401(self):
        self.client.force_authenticate(user=None)

        response = self.client.post(
            reverse("project-stage1"),
            {"title": "x", "project_type": "y", "description": "z"},
            format="json",
        )

        self.assertEqual(response.status_code, 401)
        self.assertFalse(response.data["success"])

    def test_public_listing_excludes_drafts(self):
        make_project(self.creator, stage=3)
        published = make_project(self.creator, stage=5)
        self.client.force_authenticate(user=None)

        response = self.client.get(reverse("project-public-list"))

        self.assertEqual(response.status_code, 200)
        self.assertEqual([p["id"] for p in response.data["data"]], [published.id])

    def test_team_capacity_endpoint(self):
        project = make_project(self.creator, stage=4, total_team=3, roles=[{"name": "Backend", "slots_available": 2}])

        response = self.client.get(reverse("project-team-capacity", args=[project.id]))

        self.assertEqual(response.status_code, 200)
        data = response.data["data"]
        self.assertEqual(data["total_team"], 3)
        self.assertEqual(data["filled_team"], 0)
        self.assertEqual(data["total_role_slots"], 2)
        self.assertEqual(data["remaining_team"], 1)
        self.assertEqual(data["roles"][0]["name"], "Backend")

    def test_delete_project(self):
        project = make_project(self.creator, stage=2)

        self.client.force_authenticate(user=self.other)
        self.assertEqual(self.client.delete(reverse("project-detail", args=[project.id])).status_code, 403)

        self.client.force_authenticate(user=self.creator)
        response = self.client.delete(reverse("project-detail", args=[project.id]))
        self.assertEqual(response.status_code, 200)
        self.assertFalse(Project.objects.filter(pk=project.id).exists())

    def test_timeline_status_options(self):
        response = self.client.get(reverse("timeline-status-options"))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            [option["value"] for option in response.data["data"]],
            ["not-started", "in-progress", "done"],
        )


class ProjectPictureAPITests(APITestCase):
    def setUp(self):
        self.media_root = tempfile.mkdtemp()
        self.creator = make_user("creator")
        self.client.force_authenticate(user=self.creator)

    def tearDown(self):
        shutil.rmtree(self.media_root, ignore_errors=True)

    def test_multipart_stage1_stores_picture(self):
        upload = SimpleUploadedFile("cover.png", b"\x89PNG fake image", content_type="image/png")

        with override_settings(MEDIA_ROOT=self.media_root):
            response = self.client.post(
                reverse("project-stage1"),
                {"title": "Build an app", "project_type": "software", "description": "desc", "picture": upload},
                format="multipart",
            )

        self.assertEqual(response.status_code, 201, response.data)
        project = Project.objects.get(pk=response.data["data"]["id"])
        self.assertTrue(project.picture.startswith("projects/"))
        self.assertTrue(project.picture.endswith(".png"))
        self.assertIsNotNone(response.data["data"]["picture_url"])

    def test_oversized_picture_is_rejected(self):
        upload = SimpleUploadedFile("cover.png", b"x" * 64, content_type="image/png")

        with override_settings(MEDIA_ROOT=self.media_root, PROJECT_PICTURE_MAX_BYTES=16):
            response = self.client.post(
                reverse("project-stage1"),
                {"title": "Build an app", "project_type": "software", "description": "desc", "picture": upload},
                format="multipart",
            )

        self.assertEqual(response.status_code, 400)
        self.assertFalse(Project.objects.exists())


class ApplicationAPITests(APITestCase):
    def setUp(self):
        self.creator = make_user("creator")
        self.applicant = make_user("applicant")
        self.project = make_project(self.creator, stage=5, total_team=2)
        self.role = ProjectRole.objects.get(project=self.project)
        self.client.force_authenticate(user=self.applicant)

    def apply(self):
        return self.client.post(
            reverse("project-apply", args=[self.project.id]),
            {
                "project_role_id": self.role.id,
                "why_interested": "Great idea",
                "skills_experience": "Go",
                "contribution": "APIs",
            },
            format="json",
        )

    def test_apply_and_duplicate(self):
        response = self.apply()
        self.assertEqual(response.status_code, 201, response.data)
        self.assertEqual(response.data["data"]["status"], "pending")

        response = self.apply()
        self.assertEqual(response.status_code, 409)
        self.assertFalse(response.data["success"])

    def test_review_and_listings(self):
        application_id = self.apply().data["data"]["id"]

        self.client.force_authenticate(user=self.creator)
        response = self.client.get(reverse("project-applications", args=[self.project.id]))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.data["data"]), 1)

        response = self.client.put(
            reverse("application-review", args=[application_id]),
            {"action": "accept", "review_notes": "Welcome"},
            format="json",
        )
        self.assertEqual(response.status_code, 200, response.data)
        self.assertEqual(response.data["data"]["status"], "accepted")

        response = self.client.get(reverse("project-members", args=[self.project.id]))
        self.assertEqual([m["username"] for m in response.data["data"]], ["applicant"])

        self.client.force_authenticate(user=self.applicant)
        response = self.client.get(reverse("my-applications"))
        self.assertEqual(response.data["data"][0]["status"], "accepted")

        response = self.client.get(reverse("project-member"))
        self.assertEqual([p["id"] for p in response.data["data"]], [self.project.id])

    def test_withdraw(self):
        application_id = self.apply().data["data"]["id"]

        response = self.client.put(reverse("application-withdraw", args=[application_id]))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            ProjectApplication.objects.get(pk=application_id).status,
            ProjectApplication.STATUS_WITHDRAWN,
        )

    def test_invite_respond_and_remove(self):
        self.client.force_authenticate(user=self.creator)
        response = self.client.post(
            reverse("project-invite", args=[self.project.id]),
            {"user_id": self.applicant.id, "project_role_id": self.role.id},
            format="json",
        )
        self.assertEqual(response.status_code, 201, response.data)

        self.client.force_authenticate(user=self.applicant)
        response = self.client.get(reverse("my-project-invitations"))
        self.assertEqual(response.data["data"][0]["project_title"], self.project.title)

        response = self.client.put(
            reverse("project-invitation-respond", args=[self.project.id]),
            {"response": "accept"},
            format="json",
        )
        self.assertEqual(response.status_code, 200, response.data)
        self.assertEqual(response.data["data"]["status"], "accepted")

        self.client.force_authenticate(user=self.creator)
        response = self.client.delete(
            reverse("project-member-remove", args=[self.project.id, self.applicant.id])
        )
        self.assertEqual(response.status_code, 200)
        self.role.refresh_from_db()
        self.assertEqual(self.role.slots_available, 2)

    def test_application_summary(self):
        application_id = self.apply().data["data"]["id"]

        response = self.client.get(reverse("application-summary", args=[application_id]))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["data"]["applicant"]["username"], "applicant")

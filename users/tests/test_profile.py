from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework.test import APIClient

from catalog.models import Skill
from users.models import UserSkill

User = get_user_model()


class SkillProfileAPITests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(
            username="dina",
            email="dina@example.com",
            password="testpass123",
        )
        self.client.force_authenticate(user=self.user)
        self.skills_url = reverse("my-skills")

    def test_replace_skills(self):
        response = self.client.post(
            self.skills_url,
            {"skills": [{"name": "Go", "proficiency": 80}, {"name": "Python", "proficiency": 60}]},
            format="json",
        )
        self.assertEqual(response.status_code, 200, response.data)
        self.assertEqual([s["name"] for s in response.data["data"]], ["Go", "Python"])

        response = self.client.post(
            self.skills_url,
            {"skills": [{"name": "go", "proficiency": 90}]},
            format="json",
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(UserSkill.objects.filter(user=self.user).count(), 1)
        # Existing catalog row reused
        self.assertEqual(Skill.objects.filter(name__iexact="go").count(), 1)

        response = self.client.get(self.skills_url)
        self.assertEqual(response.data["data"], [{"skill_id": Skill.objects.get(name="Go").id, "name": "Go", "proficiency": 90}])

    def test_proficiency_bounds(self):
        response = self.client.post(
            self.skills_url,
            {"skills": [{"name": "Go", "proficiency": 120}]},
            format="json",
        )
        self.assertEqual(response.status_code, 400)
        self.assertFalse(response.data["success"])

    def test_collaboration_status(self):
        url = reverse("user-collaboration-status")

        response = self.client.put(url, {"status": "ready"}, format="json")
        self.assertEqual(response.status_code, 200)
        self.user.refresh_from_db()
        self.assertEqual(self.user.status_collaboration, User.COLLAB_READY)

        response = self.client.put(url, {"status": "maybe"}, format="json")
        self.assertEqual(response.status_code, 400)

    def test_profile_update(self):
        response = self.client.patch(
            reverse("user-me"),
            {"about_me": "Backend engineer", "location": "Bandung"},
            format="json",
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["data"]["location"], "Bandung")
        self.assertEqual(response.data["data"]["status_collaboration"], User.COLLAB_NOT_READY)


class PasswordChangeAPITests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(
            username="dina",
            email="dina@example.com",
            password="Old-passw0rd!",
        )
        self.client.force_authenticate(user=self.user)
        self.url = reverse("user-change-password")

    def test_profile_patch_ignores_password(self):
        response = self.client.patch(reverse("user-me"), {"password": "1"}, format="json")

        self.assertEqual(response.status_code, 200)
        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password("Old-passw0rd!"))
        self.assertFalse(self.user.check_password("1"))

    def test_weak_password_rejected(self):
        response = self.client.put(
            self.url,
            {"current_password": "Old-passw0rd!", "new_password": "1"},
            format="json",
        )

        self.assertEqual(response.status_code, 400)
        self.assertIn("new_password", response.data["errors"])
        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password("Old-passw0rd!"))

    def test_wrong_current_password(self):
        response = self.client.put(
            self.url,
            {"current_password": "nope", "new_password": "Brand-new-Passw0rd"},
            format="json",
        )

        self.assertEqual(response.status_code, 400)
        self.assertIn("current_password", response.data["errors"])

    def test_change_password(self):
        response = self.client.put(
            self.url,
            {"current_password": "Old-passw0rd!", "new_password": "Brand-new-Passw0rd"},
            format="json",
        )

        self.assertEqual(response.status_code, 200, response.data)
        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password("Brand-new-Passw0rd"))


class UserDirectoryAPITests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.creator = User.objects.create_user(username="creator", password="testpass123")
        self.ready = User.objects.create_user(
            username="ready_rina",
            password="testpass123",
            status_collaboration=User.COLLAB_READY,
        )
        self.busy = User.objects.create_user(username="busy_budi", password="testpass123")
        UserSkill.objects.create(user=self.ready, skill=Skill.objects.create(name="Go"), proficiency=70)
        self.client.force_authenticate(user=self.creator)

    def test_list_all_users(self):
        response = self.client.get(reverse("user-list"))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            [u["username"] for u in response.data["data"]],
            ["busy_budi", "creator", "ready_rina"],
        )
        self.assertNotIn("email", response.data["data"][0])

    def test_search_by_name(self):
        response = self.client.get(reverse("user-list"), {"q": "rina"})

        self.assertEqual([u["id"] for u in response.data["data"]], [self.ready.id])

    def test_ready_users_only(self):
        response = self.client.get(reverse("user-ready-list"))

        self.assertEqual(response.status_code, 200)
        data = response.data["data"]
        self.assertEqual([u["username"] for u in data], ["ready_rina"])
        self.assertEqual(data[0]["skills"], [{"skill_id": Skill.objects.get(name="Go").id, "name": "Go", "proficiency": 70}])

    def test_requires_authentication(self):
        self.client.force_authenticate(user=None)

        self.assertEqual(self.client.get(reverse("user-ready-list")).status_code, 401)

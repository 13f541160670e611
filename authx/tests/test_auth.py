from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework.test import APIClient

User = get_user_model()


class AuthFlowTests(TestCase):
    def setUp(self):
        self.client = APIClient()

    def test_signup_login_me(self):
        response = self.client.post(
            reverse("signup"),
            {
                "username": "rizky",
                "email": "rizky@example.com",
                "password": "Collab0rate!2030",
                "first_name": "Rizky",
            },
            format="json",
        )
        self.assertEqual(response.status_code, 201, response.data)
        self.assertTrue(User.objects.filter(username="rizky").exists())

        response = self.client.post(
            reverse("login"),
            {"email": "RIZKY@example.com", "password": "Collab0rate!2030"},
            format="json",
        )
        self.assertEqual(response.status_code, 200, response.data)
        access = response.data["data"]["access"]

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {access}")
        response = self.client.get(reverse("auth-me"))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["data"]["username"], "rizky")

    def test_duplicate_email(self):
        User.objects.create_user(username="taken", email="taken@example.com", password="x")

        response = self.client.post(
            reverse("signup"),
            {"username": "another", "email": "taken@example.com", "password": "Collab0rate!2030"},
            format="json",
        )
        self.assertEqual(response.status_code, 400)
        self.assertFalse(response.data["success"])

    def test_bad_credentials(self):
        User.objects.create_user(username="user", email="user@example.com", password="right-pass-123")

        response = self.client.post(
            reverse("login"),
            {"email": "user@example.com", "password": "wrong"},
            format="json",
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["error"], "Invalid credentials")

from django.test import TestCase
from rest_framework.test import APIRequestFactory

from core.exceptions import ConflictError, custom_exception_handler


class HealthCheckTests(TestCase):
    def test_health(self):
        response = self.client.get("/api/health/")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["database"], "ok")


class ExceptionHandlerTests(TestCase):
    def test_domain_error_envelope(self):
        response = custom_exception_handler(ConflictError("Already applied"), {})

        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.data, {"success": False, "error": "Already applied"})

    def test_unexpected_error_hides_details(self):
        request = APIRequestFactory().get("/")

        with self.assertLogs("synergazing.api", level="ERROR"):
            response = custom_exception_handler(RuntimeError("db password leaked"), {"request": request})

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.data["error"], "Internal server error.")

import logging

from django.db import connection
from django.db.utils import OperationalError
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status

logger = logging.getLogger("synergazing.api")


class HealthCheckView(APIView):
    """
    GET /api/health/
    Liveness plus a trivial database round-trip.
    """
    permission_classes = []
    authentication_classes = []

    def get(self, request):
        try:
            with connection.cursor() as cursor:
                cursor.execute("SELECT 1")
            database = "ok"
        except OperationalError as exc:
            logger.error(f"Health check database failure: {exc}")
            database = "unavailable"

        healthy = database == "ok"
        return Response(
            {"success": healthy, "status": "ok" if healthy else "degraded", "database": database},
            status=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        )

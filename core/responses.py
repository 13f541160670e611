from rest_framework.response import Response
from rest_framework import status


def api_success(data=None, message="", status_code=status.HTTP_200_OK):
    """
    Standard success envelope used by every endpoint:
    {"success": true, "message": "...", "data": ...}
    """
    return Response(
        {"success": True, "message": message, "data": data},
        status=status_code,
    )

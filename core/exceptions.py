from rest_framework.views import exception_handler as drf_exception_handler
from rest_framework.response import Response
from rest_framework import status
import logging

logger = logging.getLogger("synergazing.api")


# ---- Domain errors ------------------------------------------------------
# Raised by the service layer. Views never catch these; the handler below
# turns them into {"success": false, "error": "..."} responses.


class DomainError(Exception):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Request could not be processed"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(DomainError):
    """Missing or malformed input. Always client-fixable."""
    default_message = "Invalid input"


class UnauthorizedError(DomainError):
    """Caller is not the creator/owner/applicant of the resource."""
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "You are not allowed to perform this action"


class NotFoundError(DomainError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class StageSequenceError(DomainError):
    default_message = "Previous stage must be completed first"


class CapacityError(DomainError):
    default_message = "Team capacity exceeded"


class ConflictError(DomainError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflicting request"


def _first_message(detail):
    """
    Flatten DRF error detail (dict / list / str) into one readable line.
    """
    if isinstance(detail, dict):
        for field, value in detail.items():
            message = _first_message(value)
            if field in ("detail", "non_field_errors"):
                return message
            return f"{field}: {message}"
        return ""
    if isinstance(detail, (list, tuple)):
        return _first_message(detail[0]) if detail else ""
    return str(detail)


def custom_exception_handler(exc, context):
    """
    Wrap domain, DRF and Django exceptions into a consistent response format.

    Success responses (2xx) are not touched.
    Only errors come through here.
    """
    if isinstance(exc, DomainError):
        return Response(
            {"success": False, "error": exc.message},
            status=exc.status_code,
        )

    response = drf_exception_handler(exc, context)

    # If DRF handled it, wrap it
    if response is not None:
        body = {"success": False, "error": _first_message(response.data)}
        if isinstance(response.data, dict) and "detail" not in response.data:
            body["errors"] = response.data
        return Response(body, status=response.status_code, headers=_auth_headers(response))

    # Unhandled exceptions -> 500
    logger.exception("Unhandled API exception", exc_info=exc)

    return Response(
        {"success": False, "error": "Internal server error."},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def _auth_headers(response):
    headers = {}
    if "WWW-Authenticate" in response:
        headers["WWW-Authenticate"] = response["WWW-Authenticate"]
    return headers

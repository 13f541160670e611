# notifications/tasks.py

import logging

from celery import shared_task
from django.conf import settings

from .services import NotificationService

logger = logging.getLogger("synergazing.notifications")


@shared_task
def deliver_notification(kind: str, payload: dict):
    """
    Async wrapper around NotificationService.notify_<kind>(**payload).
    """
    handler = getattr(NotificationService, f"notify_{kind}", None)
    if handler is None:
        logger.warning(f"Unknown notification kind '{kind}'")
        return

    try:
        handler(**payload)
    except Exception as e:
        # Avoid crashing worker if a notification fails
        logger.warning(f"Notification '{kind}' failed for {payload}: {e}")


@shared_task
def notify_approaching_deadlines():
    """
    Beat task: registration deadline reminders for DEADLINE_REMINDER_DAYS ahead.
    """
    return NotificationService.check_approaching_deadlines(settings.DEADLINE_REMINDER_DAYS)

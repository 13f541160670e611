import logging

logger = logging.getLogger("synergazing.projects")


class NotifyingService:
    """
    Base for services that fire best-effort notifications.

    notifier: anything with dispatch(kind, **payload); None disables
    notifications. A failing notifier never fails the calling operation.
    """

    def __init__(self, notifier=None):
        self.notifier = notifier

    def _notify(self, kind: str, **payload):
        if self.notifier is None:
            return
        try:
            self.notifier.dispatch(kind, **payload)
        except Exception as e:
            logger.warning(f"Failed to dispatch '{kind}' notification {payload}: {e}")

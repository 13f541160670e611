# notifications/views.py

from rest_framework.views import APIView
from rest_framework.permissions import IsAuthenticated

from core.exceptions import NotFoundError
from core.responses import api_success
from .models import Notification
from .serializers import NotificationSerializer
from .services import NotificationService


def _get_own_notification(user, notification_id):
    notification = Notification.objects.filter(pk=notification_id, user=user).first()
    if notification is None:
        raise NotFoundError("Notification not found")
    return notification


class MyNotificationsView(APIView):
    """
    GET /api/notifications/
    GET /api/notifications/?unread=true
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        unread_only = request.query_params.get("unread")
        qs = Notification.objects.filter(user=request.user)

        if unread_only and unread_only.lower() in ("1", "true", "yes"):
            qs = qs.filter(is_read=False)

        serializer = NotificationSerializer(qs, many=True)
        return api_success(serializer.data, "Notifications retrieved successfully")


class UnreadCountView(APIView):
    """GET /api/notifications/count/"""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return api_success(
            {"unread_count": NotificationService.unread_count(request.user)},
            "Unread count retrieved successfully",
        )


class MarkReadView(APIView):
    """PUT /api/notifications/<id>/read/"""
    permission_classes = [IsAuthenticated]

    def put(self, request, notification_id):
        notification = _get_own_notification(request.user, notification_id)
        if not notification.is_read:
            notification.is_read = True
            notification.save(update_fields=["is_read"])
        return api_success(NotificationSerializer(notification).data, "Notification marked as read")


class MarkAllReadView(APIView):
    """PUT /api/notifications/read-all/"""
    permission_classes = [IsAuthenticated]

    def put(self, request):
        updated = NotificationService.mark_all_read(request.user)
        return api_success({"marked_read": updated}, "All notifications marked as read")


class NotificationDetailView(APIView):
    """DELETE /api/notifications/<id>/"""
    permission_classes = [IsAuthenticated]

    def delete(self, request, notification_id):
        _get_own_notification(request.user, notification_id).delete()
        return api_success(None, "Notification deleted successfully")

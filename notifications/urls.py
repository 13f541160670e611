from django.urls import path
from .views import (
    MyNotificationsView,
    UnreadCountView,
    MarkReadView,
    MarkAllReadView,
    NotificationDetailView,
)

urlpatterns = [
    path("", MyNotificationsView.as_view(), name="notifications"),
    path("count/", UnreadCountView.as_view(), name="notifications-count"),
    path("read-all/", MarkAllReadView.as_view(), name="notifications-read-all"),
    path("<int:notification_id>/", NotificationDetailView.as_view(), name="notification-detail"),
    path("<int:notification_id>/read/", MarkReadView.as_view(), name="notification-read"),
]

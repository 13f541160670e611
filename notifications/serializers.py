from rest_framework import serializers

from .models import Notification


class NotificationSerializer(serializers.ModelSerializer):
    project_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = Notification
        fields = [
            "id",
            "type",
            "title",
            "message",
            "data",
            "project_id",
            "is_read",
            "created_at",
        ]

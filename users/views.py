# users/views.py
import logging

from rest_framework.views import APIView
from rest_framework.permissions import IsAuthenticated

from core.responses import api_success
from .serializers import (
    UserSerializer,
    UpdateProfileSerializer,
    ChangePasswordSerializer,
    UserDirectorySerializer,
    UserSkillSerializer,
    UpdateSkillsSerializer,
    CollaborationStatusSerializer,
)
from .services import SkillProfileService

logger = logging.getLogger("synergazing.users")


class MyProfileView(APIView):
    """
    GET   /api/users/me/
    PATCH /api/users/me/
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return api_success(UserSerializer(request.user).data, "Profile retrieved successfully")

    def patch(self, request):
        serializer = UpdateProfileSerializer(request.user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        return api_success(UserSerializer(user).data, "Profile updated successfully")


class ChangePasswordView(APIView):
    """PUT /api/users/me/password/  Body: {"current_password", "new_password"}"""
    permission_classes = [IsAuthenticated]

    def put(self, request):
        serializer = ChangePasswordSerializer(request.user, data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        logger.info(f"Password changed: user={user.id}")
        return api_success(None, "Password updated successfully")


class CollaborationStatusView(APIView):
    """PUT /api/users/me/collaboration-status/  Body: {"status": "ready" | "not ready"}"""
    permission_classes = [IsAuthenticated]

    def put(self, request):
        serializer = CollaborationStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = SkillProfileService.set_collaboration_status(
            request.user, serializer.validated_data["status"]
        )
        return api_success(UserSerializer(user).data, "Collaboration status updated")


class MySkillsView(APIView):
    """
    GET  /api/skills/
    POST /api/skills/   Body: {"skills": [{"name": "Go", "proficiency": 80}, ...]}
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        skills = request.user.user_skills.select_related("skill")
        return api_success(UserSkillSerializer(skills, many=True).data, "Skills retrieved successfully")

    def post(self, request):
        serializer = UpdateSkillsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        skills = SkillProfileService.replace_user_skills(
            request.user, serializer.validated_data["skills"]
        )
        return api_success(UserSkillSerializer(skills, many=True).data, "Skills updated successfully")


class UserListView(APIView):
    """
    GET /api/users/           all active users (?q= filters by name)
    GET /api/users/ready/     only users ready to collaborate
    """
    permission_classes = [IsAuthenticated]
    ready_only = False

    def get(self, request):
        users = SkillProfileService.list_users(
            ready_only=self.ready_only,
            search=request.query_params.get("q", "").strip(),
        )
        return api_success(UserDirectorySerializer(users, many=True).data, "Users retrieved successfully")


class ReadyUsersView(UserListView):
    ready_only = True

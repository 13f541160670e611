from rest_framework.views import APIView
from rest_framework.permissions import IsAuthenticated
from rest_framework import status

from core.responses import api_success
from notifications.services import NotificationDispatcher
from ..serializers import (
    ApplySerializer,
    ReviewSerializer,
    InviteSerializer,
    InvitationResponseSerializer,
    ApplicationSerializer,
    InvitationSerializer,
    ProjectMemberSerializer,
)
from ..services import ProjectMembershipService


def get_membership_service():
    return ProjectMembershipService(notifier=NotificationDispatcher())


class ApplyProjectView(APIView):
    """
    POST /api/projects/<id>/apply/
    Body: project_role_id, why_interested, skills_experience, contribution
    """
    permission_classes = [IsAuthenticated]

    def post(self, request, project_id):
        serializer = ApplySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        application = get_membership_service().apply(
            request.user,
            project_id,
            data["project_role_id"],
            why_interested=data["why_interested"],
            skills_experience=data["skills_experience"],
            contribution=data["contribution"],
        )
        return api_success(
            ApplicationSerializer(application).data,
            "Application submitted successfully",
            status.HTTP_201_CREATED,
        )


class ProjectApplicationsView(APIView):
    """
    GET /api/projects/<id>/applications/
    GET /api/projects/<id>/applications/?status=pending
    """
    permission_classes = [IsAuthenticated]

    def get(self, request, project_id):
        applications = get_membership_service().list_project_applications(
            project_id,
            request.user,
            status=request.query_params.get("status"),
        )
        return api_success(ApplicationSerializer(applications, many=True).data, "Applications retrieved successfully")


class ApplicationDetailView(APIView):
    """GET /api/projects/applications/<id>/  creator or applicant"""
    permission_classes = [IsAuthenticated]

    def get(self, request, application_id):
        application = get_membership_service().get_application(application_id, request.user)
        return api_success(ApplicationSerializer(application).data, "Application retrieved successfully")


class ApplicationSummaryView(APIView):
    """GET /api/projects/applications/<id>/summary/"""
    permission_classes = [IsAuthenticated]

    def get(self, request, application_id):
        summary = get_membership_service().get_application_summary(application_id, request.user)
        return api_success(summary, "Application summary retrieved successfully")


class ReviewApplicationView(APIView):
    """
    PUT /api/projects/applications/<id>/review/
    Body: {"action": "accept" | "reject", "review_notes": "..."}
    """
    permission_classes = [IsAuthenticated]

    def put(self, request, application_id):
        serializer = ReviewSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        application = get_membership_service().review_application(
            application_id,
            request.user,
            serializer.validated_data["action"],
            notes=serializer.validated_data["review_notes"],
        )
        return api_success(ApplicationSerializer(application).data, f"Application {application.status}")


class WithdrawApplicationView(APIView):
    """PUT /api/projects/applications/<id>/withdraw/"""
    permission_classes = [IsAuthenticated]

    def put(self, request, application_id):
        application = get_membership_service().withdraw_application(application_id, request.user)
        return api_success(ApplicationSerializer(application).data, "Application withdrawn successfully")


class ProjectMembersView(APIView):
    """GET /api/projects/<id>/members/"""
    permission_classes = [IsAuthenticated]

    def get(self, request, project_id):
        members = get_membership_service().list_project_members(project_id, request.user)
        return api_success(ProjectMemberSerializer(members, many=True).data, "Members retrieved successfully")


class InviteMemberView(APIView):
    """
    POST /api/projects/<id>/invite/
    Body: user_id, project_role_id, role_description (optional)
    """
    permission_classes = [IsAuthenticated]

    def post(self, request, project_id):
        serializer = InviteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        member = get_membership_service().invite_member(
            project_id,
            request.user,
            data["user_id"],
            data["project_role_id"],
            role_description=data["role_description"],
        )
        return api_success(
            ProjectMemberSerializer(member).data,
            "Invitation sent successfully",
            status.HTTP_201_CREATED,
        )


class RespondInvitationView(APIView):
    """
    PUT /api/projects/<id>/invitation/respond/
    Body: {"response": "accept" | "decline"}
    """
    permission_classes = [IsAuthenticated]

    def put(self, request, project_id):
        serializer = InvitationResponseSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        member = get_membership_service().respond_to_invitation(
            project_id,
            request.user,
            serializer.validated_data["response"],
        )
        return api_success(ProjectMemberSerializer(member).data, f"Invitation {member.status}")


class RemoveMemberView(APIView):
    """DELETE /api/projects/<id>/members/<user_id>/"""
    permission_classes = [IsAuthenticated]

    def delete(self, request, project_id, user_id):
        get_membership_service().remove_member(project_id, user_id, request.user)
        return api_success(None, "Member removed successfully")


class MyApplicationsView(APIView):
    """GET /api/user/applications/  (?status=pending)"""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        applications = get_membership_service().list_user_applications(
            request.user,
            status=request.query_params.get("status"),
        )
        return api_success(ApplicationSerializer(applications, many=True).data, "Applications retrieved successfully")


class MyInvitationsView(APIView):
    """GET /api/user/project-invitations/"""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        invitations = get_membership_service().list_user_invitations(request.user)
        return api_success(InvitationSerializer(invitations, many=True).data, "Invitations retrieved successfully")

from rest_framework.views import APIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.parsers import JSONParser, FormParser, MultiPartParser
from rest_framework import status

from core.responses import api_success
from notifications.services import NotificationDispatcher
from ..models import ProjectTimeline
from ..serializers import (
    Stage1Serializer,
    Stage2Serializer,
    Stage3Serializer,
    Stage4Serializer,
    Stage5Serializer,
    TimelineStatusSerializer,
    ProjectSerializer,
    ProjectSummarySerializer,
    ProjectTimelineSerializer,
    TeamCapacitySerializer,
)
from ..services import ProjectWizard


def get_wizard():
    return ProjectWizard(notifier=NotificationDispatcher())


class _StageView(APIView):
    permission_classes = [IsAuthenticated]
    parser_classes = [JSONParser, FormParser, MultiPartParser]

    def respond(self, project, stage):
        project = get_wizard().get_project(project.id, self.request.user)
        return api_success(
            ProjectSerializer(project).data,
            f"Stage {stage} saved successfully",
        )


class ProjectStage1View(_StageView):
    """
    POST /api/projects/stage1/
    Body (JSON or multipart): title, project_type, description, picture (file, optional)
    """

    def post(self, request):
        serializer = Stage1Serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        project = get_wizard().create_stage1(
            request.user,
            data["title"],
            data["project_type"],
            data["description"],
            picture=data.get("picture"),
        )
        return api_success(
            ProjectSerializer(project).data,
            "Project created successfully",
            status.HTTP_201_CREATED,
        )


class ProjectStage2View(_StageView):
    """PUT /api/projects/<id>/stage2/"""

    def put(self, request, project_id):
        serializer = Stage2Serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        project = get_wizard().update_stage2(project_id, request.user, **serializer.validated_data)
        return self.respond(project, 2)


class ProjectStage3View(_StageView):
    """PUT /api/projects/<id>/stage3/"""

    def put(self, request, project_id):
        serializer = Stage3Serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        project = get_wizard().update_stage3(
            project_id,
            request.user,
            time_commitment=data["time_commitment"],
            skill_names=data["required_skills"],
            conditions=data["conditions"],
        )
        return self.respond(project, 3)


class ProjectStage4View(_StageView):
    """
    PUT /api/projects/<id>/stage4/
    Body:
    {
      "roles":   [{"name", "slots_available", "description", "skill_names"}],
      "members": [{"name", "role_name", "role_description", "skill_names"}]
    }
    """
    parser_classes = [JSONParser]

    def put(self, request, project_id):
        serializer = Stage4Serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        project = get_wizard().update_stage4(project_id, request.user, **serializer.validated_data)
        return self.respond(project, 4)


class ProjectStage5View(_StageView):
    """PUT /api/projects/<id>/stage5/"""

    def put(self, request, project_id):
        serializer = Stage5Serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        project = get_wizard().update_stage5(
            project_id,
            request.user,
            benefit_names=data["benefits"],
            timeline_names=data["timeline"],
            tag_names=data["tags"],
        )
        return self.respond(project, 5)


class ProjectListView(APIView):
    """GET /api/projects/  projects I created or belong to"""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        projects = get_wizard().list_user_projects(request.user)
        return api_success(ProjectSummarySerializer(projects, many=True).data, "Projects retrieved successfully")


class CreatedProjectsView(APIView):
    """GET /api/projects/created/"""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        projects = get_wizard().list_created_projects(request.user)
        return api_success(ProjectSummarySerializer(projects, many=True).data, "Created projects retrieved successfully")


class MemberProjectsView(APIView):
    """GET /api/projects/member/"""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        projects = get_wizard().list_member_projects(request.user)
        return api_success(ProjectSummarySerializer(projects, many=True).data, "Member projects retrieved successfully")


class PublicProjectListView(APIView):
    """
    GET /api/projects/all/
    GET /api/projects/all/?q=app&type=software&open=true
    """
    permission_classes = []
    authentication_classes = []

    def get(self, request):
        open_only = request.query_params.get("open", "").lower() in ("1", "true", "yes")
        projects = get_wizard().list_public_projects(
            search=request.query_params.get("q", "").strip(),
            project_type=request.query_params.get("type", "").strip(),
            open_only=open_only,
        )
        return api_success(ProjectSummarySerializer(projects, many=True).data, "Projects retrieved successfully")


class PublicProjectDetailView(APIView):
    """GET /api/projects/public/<id>/"""
    permission_classes = []
    authentication_classes = []

    def get(self, request, project_id):
        project = get_wizard().get_public_project(project_id)
        return api_success(ProjectSerializer(project).data, "Project retrieved successfully")


class ProjectDetailView(APIView):
    """
    GET    /api/projects/<id>/   creator or member
    DELETE /api/projects/<id>/   creator only
    """
    permission_classes = [IsAuthenticated]

    def get(self, request, project_id):
        project = get_wizard().get_project(project_id, request.user)
        return api_success(ProjectSerializer(project).data, "Project retrieved successfully")

    def delete(self, request, project_id):
        get_wizard().delete_project(project_id, request.user)
        return api_success(None, "Project deleted successfully")


class TeamCapacityView(APIView):
    """GET /api/projects/<id>/team-capacity/"""
    permission_classes = [IsAuthenticated]

    def get(self, request, project_id):
        project, capacity = get_wizard().get_team_capacity(project_id, request.user)
        payload = dict(
            capacity.as_dict(),
            members=project.members.all(),
            roles=project.roles.all(),
        )
        return api_success(TeamCapacitySerializer(payload).data, "Team capacity retrieved successfully")


class TimelineStatusOptionsView(APIView):
    """GET /api/projects/timeline-status-options/"""
    permission_classes = []
    authentication_classes = []

    def get(self, request):
        return api_success(ProjectTimeline.status_options(), "Timeline status options retrieved successfully")


class TimelineStatusUpdateView(APIView):
    """
    PUT /api/projects/<id>/timeline/<entry_id>/status/
    Body: {"status": "not-started" | "in-progress" | "done"}
    """
    permission_classes = [IsAuthenticated]

    def put(self, request, project_id, entry_id):
        serializer = TimelineStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        entry = get_wizard().update_timeline_status(
            project_id,
            entry_id,
            request.user,
            serializer.validated_data["status"],
        )
        return api_success(ProjectTimelineSerializer(entry).data, "Timeline status updated successfully")

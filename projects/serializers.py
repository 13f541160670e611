import json

from django.core.files.storage import default_storage
from rest_framework import serializers
from rest_framework.utils import html

from users.serializers import UserSummarySerializer
from .capacity import capacity_for_project
from .models import (
    Project,
    ProjectApplication,
    ProjectMember,
    ProjectRole,
    ProjectTimeline,
)


# ─────────────────────────────────────────────────────────────
# Input
# ─────────────────────────────────────────────────────────────

class StringListField(serializers.Field):
    """
    A list of strings sent as a JSON list, a JSON-encoded list
    (multipart forms), repeated keys or a comma separated string.

    split_csv=False keeps a single plain value as one item, for free
    text that may itself contain commas.
    """
    default_error_messages = {
        "invalid": "Expected a list of strings.",
    }

    def __init__(self, *args, split_csv=True, **kwargs):
        self.split_csv = split_csv
        super().__init__(*args, **kwargs)

    def get_value(self, dictionary):
        # Repeated multipart keys: tags=a&tags=b
        if html.is_html_input(dictionary) and self.field_name in dictionary:
            values = dictionary.getlist(self.field_name)
            if len(values) > 1:
                return values
        return super().get_value(dictionary)

    def to_internal_value(self, data):
        # QueryDict.getlist style: ["a", "b"] or a single JSON/CSV string
        if isinstance(data, str):
            text = data.strip()
            if not text:
                return []
            if text.startswith("["):
                try:
                    data = json.loads(text)
                except ValueError:
                    self.fail("invalid")
            elif self.split_csv:
                data = text.split(",")
            else:
                data = [text]

        if not isinstance(data, (list, tuple)):
            self.fail("invalid")

        items = []
        for item in data:
            if not isinstance(item, (str, int, float)):
                self.fail("invalid")
            item = str(item).strip()
            if item:
                items.append(item)
        return items

    def to_representation(self, value):
        return list(value)


class Stage1Serializer(serializers.Serializer):
    title = serializers.CharField(max_length=255)
    project_type = serializers.CharField(max_length=100)
    description = serializers.CharField()
    picture = serializers.FileField(required=False, allow_null=True)


class Stage2Serializer(serializers.Serializer):
    duration = serializers.CharField(max_length=100)
    total_team = serializers.IntegerField(min_value=1)
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    location = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
    budget = serializers.DecimalField(max_digits=14, decimal_places=2, required=False, allow_null=True, default=None)
    registration_deadline = serializers.DateTimeField()

    def validate(self, attrs):
        if attrs["end_date"] < attrs["start_date"]:
            raise serializers.ValidationError("End date cannot be before start date")
        return attrs


class Stage3Serializer(serializers.Serializer):
    time_commitment = serializers.CharField(max_length=255)
    required_skills = StringListField()
    conditions = StringListField(split_csv=False, required=False, default=list)


class RoleInputSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    slots_available = serializers.IntegerField(min_value=0)
    description = serializers.CharField(required=False, allow_blank=True, default="")
    skill_names = StringListField(required=False, default=list)


class MemberInputSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=150)
    role_name = serializers.CharField(max_length=100)
    role_description = serializers.CharField(required=False, allow_blank=True, default="")
    skill_names = StringListField(required=False, default=list)


class Stage4Serializer(serializers.Serializer):
    roles = RoleInputSerializer(many=True, required=False, default=list)
    members = MemberInputSerializer(many=True, required=False, default=list)


class Stage5Serializer(serializers.Serializer):
    benefits = StringListField()
    timeline = StringListField(required=False, default=list)
    tags = StringListField(required=False, default=list)


class TimelineStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=ProjectTimeline.STATUS_CHOICES)


class ApplySerializer(serializers.Serializer):
    project_role_id = serializers.IntegerField()
    why_interested = serializers.CharField()
    skills_experience = serializers.CharField()
    contribution = serializers.CharField()


class ReviewSerializer(serializers.Serializer):
    action = serializers.ChoiceField(choices=["accept", "reject"])
    review_notes = serializers.CharField(required=False, allow_blank=True, default="")


class InviteSerializer(serializers.Serializer):
    user_id = serializers.IntegerField()
    project_role_id = serializers.IntegerField()
    role_description = serializers.CharField(required=False, allow_blank=True, default="")


class InvitationResponseSerializer(serializers.Serializer):
    response = serializers.ChoiceField(choices=["accept", "decline"])


# ─────────────────────────────────────────────────────────────
# Output
# ─────────────────────────────────────────────────────────────

class ProjectRoleSerializer(serializers.ModelSerializer):
    skills = serializers.SlugRelatedField(slug_field="name", many=True, read_only=True)

    class Meta:
        model = ProjectRole
        fields = ["id", "name", "slots_available", "description", "skills"]


class ProjectMemberSerializer(serializers.ModelSerializer):
    user = UserSummarySerializer(read_only=True)
    username = serializers.CharField(source="user.username", read_only=True)
    role_id = serializers.IntegerField(source="role.id", read_only=True)
    role_name = serializers.CharField(source="role.name", read_only=True)
    skills = serializers.SlugRelatedField(slug_field="name", many=True, read_only=True)

    class Meta:
        model = ProjectMember
        fields = [
            "id",
            "user",
            "username",
            "role_id",
            "role_name",
            "role_description",
            "skills",
            "status",
            "source",
            "created_at",
        ]


class ProjectTimelineSerializer(serializers.ModelSerializer):
    timeline_id = serializers.IntegerField(source="timeline.id", read_only=True)
    name = serializers.CharField(source="timeline.name", read_only=True)
    color = serializers.SerializerMethodField()

    class Meta:
        model = ProjectTimeline
        fields = ["id", "timeline_id", "name", "status", "color"]

    def get_color(self, obj):
        return ProjectTimeline.STATUS_COLORS.get(obj.status)


class ProjectSummarySerializer(serializers.ModelSerializer):
    """Compact card used by project listings."""
    creator = UserSummarySerializer(read_only=True)
    picture_url = serializers.SerializerMethodField()
    tags = serializers.SlugRelatedField(slug_field="name", many=True, read_only=True)

    class Meta:
        model = Project
        fields = [
            "id",
            "creator",
            "title",
            "project_type",
            "description",
            "picture_url",
            "status",
            "completion_stage",
            "total_team",
            "registration_deadline",
            "tags",
            "created_at",
        ]

    def get_picture_url(self, obj):
        if not obj.picture:
            return None
        return default_storage.url(obj.picture)

    def to_representation(self, instance):
        data = super().to_representation(instance)
        data.update(capacity_for_project(instance).as_dict())
        return data


class ProjectSerializer(ProjectSummarySerializer):
    required_skills = serializers.SlugRelatedField(slug_field="name", many=True, read_only=True)
    conditions = serializers.SlugRelatedField(slug_field="description", many=True, read_only=True)
    roles = ProjectRoleSerializer(many=True, read_only=True)
    members = ProjectMemberSerializer(many=True, read_only=True)
    benefits = serializers.SlugRelatedField(slug_field="name", many=True, read_only=True)
    timeline = ProjectTimelineSerializer(source="timeline_entries", many=True, read_only=True)

    class Meta(ProjectSummarySerializer.Meta):
        fields = ProjectSummarySerializer.Meta.fields + [
            "duration",
            "start_date",
            "end_date",
            "location",
            "budget",
            "time_commitment",
            "required_skills",
            "conditions",
            "roles",
            "members",
            "benefits",
            "timeline",
            "updated_at",
        ]


class ApplicationSerializer(serializers.ModelSerializer):
    user = UserSummarySerializer(read_only=True)
    project_id = serializers.IntegerField(read_only=True)
    project_title = serializers.CharField(source="project.title", read_only=True)
    role_id = serializers.IntegerField(read_only=True)
    role_name = serializers.CharField(source="role.name", read_only=True, default=None)
    reviewed_by_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = ProjectApplication
        fields = [
            "id",
            "project_id",
            "project_title",
            "role_id",
            "role_name",
            "user",
            "status",
            "why_interested",
            "skills_experience",
            "contribution",
            "reviewed_by_id",
            "review_notes",
            "reviewed_at",
            "applied_at",
        ]


class InvitationSerializer(serializers.ModelSerializer):
    project_id = serializers.IntegerField(read_only=True)
    project_title = serializers.CharField(source="project.title", read_only=True)
    invited_by = serializers.CharField(source="project.creator.username", read_only=True)
    role_id = serializers.IntegerField(read_only=True)
    role_name = serializers.CharField(source="role.name", read_only=True)

    class Meta:
        model = ProjectMember
        fields = [
            "id",
            "project_id",
            "project_title",
            "invited_by",
            "role_id",
            "role_name",
            "role_description",
            "status",
            "created_at",
        ]


class TeamCapacitySerializer(serializers.Serializer):
    total_team = serializers.IntegerField()
    filled_team = serializers.IntegerField()
    total_role_slots = serializers.IntegerField()
    remaining_team = serializers.IntegerField()
    members = ProjectMemberSerializer(many=True)
    roles = ProjectRoleSerializer(many=True)

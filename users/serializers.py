from django.contrib.auth.password_validation import validate_password
from rest_framework import serializers
from .models import User, UserSkill


class UserSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ['id', 'username', 'first_name', 'last_name', 'profile_picture']


class UserSkillSerializer(serializers.ModelSerializer):
    name = serializers.CharField(source='skill.name', read_only=True)
    skill_id = serializers.IntegerField(source='skill.id', read_only=True)

    class Meta:
        model = UserSkill
        fields = ['skill_id', 'name', 'proficiency']


class UserSerializer(serializers.ModelSerializer):
    skills = UserSkillSerializer(source='user_skills', many=True, read_only=True)

    class Meta:
        model = User
        fields = [
            'id',
            'username',
            'email',
            'first_name',
            'last_name',
            'phone',
            'about_me',
            'location',
            'profile_picture',
            'status_collaboration',
            'skills',
            'date_joined',
        ]


class UpdateProfileSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ['first_name', 'last_name', 'phone', 'about_me', 'location', 'profile_picture']


class ChangePasswordSerializer(serializers.Serializer):
    current_password = serializers.CharField(write_only=True)
    new_password = serializers.CharField(write_only=True)

    def validate_current_password(self, value):
        if not self.instance.check_password(value):
            raise serializers.ValidationError("Current password is incorrect")
        return value

    def validate_new_password(self, value):
        validate_password(value, self.instance)
        return value

    def update(self, instance, validated_data):
        instance.set_password(validated_data['new_password'])
        instance.save(update_fields=['password'])
        return instance


class SkillEntrySerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    proficiency = serializers.IntegerField(min_value=0, max_value=100, default=0)


class UpdateSkillsSerializer(serializers.Serializer):
    skills = SkillEntrySerializer(many=True, allow_empty=True)


class CollaborationStatusSerializer(serializers.Serializer):
    status = serializers.CharField()


class UserDirectorySerializer(serializers.ModelSerializer):
    """Public card for user discovery; no contact details."""
    skills = UserSkillSerializer(source='user_skills', many=True, read_only=True)

    class Meta:
        model = User
        fields = [
            'id',
            'username',
            'first_name',
            'last_name',
            'profile_picture',
            'about_me',
            'location',
            'status_collaboration',
            'skills',
        ]

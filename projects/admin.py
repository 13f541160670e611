from django.contrib import admin
from .models import (
    Project, ProjectCondition, ProjectRole, ProjectMember,
    ProjectTimeline, ProjectApplication
)


class ProjectConditionInline(admin.TabularInline):
    model = ProjectCondition
    extra = 0


class ProjectRoleInline(admin.TabularInline):
    model = ProjectRole
    extra = 0
    fields = ('name', 'slots_available', 'description')


class ProjectTimelineInline(admin.TabularInline):
    model = ProjectTimeline
    extra = 0


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ('title', 'creator', 'status', 'completion_stage', 'total_team', 'registration_deadline')
    list_filter = ('status', 'completion_stage', 'project_type')
    search_fields = ('title', 'description', 'creator__username')
    date_hierarchy = 'created_at'
    inlines = [ProjectConditionInline, ProjectRoleInline, ProjectTimelineInline]

@admin.register(ProjectMember)
class ProjectMemberAdmin(admin.ModelAdmin):
    list_display = ('user', 'project', 'role', 'status', 'source', 'created_at')
    list_filter = ('status', 'source')
    search_fields = ('user__username', 'project__title')

@admin.register(ProjectApplication)
class ProjectApplicationAdmin(admin.ModelAdmin):
    list_display = ('user', 'project', 'role', 'status', 'applied_at', 'reviewed_at')
    list_filter = ('status',)
    search_fields = ('user__username', 'project__title')

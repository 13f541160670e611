from django.contrib import admin
from django.contrib.auth.admin import UserAdmin
from .models import User, UserSkill


class UserSkillInline(admin.TabularInline):
    model = UserSkill
    extra = 0


@admin.register(User)
class CustomUserAdmin(UserAdmin):
    list_display = ('username', 'email', 'first_name', 'last_name', 'is_staff', 'status_collaboration')
    list_filter = ('status_collaboration', 'is_staff', 'is_superuser', 'is_active')
    search_fields = ('username', 'email', 'first_name', 'last_name')
    inlines = [UserSkillInline]
    fieldsets = UserAdmin.fieldsets + (
        ('Profile', {'fields': ('phone', 'about_me', 'location', 'profile_picture', 'status_collaboration')}),
    )
    add_fieldsets = UserAdmin.add_fieldsets + (
        ('Profile', {'fields': ('phone', 'location')}),
    )

from django.contrib import admin
from .models import Skill, Tag, Benefit, Timeline


@admin.register(Skill, Tag, Benefit, Timeline)
class CatalogEntryAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "created_at")
    search_fields = ("name",)

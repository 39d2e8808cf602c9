"""
SCORM Hosting Django Admin Configuration

Author: DSP Development Team
Version: 1.0.0
"""

from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from .models import Project


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    """Admin configuration for hosting projects and their current package."""

    list_display = ("name", "owner", "launch_url", "package_uploaded_at", "created_at")
    list_filter = ("package_uploaded_at", "created_at")
    search_fields = ("name", "owner__username", "owner__email")
    readonly_fields = ("package_manifest", "package_uploaded_at", "created_at", "updated_at")
    fieldsets = (
        (None, {"fields": ("owner", "name", "description")}),
        (_("Package"), {"fields": ("package_manifest", "package_uploaded_at")}),
        (_("Timestamps"), {"fields": ("created_at", "updated_at")}),
    )

    @admin.display(description=_("Launch URL"))
    def launch_url(self, obj: Project):
        return obj.launch_url

"""
SCORM Hosting Project Models

A project is the hosting unit a user uploads SCORM packages into. The result of
the latest successful ingestion run is stored on the project record as a JSON
manifest; older manifests are overwritten (last write wins).

Models:
- Project: Hosting project owned by a user, carrying the current package manifest

Author: DSP Development Team
Version: 1.0.0
"""

from typing import Optional

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _


class Project(models.Model):
    """
    Hosting project with its currently published SCORM package.

    Attributes:
        owner: User owning the project
        name: Display name
        description: Optional free text
        package_manifest: Manifest of the last ingested package (see PackageManifest.to_record)
        package_uploaded_at: Timestamp of the last successful ingestion

    Example:
        >>> project = Project.objects.create(owner=user, name="Onboarding 2025")
        >>> project.launch_url  # None until a package was uploaded
    """

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="scorm_projects",
        verbose_name=_("Owner"),
    )
    name = models.CharField(max_length=200, verbose_name=_("Project Name"))
    description = models.TextField(blank=True, default="", verbose_name=_("Description"))
    package_manifest = models.JSONField(
        null=True,
        blank=True,
        verbose_name=_("Package Manifest"),
        help_text=_("Result of the last successful package upload"),
    )
    package_uploaded_at = models.DateTimeField(
        null=True, blank=True, verbose_name=_("Package Uploaded At")
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return self.name

    @property
    def launch_url(self) -> Optional[str]:
        if not self.package_manifest:
            return None
        return self.package_manifest.get("launch_url")

    class Meta:
        verbose_name = _("Project")
        verbose_name_plural = _("Projects")
        ordering = ["-created_at"]
        db_table = "scorm_hosting_project"

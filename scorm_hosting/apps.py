"""
SCORM Hosting Application Configuration

Author: DSP Development Team
Version: 1.0.0
"""

from django.apps import AppConfig


class ScormHostingConfig(AppConfig):
    """
    Configuration class for the SCORM hosting Django application.

    Attributes:
        default_auto_field: Default primary key field type for models
        name: Application name for Django registration
        verbose_name: Human-readable application name for admin interface
    """

    default_auto_field: str = "django.db.models.BigAutoField"
    name: str = "scorm_hosting"
    verbose_name: str = "SCORM Hosting"

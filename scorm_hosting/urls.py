"""
SCORM Hosting URL Configuration

URL Structure:
- projects/: Project records of the authenticated user
- packages/upload/: SCORM package upload into a project

Author: DSP Development Team
Version: 1.0.0
"""

from typing import List
from django.urls import path, URLPattern

from .projects import views as project_views

app_name = "scorm_hosting"

urlpatterns: List[URLPattern] = [
    path("projects/", project_views.ProjectListCreateView.as_view(), name="project-list"),
    path("projects/<int:pk>/", project_views.ProjectDetailView.as_view(), name="project-detail"),
    path("packages/upload/", project_views.upload_package, name="package-upload"),
]

"""
Package Processing Services Package für die SCORM Hosting Plattform

- Content-Type Ermittlung
- Auswahl der Start-Datei
- Orchestrierung des Paket-Uploads

Author: DSP Development Team
Version: 1.0.0
"""

from .content_types import resolve_content_type
from .launch_selection import select_launch_member, is_manifest_member
from .package_ingestion_service import (
    PackageIngestionService,
    PackageManifest,
    UploadedMember,
    IngestionOutcome,
)

__all__ = [
    "resolve_content_type",
    "select_launch_member",
    "is_manifest_member",
    "PackageIngestionService",
    "PackageManifest",
    "UploadedMember",
    "IngestionOutcome",
]

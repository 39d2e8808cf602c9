"""
Database Service für die SCORM Hosting Plattform

Speichert das Ergebnis eines Paket-Uploads am Projekt-Datensatz.

Author: DSP Development Team
Version: 1.0.0
"""

import logging
from typing import Any, Optional, TYPE_CHECKING

from django.utils import timezone

from ...projects.models import Project

if TYPE_CHECKING:
    from ..package_processing.package_ingestion_service import PackageManifest

logger = logging.getLogger(__name__)


class ProjectPersistenceService:
    """
    Service für Datenbankoperationen am Projekt.

    Das Manifest wird mit einem einzigen UPDATE geschrieben; parallele Uploads in
    dasselbe Projekt überschreiben sich gegenseitig (letzter Schreibvorgang gewinnt).
    """

    def __init__(self):
        self.logger = logger

    def attach_package_manifest(
        self, project_id: Any, manifest: "PackageManifest", owner: Optional[Any] = None
    ) -> bool:
        """
        Hängt das Paket-Manifest an ein Projekt.

        Args:
            project_id: ID des Projekts (int oder numerischer String)
            manifest: Ergebnis des Uploads
            owner: Wenn gesetzt, muss das Projekt diesem User gehören

        Returns:
            True wenn das Projekt gefunden und aktualisiert wurde, sonst False
        """
        if not str(project_id).strip().isdigit():
            self.logger.warning(f"Ungültige Projekt-ID: {project_id!r}")
            return False

        queryset = Project.objects.filter(pk=int(project_id))
        if owner is not None:
            queryset = queryset.filter(owner=owner)

        updated = queryset.update(
            package_manifest=manifest.to_record(),
            package_uploaded_at=manifest.uploaded_at,
            updated_at=timezone.now(),
        )

        if not updated:
            self.logger.warning(f"Projekt {project_id} nicht gefunden")
            return False

        self.logger.info(
            f"Paket {manifest.package_id} an Projekt {project_id} gespeichert"
        )
        return True

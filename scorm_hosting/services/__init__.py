"""
SCORM Hosting Services Package

Dieses Paket enthält alle Services für den Paket-Upload:

Struktur:
├── archive/               # ZIP-Archive lesen
├── cloud_storage/         # Object Storage Operationen
├── database/              # Projekt-Datensatz aktualisieren
└── package_processing/    # Content-Type, Start-Datei, Orchestrierung

Author: DSP Development Team
Version: 1.0.0
"""

from .archive import ArchiveReader, ArchiveEntry
from .cloud_storage import ObjectStoreService, get_object_store
from .database import ProjectPersistenceService
from .package_processing import (
    PackageIngestionService,
    PackageManifest,
    UploadedMember,
    IngestionOutcome,
    resolve_content_type,
    select_launch_member,
)

__all__ = [
    "ArchiveReader",
    "ArchiveEntry",
    "ObjectStoreService",
    "get_object_store",
    "ProjectPersistenceService",
    "PackageIngestionService",
    "PackageManifest",
    "UploadedMember",
    "IngestionOutcome",
    "resolve_content_type",
    "select_launch_member",
]

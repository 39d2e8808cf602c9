"""
Cloud Storage Services Package für die SCORM Hosting Plattform

- Verbindung zum S3-kompatiblen Paket-Bucket
- Datei-Upload
- URL-Generierung

Author: DSP Development Team
Version: 1.0.0
"""

from .cloud_storage_service import ObjectStoreService, get_object_store

__all__ = ["ObjectStoreService", "get_object_store"]

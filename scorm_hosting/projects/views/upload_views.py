"""
Package Upload Views für die SCORM Hosting Plattform

API-Endpoint für den Upload eines SCORM-Pakets:
- POST /api/scorm/packages/upload/ - Entpackt, lädt hoch, wählt Start-Datei

Author: DSP Development Team
Version: 1.0.0
"""

import logging

from rest_framework import status
from rest_framework.decorators import api_view, parser_classes, permission_classes
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ...services.cloud_storage import get_object_store
from ...services.package_processing import PackageIngestionService
from ..serializers import PackageUploadSerializer

logger = logging.getLogger(__name__)


def _format_errors(errors) -> str:
    return "; ".join(
        f"{field}: {' '.join(str(message) for message in messages)}"
        for field, messages in errors.items()
    )


@api_view(["POST"])
@permission_classes([IsAuthenticated])
@parser_classes([MultiPartParser, FormParser])
def upload_package(request):
    """
    Lädt ein SCORM-Paket hoch und hängt es an ein Projekt.

    POST /api/scorm/packages/upload/  (multipart/form-data)

    Form Fields:
        archiveFile: ZIP-Datei (max. 100 MB)
        projectId: ID des Projekts

    Response:
    {
        "success": true,
        "packageId": "0b6c...",
        "packageFolder": "packages/0b6c...",
        "manifestUrl": "https://cdn.example.com/packages/0b6c.../imsmanifest.xml",
        "launchUrl": "https://cdn.example.com/packages/0b6c.../index.html",
        "launchFile": "index.html",
        "totalFiles": 3,
        "files": [{"key": "...", "url": "..."}]
    }

    Fehler: {"error": "...", "details": "..."} mit 400, 404 oder 500
    """
    serializer = PackageUploadSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(
            {"error": "Ungültige Anfrage", "details": _format_errors(serializer.errors)},
            status=status.HTTP_400_BAD_REQUEST,
        )

    archive_file = serializer.validated_data["archiveFile"]
    project_id = serializer.validated_data["projectId"]

    try:
        service = PackageIngestionService.from_settings(object_store=get_object_store())
        outcome = service.ingest(
            project_id=project_id,
            file_name=archive_file.name,
            data=archive_file.read(),
            owner=request.user,
        )
    except Exception as e:
        logger.exception(f"Unerwarteter Fehler beim Paket-Upload für Projekt {project_id}")
        return Response(
            {"error": "Paket konnte nicht verarbeitet werden", "details": str(e)},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if outcome.success:
        logger.info(
            f"Paket {outcome.manifest.package_id} für Projekt {project_id} veröffentlicht"
        )
    return Response(outcome.to_response(), status=outcome.status_code)

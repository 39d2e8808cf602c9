"""
Package Ingestion Service für die SCORM Hosting Plattform

Hauptservice, der alle anderen Services koordiniert:
- ArchiveReader: ZIP-Archiv öffnen und Einträge lesen
- ObjectStoreService: Paket-Dateien in den Bucket hochladen
- Launch-Auswahl: Start-Datei des Pakets bestimmen
- ProjectPersistenceService: Ergebnis am Projekt speichern

Pipeline:
1. Anfrage prüfen (Datei + Projekt-ID)
2. Archiv öffnen
3. Jede Datei mit Content-Type hochladen (Verzeichnisse werden übersprungen)
4. Start-Datei auswählen
5. Manifest am Projekt speichern

Ein Lauf endet entweder vollständig erfolgreich oder mit genau einem Fehler.
Bereits hochgeladene Dateien werden bei einem Fehler nicht gelöscht; das Präfix
``<prefix>/<package_id>`` ist pro Lauf eindeutig und wird nie referenziert.

Author: DSP Development Team
Version: 1.0.0
"""

import logging
import uuid
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, Iterator, List, Optional, Set, Tuple

from django.conf import settings
from django.utils import timezone

from ...exceptions import (
    ErrorKind,
    InvalidRequestError,
    PackageIngestionError,
    ProjectNotFoundError,
)
from ..archive import ArchiveReader
from ..cloud_storage import ObjectStoreService
from ..database import ProjectPersistenceService
from .content_types import resolve_content_type
from .launch_selection import is_manifest_member, select_launch_member

logger = logging.getLogger(__name__)

# (abgeschlossene Dateien, Dateien gesamt, Objekt-Key)
ProgressCallback = Callable[[int, int, str], None]


@dataclass(frozen=True)
class UploadedMember:
    """Eine hochgeladene Paket-Datei."""

    storage_key: str
    public_url: str
    size_bytes: int

    def to_response(self) -> Dict[str, str]:
        return {"key": self.storage_key, "url": self.public_url}


@dataclass(frozen=True)
class PackageManifest:
    """Repräsentiert das Ergebnis eines erfolgreichen Paket-Uploads."""

    package_id: str
    storage_prefix: str
    members: Tuple[UploadedMember, ...]
    manifest_url: Optional[str]
    launch_url: Optional[str]
    launch_member_name: Optional[str]
    total_members: int
    source_file_name: str
    source_size_bytes: int
    uploaded_at: datetime
    # Inhalt von imsmanifest.xml, erfasst aber nicht ausgewertet
    manifest_text: Optional[str] = field(default=None, repr=False, compare=False)

    def to_response(self) -> Dict[str, Any]:
        """JSON-Antwort für den Client."""
        return {
            "success": True,
            "packageId": self.package_id,
            "packageFolder": self.storage_prefix,
            "manifestUrl": self.manifest_url,
            "launchUrl": self.launch_url,
            "launchFile": self.launch_member_name,
            "totalFiles": self.total_members,
            "files": [member.to_response() for member in self.members],
        }

    def to_record(self) -> Dict[str, Any]:
        """JSON-Struktur für die Speicherung am Projekt."""
        return {
            "package_id": self.package_id,
            "storage_prefix": self.storage_prefix,
            "manifest_url": self.manifest_url,
            "launch_url": self.launch_url,
            "launch_file": self.launch_member_name,
            "total_files": self.total_members,
            "source_file_name": self.source_file_name,
            "source_size_bytes": self.source_size_bytes,
            "uploaded_at": self.uploaded_at.isoformat(),
            "files": [
                {
                    "key": member.storage_key,
                    "url": member.public_url,
                    "size": member.size_bytes,
                }
                for member in self.members
            ],
        }


@dataclass(frozen=True)
class IngestionOutcome:
    """Endzustand eines Ingestion-Laufs: Erfolg mit Manifest oder Fehler."""

    success: bool
    manifest: Optional[PackageManifest] = None
    error_kind: Optional[ErrorKind] = None
    message: str = ""
    details: Optional[str] = None

    @classmethod
    def succeeded(cls, manifest: PackageManifest) -> "IngestionOutcome":
        return cls(success=True, manifest=manifest)

    @classmethod
    def failed(cls, error: PackageIngestionError) -> "IngestionOutcome":
        return cls(
            success=False,
            error_kind=error.kind,
            message=error.message,
            details=error.details,
        )

    @property
    def status_code(self) -> int:
        if self.success:
            return 200
        return self.error_kind.status_code

    def to_response(self) -> Dict[str, Any]:
        if self.success:
            return self.manifest.to_response()
        payload: Dict[str, Any] = {"error": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class PackageIngestionService:
    """
    Hauptservice für den Upload von SCORM-Paketen.

    Args:
        object_store: Ziel für die Paket-Dateien (``put`` / ``url_for``)
        persistence: Speichert das Manifest am Projekt (``attach_package_manifest``)
        id_factory: Erzeugt die eindeutige Paket-ID pro Lauf
        max_workers: Parallele Uploads; 1 = strikt sequentiell
        package_prefix: Wurzel-Präfix aller Paket-Keys
        max_members: Obergrenze für Dateien pro Archiv
        max_uncompressed_size: Obergrenze für die entpackte Gesamtgröße
    """

    def __init__(
        self,
        object_store: ObjectStoreService,
        persistence: ProjectPersistenceService,
        id_factory: Callable[[], Any] = uuid.uuid4,
        max_workers: int = 1,
        package_prefix: str = "packages",
        max_members: Optional[int] = None,
        max_uncompressed_size: Optional[int] = None,
    ):
        self.object_store = object_store
        self.persistence = persistence
        self.id_factory = id_factory
        self.max_workers = max(1, max_workers)
        self.package_prefix = package_prefix.strip("/")
        self.max_members = max_members
        self.max_uncompressed_size = max_uncompressed_size
        self.logger = logger

    @classmethod
    def from_settings(
        cls,
        object_store: ObjectStoreService,
        persistence: Optional[ProjectPersistenceService] = None,
    ) -> "PackageIngestionService":
        return cls(
            object_store=object_store,
            persistence=persistence or ProjectPersistenceService(),
            max_workers=settings.SCORM_UPLOAD_WORKERS,
            package_prefix=settings.SCORM_PACKAGE_PREFIX,
            max_members=settings.SCORM_MAX_ARCHIVE_MEMBERS,
            max_uncompressed_size=settings.SCORM_MAX_UNCOMPRESSED_SIZE,
        )

    def ingest(
        self,
        project_id: Any,
        file_name: Optional[str],
        data: Optional[bytes],
        owner: Optional[Any] = None,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> IngestionOutcome:
        """
        Verarbeitet ein hochgeladenes SCORM-Paket vollständig.

        Args:
            project_id: ID des Ziel-Projekts
            file_name: Original-Dateiname des Uploads
            data: Inhalt der ZIP-Datei
            owner: User, dem das Projekt gehören muss (optional)
            progress_callback: Wird nach jeder hochgeladenen Datei aufgerufen

        Returns:
            IngestionOutcome mit Manifest oder Fehlerart
        """
        try:
            manifest = self._run(project_id, file_name, data, owner, progress_callback)
        except PackageIngestionError as e:
            self.logger.error(
                f"Paket-Upload für Projekt {project_id} fehlgeschlagen "
                f"({e.kind.value}): {e.message}"
                + (f" - {e.details}" if e.details else "")
            )
            return IngestionOutcome.failed(e)
        return IngestionOutcome.succeeded(manifest)

    def _run(
        self,
        project_id: Any,
        file_name: Optional[str],
        data: Optional[bytes],
        owner: Optional[Any],
        progress_callback: Optional[ProgressCallback],
    ) -> PackageManifest:
        if not file_name or not data:
            raise InvalidRequestError("Keine Datei hochgeladen")
        if project_id is None or not str(project_id).strip():
            raise InvalidRequestError("Projekt-ID ist erforderlich")

        package_id = str(self.id_factory())
        storage_prefix = f"{self.package_prefix}/{package_id}"
        self.logger.info(
            f"Starte Paket-Upload {package_id}: {file_name} ({len(data)} Bytes) "
            f"für Projekt {project_id}"
        )

        captured: Dict[str, str] = {}
        with ArchiveReader(
            data,
            max_members=self.max_members,
            max_uncompressed_size=self.max_uncompressed_size,
        ) as reader:
            files = self._iter_files(reader, captured)
            if self.max_workers > 1:
                uploaded = self._upload_parallel(
                    files, storage_prefix, reader.member_count, progress_callback
                )
            else:
                uploaded = self._upload_sequential(
                    files, storage_prefix, reader.member_count, progress_callback
                )

        paths = [path for path, _ in uploaded]
        members = tuple(member for _, member in uploaded)
        members_by_path = dict(uploaded)

        manifest_url = next(
            (members_by_path[path].public_url for path in paths if is_manifest_member(path)), None
        )
        launch_member_name = select_launch_member(paths)
        if launch_member_name is not None:
            launch_url = members_by_path[launch_member_name].public_url
        else:
            launch_url = manifest_url
        self.logger.info(
            f"Paket {package_id}: {len(members)} Dateien hochgeladen, "
            f"Start-Datei: {launch_member_name or 'keine'}"
        )

        manifest = PackageManifest(
            package_id=package_id,
            storage_prefix=storage_prefix,
            members=members,
            manifest_url=manifest_url,
            launch_url=launch_url,
            launch_member_name=launch_member_name,
            total_members=len(members),
            source_file_name=file_name,
            source_size_bytes=len(data),
            uploaded_at=timezone.now(),
            manifest_text=captured.get("manifest_text"),
        )

        if not self.persistence.attach_package_manifest(project_id, manifest, owner=owner):
            raise ProjectNotFoundError(
                "Projekt nicht gefunden",
                details=f"Paket {package_id} wurde keinem Projekt zugeordnet",
            )
        return manifest

    def _iter_files(
        self, reader: ArchiveReader, captured: Dict[str, str]
    ) -> Iterator[Tuple[str, bytes]]:
        """Liefert (Pfad, Inhalt) aller Dateien; erfasst nebenbei imsmanifest.xml."""
        for entry in reader.entries():
            if entry.is_dir:
                continue
            body = entry.read_bytes()
            if is_manifest_member(entry.path):
                captured["manifest_text"] = entry.read_text()
                self.logger.debug(
                    f"imsmanifest.xml erfasst ({len(captured['manifest_text'])} Zeichen)"
                )
            yield entry.path, body

    def _upload_member(self, storage_prefix: str, path: str, body: bytes) -> UploadedMember:
        key = f"{storage_prefix}/{path}"
        content_type = resolve_content_type(path)
        self.object_store.put(key, body, content_type)
        self.logger.debug(f"Hochgeladen: {key} ({content_type}, {len(body)} Bytes)")
        return UploadedMember(
            storage_key=key,
            public_url=self.object_store.url_for(key),
            size_bytes=len(body),
        )

    def _upload_sequential(
        self,
        files: Iterator[Tuple[str, bytes]],
        storage_prefix: str,
        total: int,
        progress_callback: Optional[ProgressCallback],
    ) -> List[Tuple[str, UploadedMember]]:
        uploaded: List[Tuple[str, UploadedMember]] = []
        for path, body in files:
            member = self._upload_member(storage_prefix, path, body)
            uploaded.append((path, member))
            if progress_callback:
                progress_callback(len(uploaded), total, member.storage_key)
        return uploaded

    def _upload_parallel(
        self,
        files: Iterator[Tuple[str, bytes]],
        storage_prefix: str,
        total: int,
        progress_callback: Optional[ProgressCallback],
    ) -> List[Tuple[str, UploadedMember]]:
        """
        Lädt Dateien über einen begrenzten Thread-Pool hoch.

        Die Reihenfolge des Ergebnisses entspricht der Archiv-Reihenfolge. Der erste
        Fehler bricht den Lauf ab; bereits laufende Uploads werden noch beendet,
        ihre Ergebnisse aber verworfen.
        """
        submitted: List[Tuple[str, Future]] = []
        pending: Set[Future] = set()
        failure: Optional[BaseException] = None
        completed = 0

        def collect(done: Set[Future]) -> None:
            nonlocal failure, completed
            for future in done:
                error = future.exception()
                if error is not None:
                    if failure is None:
                        failure = error
                    continue
                if failure is None:
                    completed += 1
                    if progress_callback:
                        progress_callback(completed, total, future.result().storage_key)

        # Höchstens zwei Dateien pro Worker gleichzeitig im Speicher
        window = self.max_workers * 2
        with ThreadPoolExecutor(
            max_workers=self.max_workers, thread_name_prefix="scorm-upload"
        ) as executor:
            for path, body in files:
                future = executor.submit(self._upload_member, storage_prefix, path, body)
                submitted.append((path, future))
                pending.add(future)
                if len(pending) >= window:
                    done, pending = wait(pending, return_when=FIRST_COMPLETED)
                    collect(done)
                    if failure is not None:
                        break
            done, pending = wait(pending)
            collect(done)

        if failure is not None:
            raise failure
        return [(path, future.result()) for path, future in submitted]

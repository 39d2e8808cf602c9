"""
Archive Reader für SCORM-Pakete

Liest ein hochgeladenes ZIP-Archiv vollständig aus dem Speicher und stellt die
Einträge als lazy Iterator bereit. Der Inhalt eines Eintrags wird erst beim
Zugriff entpackt, der Speicherbedarf richtet sich also nach der größten
einzelnen Datei und nicht nach dem gesamten Archiv.

Features:
- Erkennung von Verzeichnis-Einträgen
- Pfade unverändert (Groß-/Kleinschreibung, "/" als Trenner)
- Obergrenzen für Anzahl Dateien und entpackte Gesamtgröße

Author: DSP Development Team
Version: 1.0.0
"""

import io
import logging
import zipfile
import zlib
from dataclasses import dataclass, field
from typing import Iterator, Optional

from ...exceptions import InvalidArchiveError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ArchiveEntry:
    """Repräsentiert einen Eintrag (Datei oder Verzeichnis) im Archiv."""

    path: str
    is_dir: bool
    size: int
    _archive: zipfile.ZipFile = field(repr=False, compare=False)
    _info: zipfile.ZipInfo = field(repr=False, compare=False)

    def read_bytes(self) -> bytes:
        """
        Entpackt den Eintrag.

        Raises:
            InvalidArchiveError: Bei CRC-Fehlern, beschädigten Daten, verschlüsselten
                Dateien oder nicht unterstützter Kompression
        """
        try:
            return self._archive.read(self._info)
        except (
            zipfile.BadZipFile,
            zipfile.LargeZipFile,
            zlib.error,
            EOFError,
            OSError,
            RuntimeError,
            NotImplementedError,
        ) as e:
            raise InvalidArchiveError(
                f"Datei '{self.path}' im Archiv ist beschädigt", details=str(e)
            ) from e

    def read_text(self, encoding: str = "utf-8") -> str:
        return self.read_bytes().decode(encoding, errors="replace")


class ArchiveReader:
    """
    Öffnet ein ZIP-Archiv aus Bytes.

    Args:
        data: Vollständiger Inhalt der hochgeladenen Datei
        max_members: Maximale Anzahl Dateien (None = unbegrenzt)
        max_uncompressed_size: Maximale entpackte Gesamtgröße in Bytes (None = unbegrenzt)

    Raises:
        InvalidArchiveError: Wenn die Daten kein gültiges ZIP sind oder eine
            Obergrenze überschritten wird
    """

    def __init__(
        self,
        data: bytes,
        max_members: Optional[int] = None,
        max_uncompressed_size: Optional[int] = None,
    ):
        try:
            self._archive = zipfile.ZipFile(io.BytesIO(data))
            self._infos = self._archive.infolist()
        except (zipfile.BadZipFile, zipfile.LargeZipFile, EOFError, ValueError) as e:
            raise InvalidArchiveError(
                "Die hochgeladene Datei ist kein gültiges ZIP-Archiv", details=str(e)
            ) from e

        files = [info for info in self._infos if not info.is_dir()]
        self.member_count = len(files)
        self.uncompressed_size = sum(info.file_size for info in files)

        if max_members is not None and self.member_count > max_members:
            raise InvalidArchiveError(
                "Archiv enthält zu viele Dateien",
                details=f"{self.member_count} > {max_members}",
            )
        if (
            max_uncompressed_size is not None
            and self.uncompressed_size > max_uncompressed_size
        ):
            raise InvalidArchiveError(
                "Entpacktes Archiv ist zu groß",
                details=f"{self.uncompressed_size} > {max_uncompressed_size} Bytes",
            )

        logger.debug(
            f"Archiv geöffnet: {len(self._infos)} Einträge, {self.member_count} Dateien, "
            f"{self.uncompressed_size} Bytes entpackt"
        )

    def entries(self) -> Iterator[ArchiveEntry]:
        """
        Liefert alle Einträge in Archiv-Reihenfolge.

        Returns:
            Einmalig durchlaufbarer Iterator über ArchiveEntry Objekte
        """
        for info in self._infos:
            yield ArchiveEntry(
                path=info.filename,
                is_dir=info.is_dir(),
                size=info.file_size,
                _archive=self._archive,
                _info=info,
            )

    def close(self) -> None:
        self._archive.close()

    def __enter__(self) -> "ArchiveReader":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

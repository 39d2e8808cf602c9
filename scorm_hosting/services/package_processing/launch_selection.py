"""
Auswahl der Start-Datei (Launch File) eines SCORM-Pakets.

Authoring-Tools benennen ihre Einstiegsseite unterschiedlich. Die Auswahl erfolgt
daher über eine feste Prioritätenliste, ohne ``imsmanifest.xml`` zu parsen:

1. ``story.html`` (Articulate Storyline Export)
2. ``index.html``
3. erste ``.html``/``.htm`` Datei
4. keine Start-Datei
"""

from typing import Iterable, Optional, Sequence, Tuple

MANIFEST_FILE_NAME = "imsmanifest.xml"

LAUNCH_FILE_PRIORITIES: Tuple[Tuple[str, ...], ...] = (
    ("story.html",),
    ("index.html",),
    (".html", ".htm"),
)


def select_launch_member(paths: Iterable[str]) -> Optional[str]:
    """
    Wählt die Start-Datei aus den hochgeladenen Paket-Pfaden.

    Die Suche ist case-insensitive; innerhalb einer Prioritätsstufe gewinnt der
    erste Treffer in Archiv-Reihenfolge.

    Args:
        paths: Relative Pfade der Paket-Dateien in Archiv-Reihenfolge

    Returns:
        Der gewählte relative Pfad oder None
    """
    candidates: Sequence[str] = list(paths)
    lowered = [path.lower() for path in candidates]

    for suffixes in LAUNCH_FILE_PRIORITIES:
        for path, lower_path in zip(candidates, lowered):
            if lower_path.endswith(suffixes):
                return path
    return None


def is_manifest_member(path: str) -> bool:
    """True für das Paket-Manifest im Wurzelverzeichnis (``imsmanifest.xml``)."""
    return path.lower() == MANIFEST_FILE_NAME

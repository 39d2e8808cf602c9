"""
Content-Type Ermittlung für Paket-Dateien.

Die Zuordnung basiert ausschließlich auf der Dateiendung, damit der Bucket die
Dateien mit dem richtigen ``Content-Type`` ausliefert (HTML wird sonst vom
Browser heruntergeladen statt angezeigt).
"""

DEFAULT_CONTENT_TYPE = "application/octet-stream"

CONTENT_TYPES = {
    "html": "text/html",
    "htm": "text/html",
    "css": "text/css",
    "js": "application/javascript",
    "json": "application/json",
    "xml": "application/xml",
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "gif": "image/gif",
    "svg": "image/svg+xml",
    "mp4": "video/mp4",
    "mp3": "audio/mpeg",
    "pdf": "application/pdf",
    "zip": "application/zip",
}


def resolve_content_type(file_name: str) -> str:
    """
    Liefert den MIME-Type zu einem Dateinamen.

    Args:
        file_name: Dateiname oder relativer Pfad (z.B. "assets/logo.PNG")

    Returns:
        MIME-Type, ``application/octet-stream`` für unbekannte Endungen
    """
    if "." not in file_name:
        return DEFAULT_CONTENT_TYPE
    extension = file_name.rsplit(".", 1)[-1].lower()
    return CONTENT_TYPES.get(extension, DEFAULT_CONTENT_TYPE)

"""
Test helpers: in-memory ZIP archives and a fake object store.
"""

import io
import struct
import threading
import zipfile
from typing import Iterable, Optional, Tuple, Union

from scorm_hosting.exceptions import StorageUnavailableError

MANIFEST_XML = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    '<manifest identifier="course"><resources>'
    '<resource identifier="r1" type="webcontent" href="index.html"/>'
    "</resources></manifest>"
)


def make_zip(entries: Iterable[Tuple[str, Union[str, bytes, None]]]) -> bytes:
    """
    Builds a ZIP archive in memory.

    Entries whose content is None are written as directory entries.
    """
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
        for path, content in entries:
            if content is None:
                archive.writestr(zipfile.ZipInfo(path), b"")
            else:
                archive.writestr(path, content)
    return buffer.getvalue()


def damage_member(
    data: bytes,
    name: str,
    corrupt_data: bool = False,
    encrypted: bool = False,
    compress_type: Optional[int] = None,
) -> bytes:
    """
    Returns a copy of a ZIP archive with one member damaged.

    The central directory stays valid, so the archive still opens and the
    failure only shows up when that member is read.

    Args:
        corrupt_data: Overwrite the first byte of the deflate stream (invalid block type)
        encrypted: Set the "encrypted" general purpose flag
        compress_type: Replace the compression method (e.g. 9 = deflate64)
    """
    raw = bytearray(data)
    encoded_name = name.encode("utf-8")

    with zipfile.ZipFile(io.BytesIO(data)) as archive:
        local = archive.getinfo(name).header_offset
    name_length, extra_length = struct.unpack_from("<HH", raw, local + 26)

    central = raw.find(b"PK\x01\x02")
    while central != -1:
        central_name_length = struct.unpack_from("<H", raw, central + 28)[0]
        if bytes(raw[central + 46 : central + 46 + central_name_length]) == encoded_name:
            break
        central = raw.find(b"PK\x01\x02", central + 4)
    assert central != -1, f"{name} not in central directory"

    if corrupt_data:
        raw[local + 30 + name_length + extra_length] = 0xFF
    if encrypted:
        for flag_offset in (local + 6, central + 8):
            flags = struct.unpack_from("<H", raw, flag_offset)[0]
            struct.pack_into("<H", raw, flag_offset, flags | 0x1)
    if compress_type is not None:
        struct.pack_into("<H", raw, local + 8, compress_type)
        struct.pack_into("<H", raw, central + 10, compress_type)
    return bytes(raw)


def make_course_zip() -> bytes:
    return make_zip(
        [
            ("imsmanifest.xml", MANIFEST_XML),
            ("index.html", "<html><body>Kurs</body></html>"),
            ("assets/", None),
            ("assets/logo.png", b"\x89PNG\r\n\x1a\nfake"),
        ]
    )


class FakeObjectStore:
    """Records uploads in memory; keys ending with an entry of ``fail_on`` raise StorageUnavailableError."""

    base_url = "https://cdn.example.com"

    def __init__(self, fail_on: Optional[Iterable[str]] = None):
        self.fail_on = set(fail_on or [])
        self.puts = []
        self._lock = threading.Lock()

    def put(self, key: str, body: bytes, content_type: str) -> None:
        if any(key.endswith(suffix) for suffix in self.fail_on):
            raise StorageUnavailableError(
                "Upload in den Object Storage fehlgeschlagen", details="AccessDenied", key=key
            )
        with self._lock:
            self.puts.append((key, body, content_type))

    def url_for(self, key: str) -> str:
        return f"{self.base_url}/{key}"

    @property
    def keys(self):
        return [key for key, _, _ in self.puts]

"""
Archive Services Package

Lesen hochgeladener ZIP-Archive (SCORM-Pakete).
"""

from .archive_reader import ArchiveReader, ArchiveEntry

__all__ = ["ArchiveReader", "ArchiveEntry"]

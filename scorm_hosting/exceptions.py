"""
SCORM Package Ingestion Exceptions

This module provides the exception classes raised while a SCORM package is
ingested. Every exception carries an ``ErrorKind`` which determines the HTTP
status reported to the client, so callers can handle failures either
granularly (by class) or generically (by kind).

Author: DSP Development Team
Version: 1.0.0
"""

from enum import Enum
from typing import Optional, Dict, Any


class ErrorKind(str, Enum):
    """Terminal failure categories of an ingestion run."""

    INVALID_REQUEST = "invalid_request"
    INVALID_ARCHIVE = "invalid_archive"
    STORAGE_UNAVAILABLE = "storage_unavailable"
    PROJECT_NOT_FOUND = "project_not_found"

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]


_STATUS_CODES = {
    ErrorKind.INVALID_REQUEST: 400,
    ErrorKind.INVALID_ARCHIVE: 500,
    ErrorKind.STORAGE_UNAVAILABLE: 500,
    ErrorKind.PROJECT_NOT_FOUND: 404,
}


class PackageIngestionError(Exception):
    """
    Base exception class for all package ingestion errors.

    Attributes:
        message (str): Human-readable error message
        kind (ErrorKind): Failure category, defines the HTTP status
        details (Optional[str]): Additional context (e.g. the underlying error)

    Example:
        >>> try:
        ...     reader = ArchiveReader(data)
        ... except PackageIngestionError as e:
        ...     logger.error(f"Ingestion failed ({e.kind.value}): {e.message}")
    """

    kind: ErrorKind = ErrorKind.INVALID_REQUEST

    def __init__(self, message: str, details: Optional[str] = None) -> None:
        self.message = message
        self.details = details
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return self.kind.status_code

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to the outbound error payload.

        Returns:
            ``{"error": ...}`` plus ``"details"`` when present
        """
        payload: Dict[str, Any] = {"error": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class InvalidRequestError(PackageIngestionError):
    """Missing file or project id, wrong extension or oversized upload."""

    kind = ErrorKind.INVALID_REQUEST


class InvalidArchiveError(PackageIngestionError):
    """The uploaded payload is not a readable ZIP container."""

    kind = ErrorKind.INVALID_ARCHIVE


class StorageUnavailableError(PackageIngestionError):
    """
    An upload to the object store failed (transport, auth or quota).

    Attributes:
        key (Optional[str]): Object key of the failed upload
    """

    kind = ErrorKind.STORAGE_UNAVAILABLE

    def __init__(
        self, message: str, details: Optional[str] = None, key: Optional[str] = None
    ) -> None:
        self.key = key
        super().__init__(message, details)


class ProjectNotFoundError(PackageIngestionError):
    """The target project record does not exist (or is not owned by the caller)."""

    kind = ErrorKind.PROJECT_NOT_FOUND

"""
Object Storage Service für die SCORM Hosting Plattform

Service für die Verbindung zum S3-kompatiblen Paket-Bucket (Cloudflare R2,
Wasabi oder AWS S3).

Features:
- Upload einzelner Paket-Dateien mit Content-Type
- Deterministische, öffentliche URL-Generierung aus dem Objekt-Key
- Verbindungstest und CORS-Konfiguration des Buckets

Der boto3 Client wird einmal pro Prozess erstellt (``get_object_store``) und an
die Services übergeben. Der Service selbst wiederholt keine Requests.

Author: DSP Development Team
Version: 1.0.0
"""

import logging
from functools import lru_cache
from typing import Any, Dict, List, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from django.conf import settings

from ...exceptions import StorageUnavailableError

logger = logging.getLogger(__name__)


class ObjectStoreService:
    """
    Service für Object Storage Operationen.

    Args:
        client: boto3 S3 Client
        bucket_name: Name des Paket-Buckets
        endpoint_url: S3 Endpoint (für die Fallback-URL)
        public_base_url: Öffentliche Basis-URL des Buckets (optional)
    """

    def __init__(
        self,
        client: Any,
        bucket_name: str,
        endpoint_url: Optional[str] = None,
        public_base_url: Optional[str] = None,
    ):
        self.client = client
        self.bucket_name = bucket_name
        self.endpoint_url = (endpoint_url or "").rstrip("/")
        self.public_base_url = (public_base_url or "").rstrip("/")

    @classmethod
    def from_settings(cls) -> "ObjectStoreService":
        """Erstellt den Service inklusive boto3 Client aus den Django Settings."""
        endpoint_url = settings.STORAGE_ENDPOINT_URL or None
        client = boto3.client(
            "s3",
            endpoint_url=endpoint_url,
            region_name=settings.STORAGE_REGION,
            aws_access_key_id=settings.STORAGE_ACCESS_KEY_ID or None,
            aws_secret_access_key=settings.STORAGE_SECRET_ACCESS_KEY or None,
            config=Config(
                connect_timeout=settings.STORAGE_CONNECT_TIMEOUT,
                read_timeout=settings.STORAGE_READ_TIMEOUT,
                # Retries sind Sache des Aufrufers
                retries={"max_attempts": 1, "mode": "standard"},
            ),
        )
        logger.info(
            f"Object Storage Client initialisiert (Bucket: {settings.STORAGE_BUCKET_NAME}, "
            f"Endpoint: {endpoint_url or 'AWS default'})"
        )
        return cls(
            client=client,
            bucket_name=settings.STORAGE_BUCKET_NAME,
            endpoint_url=endpoint_url,
            public_base_url=settings.STORAGE_PUBLIC_URL,
        )

    def put(self, key: str, body: bytes, content_type: str) -> None:
        """
        Lädt eine Datei in den Bucket hoch.

        Args:
            key: Objekt-Schlüssel (z.B. "packages/<id>/index.html")
            body: Dateiinhalt
            content_type: MIME-Type für die Auslieferung

        Raises:
            StorageUnavailableError: Bei Transport-, Auth- oder Quota-Fehlern
        """
        try:
            self.client.put_object(
                Bucket=self.bucket_name, Key=key, Body=body, ContentType=content_type
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Upload von {key} fehlgeschlagen: {e}")
            raise StorageUnavailableError(
                "Upload in den Object Storage fehlgeschlagen", details=str(e), key=key
            ) from e

    def url_for(self, key: str) -> str:
        """
        Generiert die öffentliche URL für einen Objekt-Schlüssel.

        Args:
            key: Der Objekt-Schlüssel im Bucket

        Returns:
            ``<public_base_url>/<key>`` oder ``<endpoint>/<bucket>/<key>``
        """
        if self.public_base_url:
            return f"{self.public_base_url}/{key}"
        endpoint = self.endpoint_url or "https://s3.amazonaws.com"
        return f"{endpoint}/{self.bucket_name}/{key}"

    derive_url = url_for

    def test_connection(self) -> bool:
        """
        Testet die Verbindung zum Bucket.

        Returns:
            True wenn Verbindung erfolgreich, False sonst
        """
        try:
            self.client.head_bucket(Bucket=self.bucket_name)
            logger.info("Object Storage Verbindung erfolgreich")
            return True
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Object Storage Verbindung fehlgeschlagen: {e}")
            return False

    def build_cors_configuration(self, origins: List[str]) -> Dict[str, Any]:
        """CORS-Regel, damit Browser Paket-Inhalte direkt aus dem Bucket laden können."""
        return {
            "CORSRules": [
                {
                    "AllowedOrigins": [origin for origin in origins if origin],
                    "AllowedMethods": ["GET", "HEAD"],
                    "AllowedHeaders": ["*"],
                    "ExposeHeaders": [
                        "Content-Length",
                        "Content-Type",
                        "ETag",
                        "Last-Modified",
                    ],
                    "MaxAgeSeconds": 3000,
                }
            ]
        }

    def configure_cors(self, origins: List[str]) -> Dict[str, Any]:
        """
        Setzt die CORS-Konfiguration des Buckets.

        Raises:
            StorageUnavailableError: Wenn der Bucket nicht erreichbar ist
        """
        cors_config = self.build_cors_configuration(origins)
        try:
            self.client.put_bucket_cors(
                Bucket=self.bucket_name, CORSConfiguration=cors_config
            )
        except (ClientError, BotoCoreError) as e:
            raise StorageUnavailableError(
                "CORS-Konfiguration fehlgeschlagen", details=str(e)
            ) from e
        logger.info(f"CORS-Konfiguration für Bucket '{self.bucket_name}' gesetzt")
        return cors_config

    def get_cors_configuration(self) -> Optional[Dict[str, Any]]:
        """Aktuelle CORS-Regeln des Buckets oder None, wenn keine gesetzt sind."""
        try:
            response = self.client.get_bucket_cors(Bucket=self.bucket_name)
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") == "NoSuchCORSConfiguration":
                return None
            raise StorageUnavailableError(
                "CORS-Konfiguration konnte nicht gelesen werden", details=str(e)
            ) from e
        return {"CORSRules": response.get("CORSRules", [])}


@lru_cache(maxsize=None)
def get_object_store() -> ObjectStoreService:
    """Prozessweite ObjectStoreService Instanz (einmal erstellt, danach wiederverwendet)."""
    return ObjectStoreService.from_settings()

"""Setup Storage CORS Management Command"""

import json
import logging

from django.conf import settings
from django.core.management.base import BaseCommand

from ...exceptions import StorageUnavailableError
from ...services.cloud_storage import get_object_store

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Konfiguriert CORS für den Paket-Bucket, damit Browser SCORM-Inhalte laden können"

    def add_arguments(self, parser):
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Zeige nur was konfiguriert werden würde, ohne tatsächlich zu ändern",
        )
        parser.add_argument(
            "--verify",
            action="store_true",
            help="Verifiziere die aktuelle CORS-Konfiguration",
        )

    def handle(self, *args, **options):
        store = get_object_store()

        if options["verify"]:
            self.verify_cors_configuration(store)
            return

        origins = settings.STORAGE_CORS_ORIGINS

        if options["dry_run"]:
            self.stdout.write(
                self.style.WARNING("DRY RUN: CORS-Konfiguration wird nur simuliert")
            )
            cors_config = store.build_cors_configuration(origins)
            self.stdout.write(json.dumps(cors_config, indent=2))
            return

        try:
            cors_config = store.configure_cors(origins)
        except StorageUnavailableError as e:
            self.stdout.write(self.style.ERROR(f"{e.message}: {e.details}"))
            return

        self.stdout.write(
            self.style.SUCCESS(
                f"CORS-Konfiguration für Bucket '{store.bucket_name}' erfolgreich angewendet"
            )
        )
        self.stdout.write("Erlaubte Origins:")
        for origin in cors_config["CORSRules"][0]["AllowedOrigins"]:
            self.stdout.write(f"   - {origin}")

    def verify_cors_configuration(self, store):
        if not store.test_connection():
            self.stdout.write(
                self.style.ERROR(f"Bucket '{store.bucket_name}' nicht erreichbar")
            )
            return

        try:
            cors_config = store.get_cors_configuration()
        except StorageUnavailableError as e:
            self.stdout.write(self.style.ERROR(f"{e.message}: {e.details}"))
            return

        if cors_config is None:
            self.stdout.write(self.style.WARNING("Keine CORS-Konfiguration gefunden"))
            return
        self.stdout.write(self.style.SUCCESS("CORS-Konfiguration gefunden:"))
        self.stdout.write(json.dumps(cors_config, indent=2))

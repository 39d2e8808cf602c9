import json
from io import StringIO
from unittest import mock

from botocore.exceptions import ClientError

from django.core.management import call_command
from django.test import SimpleTestCase, override_settings

from scorm_hosting.services.cloud_storage import ObjectStoreService

COMMAND_STORE = "scorm_hosting.management.commands.setup_storage_cors.get_object_store"


class SetupStorageCorsCommandTests(SimpleTestCase):
    @override_settings(STORAGE_CORS_ORIGINS=["https://lms.example.com"])
    def test_dry_run_prints_configuration_without_calling_storage(self):
        client = mock.Mock()
        store = ObjectStoreService(client=client, bucket_name="scorm-packages")
        out = StringIO()

        with mock.patch(COMMAND_STORE, return_value=store):
            call_command("setup_storage_cors", "--dry-run", stdout=out)

        output = out.getvalue()
        config = json.loads(output[output.index("{"):])
        self.assertEqual(config["CORSRules"][0]["AllowedOrigins"], ["https://lms.example.com"])
        client.put_bucket_cors.assert_not_called()

    @override_settings(STORAGE_CORS_ORIGINS=["https://lms.example.com"])
    def test_applies_configuration(self):
        client = mock.Mock()
        store = ObjectStoreService(client=client, bucket_name="scorm-packages")
        out = StringIO()

        with mock.patch(COMMAND_STORE, return_value=store):
            call_command("setup_storage_cors", stdout=out)

        client.put_bucket_cors.assert_called_once()
        self.assertEqual(client.put_bucket_cors.call_args.kwargs["Bucket"], "scorm-packages")
        self.assertIn("https://lms.example.com", out.getvalue())

    def test_verify_prints_current_configuration(self):
        client = mock.Mock()
        client.get_bucket_cors.return_value = {
            "CORSRules": [{"AllowedOrigins": ["https://lms.example.com"]}]
        }
        store = ObjectStoreService(client=client, bucket_name="scorm-packages")
        out = StringIO()

        with mock.patch(COMMAND_STORE, return_value=store):
            call_command("setup_storage_cors", "--verify", stdout=out)

        client.head_bucket.assert_called_once_with(Bucket="scorm-packages")
        self.assertIn("CORS-Konfiguration gefunden", out.getvalue())
        self.assertIn("https://lms.example.com", out.getvalue())

    def test_verify_stops_when_bucket_unreachable(self):
        client = mock.Mock()
        client.head_bucket.side_effect = ClientError(
            {"Error": {"Code": "403", "Message": "Forbidden"}}, "HeadBucket"
        )
        store = ObjectStoreService(client=client, bucket_name="scorm-packages")
        out = StringIO()

        with mock.patch(COMMAND_STORE, return_value=store):
            call_command("setup_storage_cors", "--verify", stdout=out)

        self.assertIn("Bucket 'scorm-packages' nicht erreichbar", out.getvalue())
        client.get_bucket_cors.assert_not_called()

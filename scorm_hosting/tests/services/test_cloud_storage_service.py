import boto3
from botocore.stub import ANY, Stubber
from django.test import SimpleTestCase, override_settings

from scorm_hosting.exceptions import ErrorKind, StorageUnavailableError
from scorm_hosting.services.cloud_storage import ObjectStoreService


def make_client():
    return boto3.client(
        "s3",
        region_name="us-east-1",
        aws_access_key_id="test",
        aws_secret_access_key="test",
    )


class ObjectStoreServiceTests(SimpleTestCase):
    def setUp(self):
        self.client = make_client()
        self.stubber = Stubber(self.client)
        self.stubber.activate()
        self.addCleanup(self.stubber.deactivate)
        self.store = ObjectStoreService(
            client=self.client,
            bucket_name="scorm-packages",
            endpoint_url="https://account.r2.cloudflarestorage.com",
            public_base_url="https://cdn.example.com/",
        )

    def test_put_uploads_with_content_type(self):
        self.stubber.add_response(
            "put_object",
            {},
            {
                "Bucket": "scorm-packages",
                "Key": "packages/p1/index.html",
                "Body": ANY,
                "ContentType": "text/html",
            },
        )
        self.store.put("packages/p1/index.html", b"<html/>", "text/html")
        self.stubber.assert_no_pending_responses()

    def test_put_maps_client_error(self):
        self.stubber.add_client_error(
            "put_object", service_error_code="AccessDenied", http_status_code=403
        )
        with self.assertRaises(StorageUnavailableError) as ctx:
            self.store.put("packages/p1/index.html", b"<html/>", "text/html")
        self.assertEqual(ctx.exception.kind, ErrorKind.STORAGE_UNAVAILABLE)
        self.assertEqual(ctx.exception.key, "packages/p1/index.html")
        self.assertIn("AccessDenied", ctx.exception.details)

    def test_url_for_public_base(self):
        self.assertEqual(
            self.store.url_for("packages/p1/Assets/Logo.png"),
            "https://cdn.example.com/packages/p1/Assets/Logo.png",
        )
        self.assertEqual(self.store.derive_url("a/b"), self.store.url_for("a/b"))

    def test_url_for_falls_back_to_endpoint(self):
        store = ObjectStoreService(
            client=self.client,
            bucket_name="scorm-packages",
            endpoint_url="https://account.r2.cloudflarestorage.com/",
        )
        self.assertEqual(
            store.url_for("packages/p1/index.html"),
            "https://account.r2.cloudflarestorage.com/scorm-packages/packages/p1/index.html",
        )

    def test_test_connection(self):
        self.stubber.add_response("head_bucket", {}, {"Bucket": "scorm-packages"})
        self.assertTrue(self.store.test_connection())
        self.stubber.add_client_error("head_bucket", service_error_code="404", http_status_code=404)
        self.assertFalse(self.store.test_connection())

    def test_configure_cors(self):
        self.stubber.add_response("put_bucket_cors", {})
        cors_config = self.store.configure_cors(["http://localhost:3000", ""])
        rule = cors_config["CORSRules"][0]
        self.assertEqual(rule["AllowedOrigins"], ["http://localhost:3000"])
        self.assertEqual(rule["AllowedMethods"], ["GET", "HEAD"])

    def test_missing_cors_configuration(self):
        self.stubber.add_client_error(
            "get_bucket_cors", service_error_code="NoSuchCORSConfiguration", http_status_code=404
        )
        self.assertIsNone(self.store.get_cors_configuration())


class ObjectStoreFromSettingsTests(SimpleTestCase):
    @override_settings(
        STORAGE_BUCKET_NAME="course-bucket",
        STORAGE_ENDPOINT_URL="https://s3.eu-central-2.wasabisys.com",
        STORAGE_REGION="eu-central-2",
        STORAGE_ACCESS_KEY_ID="key",
        STORAGE_SECRET_ACCESS_KEY="secret",
        STORAGE_PUBLIC_URL="",
    )
    def test_from_settings(self):
        store = ObjectStoreService.from_settings()
        self.assertEqual(store.bucket_name, "course-bucket")
        self.assertEqual(
            store.url_for("packages/x/index.html"),
            "https://s3.eu-central-2.wasabisys.com/course-bucket/packages/x/index.html",
        )
        self.assertEqual(store.client.meta.region_name, "eu-central-2")

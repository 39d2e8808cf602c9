import io
import zipfile

from django.test import SimpleTestCase

from scorm_hosting.exceptions import ErrorKind, InvalidArchiveError
from scorm_hosting.services.archive import ArchiveReader
from scorm_hosting.tests.helpers import damage_member, make_course_zip, make_zip


class ArchiveReaderTests(SimpleTestCase):
    def test_entries_in_archive_order_with_directories(self):
        with ArchiveReader(make_course_zip()) as reader:
            entries = [(entry.path, entry.is_dir) for entry in reader.entries()]
            self.assertEqual(reader.member_count, 3)

        self.assertEqual(
            entries,
            [
                ("imsmanifest.xml", False),
                ("index.html", False),
                ("assets/", True),
                ("assets/logo.png", False),
            ],
        )

    def test_paths_keep_case_and_separators(self):
        data = make_zip([("Content/Module 1/Index.HTML", "<html/>")])
        with ArchiveReader(data) as reader:
            entry = next(reader.entries())
        self.assertEqual(entry.path, "Content/Module 1/Index.HTML")

    def test_read_bytes_and_text(self):
        data = make_zip([("a.txt", "Grüße"), ("b.bin", b"\x00\x01")])
        with ArchiveReader(data) as reader:
            first, second = list(reader.entries())
            self.assertEqual(first.read_text(), "Grüße")
            self.assertEqual(second.read_bytes(), b"\x00\x01")
            self.assertEqual(second.size, 2)

    def test_entries_iterator_is_single_pass(self):
        with ArchiveReader(make_course_zip()) as reader:
            entries = reader.entries()
            self.assertEqual(len(list(entries)), 4)
            self.assertEqual(list(entries), [])

    def test_non_zip_payload(self):
        with self.assertRaises(InvalidArchiveError) as ctx:
            ArchiveReader(b"this is not a zip file")
        self.assertEqual(ctx.exception.kind, ErrorKind.INVALID_ARCHIVE)
        self.assertEqual(ctx.exception.status_code, 500)

    def test_corrupt_member_raises_on_read(self):
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w", zipfile.ZIP_STORED) as archive:
            archive.writestr("index.html", b"<html>original</html>")
        data = buffer.getvalue().replace(b"original", b"tampered")

        with ArchiveReader(data) as reader:
            entry = next(reader.entries())
            with self.assertRaises(InvalidArchiveError):
                entry.read_bytes()

    def assert_member_unreadable(self, data, name="index.html"):
        with ArchiveReader(data) as reader:
            entry = next(entry for entry in reader.entries() if entry.path == name)
            with self.assertRaises(InvalidArchiveError) as ctx:
                entry.read_bytes()
        self.assertEqual(ctx.exception.kind, ErrorKind.INVALID_ARCHIVE)
        self.assertIn(name, ctx.exception.message)
        self.assertTrue(ctx.exception.details)

    def test_corrupt_deflate_stream(self):
        self.assert_member_unreadable(
            damage_member(make_course_zip(), "index.html", corrupt_data=True)
        )

    def test_encrypted_member(self):
        self.assert_member_unreadable(
            damage_member(make_course_zip(), "index.html", encrypted=True)
        )

    def test_unsupported_compression_method(self):
        self.assert_member_unreadable(
            damage_member(make_course_zip(), "index.html", compress_type=9)
        )

    def test_read_text_raises_for_unreadable_member(self):
        data = damage_member(make_course_zip(), "imsmanifest.xml", corrupt_data=True)
        with ArchiveReader(data) as reader:
            entry = next(reader.entries())
            with self.assertRaises(InvalidArchiveError):
                entry.read_text()

    def test_member_limit(self):
        data = make_zip([("a.html", "a"), ("b.html", "b"), ("c.html", "c")])
        with self.assertRaises(InvalidArchiveError):
            ArchiveReader(data, max_members=2)
        with ArchiveReader(data, max_members=3) as reader:
            self.assertEqual(reader.member_count, 3)

    def test_uncompressed_size_limit(self):
        data = make_zip([("big.txt", "x" * 5000)])
        with self.assertRaises(InvalidArchiveError):
            ArchiveReader(data, max_uncompressed_size=1000)

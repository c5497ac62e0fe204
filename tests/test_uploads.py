"""Unit tests for kaisla.services.uploads against a temporary upload directory."""

import asyncio
import io
import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

from starlette.datastructures import Headers, UploadFile

from kaisla.core.errors import BadRequestError, PayloadTooLargeError
from kaisla.services import uploads
from kaisla.services.uploads import (
    SUBDIR_BLOG,
    SUBDIR_PRODUCTS,
    StoredFile,
    UploadedFileNotFoundError,
)


def _upload(filename: str, content_type: str, data: bytes = b"image-bytes") -> UploadFile:
    return UploadFile(
        file=io.BytesIO(data),
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )


class UploadDirTestCase(unittest.TestCase):
    """Points UPLOAD_DIR at a fresh temporary directory for each test."""

    max_bytes = 1024

    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        settings = MagicMock()
        settings.UPLOAD_DIR = self._tmp.name
        settings.UPLOAD_MAX_FILE_BYTES = self.max_bytes
        patcher = patch("kaisla.services.uploads.get_settings", return_value=settings)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.addCleanup(self._tmp.cleanup)

    def files_in(self, subdir: str) -> list[str]:
        directory = self.root / subdir
        if not directory.is_dir():
            return []
        return sorted(p.name for p in directory.iterdir())


class TestUrlHelpers(unittest.TestCase):
    def test_build_file_url(self) -> None:
        url = uploads.build_file_url("abc.png", "http://localhost:4000/", SUBDIR_BLOG)
        self.assertEqual(url, "http://localhost:4000/uploads/blog/abc.png")

    def test_extract_filename(self) -> None:
        self.assertEqual(
            uploads.extract_filename("http://h/uploads/products/abc.png?v=2"), "abc.png"
        )
        self.assertIsNone(uploads.extract_filename(None))
        self.assertIsNone(uploads.extract_filename(""))


class TestSaveImages(UploadDirTestCase):
    def test_writes_file_under_generated_name(self) -> None:
        stored = asyncio.run(
            uploads.save_images([_upload("Photo.PNG", "image/png")], SUBDIR_PRODUCTS, max_files=5)
        )
        self.assertEqual(len(stored), 1)
        self.assertTrue(stored[0].filename.endswith(".png"))
        self.assertNotEqual(stored[0].filename, "Photo.PNG")
        self.assertEqual(stored[0].original_name, "Photo.PNG")
        self.assertEqual(stored[0].size, len(b"image-bytes"))
        self.assertEqual(self.files_in(SUBDIR_PRODUCTS), [stored[0].filename])

    def test_jpg_extension_accepted_for_jpeg(self) -> None:
        stored = asyncio.run(
            uploads.save_images([_upload("a.jpg", "image/jpeg")], SUBDIR_PRODUCTS, max_files=5)
        )
        self.assertTrue(stored[0].filename.endswith(".jpg"))

    def test_invalid_type_rejected(self) -> None:
        with self.assertRaises(BadRequestError) as ctx:
            asyncio.run(
                uploads.save_images([_upload("a.gif", "image/gif")], SUBDIR_PRODUCTS, max_files=5)
            )
        self.assertIn("invalid type", ctx.exception.message)
        self.assertEqual(self.files_in(SUBDIR_PRODUCTS), [])

    def test_mismatched_extension_rejected(self) -> None:
        with self.assertRaises(BadRequestError) as ctx:
            asyncio.run(
                uploads.save_images([_upload("a.png", "image/jpeg")], SUBDIR_PRODUCTS, max_files=5)
            )
        self.assertIn("mismatched extension", ctx.exception.message)

    def test_oversized_file_rejected_and_removed(self) -> None:
        big = _upload("a.png", "image/png", b"x" * (self.max_bytes + 1))
        with self.assertRaises(PayloadTooLargeError):
            asyncio.run(uploads.save_images([big], SUBDIR_PRODUCTS, max_files=5))
        self.assertEqual(self.files_in(SUBDIR_PRODUCTS), [])

    def test_too_many_files_rejected(self) -> None:
        files = [_upload(f"{i}.png", "image/png") for i in range(3)]
        with self.assertRaises(BadRequestError) as ctx:
            asyncio.run(uploads.save_images(files, SUBDIR_PRODUCTS, max_files=2))
        self.assertEqual(ctx.exception.message, "Maximum 2 files allowed, received 3")

    def test_missing_required_images_rejected(self) -> None:
        with self.assertRaises(BadRequestError) as ctx:
            asyncio.run(uploads.save_images([], SUBDIR_PRODUCTS, max_files=5))
        self.assertEqual(ctx.exception.message, "At least one image is required")

    def test_optional_images_may_be_absent(self) -> None:
        stored = asyncio.run(uploads.save_images([], SUBDIR_BLOG, max_files=10, required=False))
        self.assertEqual(stored, [])

    def test_earlier_files_removed_when_a_later_one_fails(self) -> None:
        files = [_upload("ok.png", "image/png"), _upload("bad.gif", "image/gif")]
        with self.assertRaises(BadRequestError):
            asyncio.run(uploads.save_images(files, SUBDIR_PRODUCTS, max_files=5))
        self.assertEqual(self.files_in(SUBDIR_PRODUCTS), [])


class TestDeletion(UploadDirTestCase):
    def _write(self, subdir: str, name: str) -> Path:
        directory = self.root / subdir
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / name
        path.write_bytes(b"x")
        return path

    def test_delete_file_removes_it(self) -> None:
        path = self._write(SUBDIR_PRODUCTS, "a.png")
        uploads.delete_file("a.png", SUBDIR_PRODUCTS)
        self.assertFalse(path.exists())

    def test_delete_missing_file_raises_not_found(self) -> None:
        with self.assertRaises(UploadedFileNotFoundError):
            uploads.delete_file("missing.png", SUBDIR_PRODUCTS)

    def test_delete_files_never_raises(self) -> None:
        path = self._write(SUBDIR_PRODUCTS, "present.png")
        uploads.delete_files(["missing.png", "present.png"], SUBDIR_PRODUCTS)
        self.assertFalse(path.exists())

    def test_only_last_path_segment_is_used(self) -> None:
        path = self._write(SUBDIR_PRODUCTS, "a.png")
        uploads.delete_file("../../products/a.png", SUBDIR_PRODUCTS)
        self.assertFalse(path.exists())

    def test_dot_dot_filename_rejected(self) -> None:
        with self.assertRaises(BadRequestError):
            uploads.delete_file("..", SUBDIR_PRODUCTS)

    def test_discard_file_for_url(self) -> None:
        path = self._write(SUBDIR_BLOG, "cover.webp")
        uploads.discard_file_for_url("http://h/uploads/blog/cover.webp", SUBDIR_BLOG)
        self.assertFalse(path.exists())
        uploads.discard_file_for_url("http://h/uploads/blog/cover.webp", SUBDIR_BLOG)

    def test_cleanup_stored_uses_each_files_subdir(self) -> None:
        path = self._write(SUBDIR_BLOG, "b.png")
        uploads.cleanup_stored(
            [StoredFile(filename="b.png", original_name="b.png", content_type="image/png", size=1, subdir=SUBDIR_BLOG)]
        )
        self.assertFalse(path.exists())

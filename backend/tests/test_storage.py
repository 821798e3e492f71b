import asyncio
import os
import tempfile
import unittest
from io import BytesIO

from fastapi import UploadFile
from starlette.datastructures import Headers

from backend.tests.support import ApiTestCase
from backend.app.core.errors import ServiceError
from backend.app.services.storage_service import StorageService

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


def make_upload(data: bytes, content_type: str = "image/png", filename: str = "logo.png", size=None):
    return UploadFile(
        file=BytesIO(data),
        size=len(data) if size is None else size,
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )


class TestUploadApi(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.player = self.sign_up("Shadow")

    def test_upload_returns_public_url(self):
        response = self.client.post(
            "/uploads/",
            files={"file": ("logo.png", PNG_BYTES, "image/png")},
            data={"path": "avatars"},
            headers=self.player.headers,
        )
        body = response.json()
        self.assertTrue(body["success"])
        self.assertRegex(body["url"], r"^http://localhost:8000/uploads/avatars/[0-9a-f]{32}\.png$")

        # The stored file is served back under the same path
        served = self.client.get(body["url"].replace("http://localhost:8000", ""))
        self.assertEqual(served.content, PNG_BYTES)

    def test_non_image_rejected(self):
        response = self.client.post(
            "/uploads/",
            files={"file": ("notes.txt", b"hello", "text/plain")},
            headers=self.player.headers,
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "Only PNG, JPEG, GIF or WEBP images can be uploaded.")

    def test_upload_requires_sign_in(self):
        response = self.client.post("/uploads/", files={"file": ("logo.png", PNG_BYTES, "image/png")})
        self.assertEqual(response.status_code, 401)


class TestStorageService(unittest.TestCase):
    def setUp(self):
        self.upload_dir = tempfile.mkdtemp(prefix="esports-hub-storage-")

    def stored_files(self):
        return [name for _, _, names in os.walk(self.upload_dir) for name in names]

    def test_progress_reaches_100_only_at_the_end(self):
        storage = StorageService(upload_dir=self.upload_dir)
        progress = []

        url = asyncio.run(storage.upload_image(make_upload(b"x" * 200_000), "banners", on_progress=progress.append))

        self.assertTrue(url.endswith(".png"))
        self.assertEqual(progress[0], 0)
        self.assertEqual(progress[-1], 100)
        self.assertEqual(progress.count(100), 1)
        self.assertEqual(progress, sorted(progress))
        self.assertEqual(len(self.stored_files()), 1)

    def test_declared_size_over_limit(self):
        storage = StorageService(upload_dir=self.upload_dir, max_bytes=10)
        with self.assertRaises(ServiceError) as ctx:
            asyncio.run(storage.upload_image(make_upload(PNG_BYTES), "avatars"))
        self.assertTrue(ctx.exception.message.startswith("File is too large"))

    def test_streamed_size_over_limit_leaves_nothing_behind(self):
        # No declared size: the limit is enforced while streaming
        storage = StorageService(upload_dir=self.upload_dir, max_bytes=10)
        with self.assertRaises(ServiceError):
            asyncio.run(storage.upload_image(make_upload(PNG_BYTES, size=0), "avatars"))
        self.assertEqual(self.stored_files(), [])

    def test_empty_file(self):
        storage = StorageService(upload_dir=self.upload_dir)
        with self.assertRaises(ServiceError) as ctx:
            asyncio.run(storage.upload_image(make_upload(b""), "avatars"))
        self.assertEqual(ctx.exception.message, "Uploaded file is empty.")
        self.assertEqual(self.stored_files(), [])

    def test_path_must_stay_inside_upload_dir(self):
        storage = StorageService(upload_dir=self.upload_dir)
        for path in ("../outside", "", "avatars/../../etc"):
            with self.assertRaises(ServiceError) as ctx:
                asyncio.run(storage.upload_image(make_upload(PNG_BYTES), path))
            self.assertEqual(ctx.exception.message, "Invalid upload path.")


if __name__ == "__main__":
    unittest.main()

from __future__ import annotations

import logging
import uuid
from pathlib import PurePosixPath
from typing import Optional

import magic

from ..core.error_messages import get_error_message
from ..core.exceptions import ValidationError
from .storage import ObjectStorage

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {"jpg", "jpeg", "png", "webp", "heic"}
ALLOWED_MIME_TYPES = {"image/jpeg", "image/png", "image/webp", "image/heic", "image/heif"}


class ImageService:
    def __init__(self, storage: ObjectStorage):
        self._storage = storage

    @staticmethod
    def _extension(filename: str) -> str:
        ext = PurePosixPath(filename or "").suffix.lower().lstrip(".")
        if ext not in ALLOWED_EXTENSIONS:
            raise ValidationError(get_error_message("image", "UPLOAD_FAILED"))
        return ext

    @staticmethod
    def _check_content(data: bytes) -> None:
        mime = magic.from_buffer(data[:2048], mime=True)
        if mime not in ALLOWED_MIME_TYPES:
            logger.warning("Rejected upload with content type %s", mime)
            raise ValidationError(get_error_message("image", "UPLOAD_FAILED"))

    def upload_image(self, data: bytes, filename: str) -> Optional[str]:
        """Upload an image and return its storage path, or None when the upload fails."""

        if not data:
            raise ValidationError(get_error_message("image", "UPLOAD_FAILED"))

        ext = self._extension(filename)
        self._check_content(data)

        path = f"images/{uuid.uuid4().hex}.{ext}"
        try:
            self._storage.upload(path, data)
        except OSError:
            logger.exception("Image upload failed for %s", path)
            return None
        return path

    def download_url(self, path: str) -> Optional[str]:
        if not path:
            return None
        return self._storage.get_download_url(path)

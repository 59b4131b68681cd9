from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from PIL import Image, UnidentifiedImageError
from werkzeug.datastructures import FileStorage

from ..core.constants import (
    ALLOWED_IMAGE_EXTENSIONS,
    ALLOWED_IMAGE_MIMETYPES,
    IMAGE_FIELD_NAME,
    MAX_IMAGE_BYTES,
    UPLOAD_URL_PREFIX,
)
from ..core.exceptions import InvalidFileError
from .storage import ImageStore

logger = logging.getLogger(__name__)

_MIMETYPE_BY_EXTENSION = {"jpg": "image/jpeg", "jpeg": "image/jpeg", "png": "image/png"}
_PIL_FORMAT_BY_MIMETYPE = {"image/jpeg": "JPEG", "image/png": "PNG"}


@dataclass(frozen=True)
class StoredImage:
    filename: str
    url: str


def _stream_size(file: FileStorage) -> int:
    stream = file.stream
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(0)
    return size


def _content_matches(file: FileStorage, mimetype: str) -> bool:
    expected = _PIL_FORMAT_BY_MIMETYPE.get(mimetype)
    try:
        with Image.open(file.stream) as img:
            fmt = img.format
            img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError):
        return False
    finally:
        file.stream.seek(0)
    return expected is None or fmt == expected


class ImageUploadService:
    """Validate a single uploaded image and store it under a public URL."""

    def __init__(self, store: ImageStore, *, max_bytes: int = MAX_IMAGE_BYTES, url_prefix: str = UPLOAD_URL_PREFIX):
        self._store = store
        self._max_bytes = int(max_bytes)
        self._url_prefix = "/" + url_prefix.strip("/")

    def inspect(self, file: FileStorage) -> list[str]:
        """Return every upload rule ``file`` breaks (empty when acceptable)."""

        reasons: list[str] = []
        filename = file.filename or ""
        extension = os.path.splitext(filename)[1].lower().lstrip(".")
        mimetype = (file.mimetype or "").lower()

        if extension not in ALLOWED_IMAGE_EXTENSIONS:
            reasons.append(
                f"Unsupported file extension '.{extension}' (allowed: {', '.join(ALLOWED_IMAGE_EXTENSIONS)})"
                if extension
                else f"File name has no extension (allowed: {', '.join(ALLOWED_IMAGE_EXTENSIONS)})"
            )
        if mimetype not in ALLOWED_IMAGE_MIMETYPES:
            reasons.append(f"Unsupported content type '{mimetype}' (allowed: {', '.join(ALLOWED_IMAGE_MIMETYPES)})")
        elif extension in _MIMETYPE_BY_EXTENSION and _MIMETYPE_BY_EXTENSION[extension] != mimetype:
            reasons.append(f"File extension '.{extension}' does not match content type '{mimetype}'")

        size = _stream_size(file)
        if size > self._max_bytes:
            reasons.append(f"File too large: {size} bytes (max {self._max_bytes // (1024 * 1024)} MB)")
        elif size == 0:
            reasons.append("File is empty")
        elif not reasons and not _content_matches(file, mimetype):
            reasons.append("File content is not a valid JPEG or PNG image")

        return reasons

    def validate(self, file: FileStorage) -> None:
        reasons = self.inspect(file)
        if reasons:
            logger.info("Rejected upload %r: %s", file.filename, "; ".join(reasons))
            raise InvalidFileError(reasons)

    def url_for(self, filename: str, base_url: str) -> str:
        return f"{base_url.rstrip('/')}{self._url_prefix}/{filename}"

    def store(self, file: FileStorage, *, base_url: str, field_name: str = IMAGE_FIELD_NAME) -> StoredImage:
        """Save an already validated file; see :meth:`validate`."""

        extension = os.path.splitext(file.filename or "")[1].lower()
        filename = self._store.save(file.stream, prefix=field_name, extension=extension)
        return StoredImage(filename=filename, url=self.url_for(filename, base_url))

    def discard(self, image: Optional[StoredImage]) -> None:
        if image is not None:
            self._store.delete(image.filename)

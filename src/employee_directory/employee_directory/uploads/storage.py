from __future__ import annotations

import logging
import os
import time
import uuid
from pathlib import Path
from typing import BinaryIO, Protocol

logger = logging.getLogger(__name__)


class ImageStore(Protocol):
    """Blob storage for uploaded images."""

    def save(self, stream: BinaryIO, *, prefix: str, extension: str) -> str:
        """Persist ``stream`` and return the stored file name."""

        raise NotImplementedError

    def delete(self, filename: str) -> None:
        raise NotImplementedError


class LocalImageStore(ImageStore):
    """Stores files in a local directory created on construction (idempotent)."""

    def __init__(self, directory: str | Path):
        self._dir = Path(directory).resolve()
        os.makedirs(self._dir, exist_ok=True)

    @property
    def directory(self) -> Path:
        return self._dir

    @staticmethod
    def unique_name(prefix: str, extension: str) -> str:
        # field name + high-resolution timestamp + random suffix + original extension
        return f"{prefix}-{time.time_ns()}-{uuid.uuid4().hex[:8]}{extension}"

    def save(self, stream: BinaryIO, *, prefix: str, extension: str) -> str:
        filename = self.unique_name(prefix, extension)
        stream.seek(0)
        with open(self._dir / filename, "wb") as f:
            while True:
                chunk = stream.read(64 * 1024)
                if not chunk:
                    break
                f.write(chunk)
        return filename

    def delete(self, filename: str) -> None:
        path = self._dir / Path(filename).name
        try:
            path.unlink()
        except FileNotFoundError:
            logger.warning("Stored image %s already gone", filename)

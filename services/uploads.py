import logging
import random
import time
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path

from fastapi.concurrency import run_in_threadpool

logger = logging.getLogger(__name__)


@dataclass
class StoredUpload:
    path: Path
    filename: str
    url: str


class UploadStore:
    """Writes uploaded images to a public directory served under `url_prefix`."""

    def __init__(self, directory, url_prefix: str = "/uploads"):
        self.directory = Path(directory)
        self.url_prefix = url_prefix.rstrip("/")

    def generate_filename(self, original_filename: str) -> str:
        suffix = Path(original_filename or "").suffix
        return f"drug-{int(time.time() * 1000)}-{random.randint(0, 10**9)}{suffix}"

    def save(self, data: bytes, original_filename: str) -> StoredUpload:
        self.directory.mkdir(parents=True, exist_ok=True)
        filename = self.generate_filename(original_filename)
        path = self.directory / filename
        with open(path, "wb") as f:
            f.write(data)
        return StoredUpload(path=path, filename=filename, url=f"{self.url_prefix}/{filename}")

    def discard(self, upload: StoredUpload) -> None:
        """Best-effort delete; failures are logged, never raised."""
        try:
            upload.path.unlink()
        except OSError as e:
            logger.error("Error deleting temp file %s: %s", upload.path, e)

    @asynccontextmanager
    async def transient(self, data: bytes, original_filename: str):
        """
        Save the upload and hand it to the caller. If the block raises, the file is
        discarded before the error propagates; on success it stays on disk so its
        URL keeps working.
        """
        upload = await run_in_threadpool(self.save, data, original_filename)
        try:
            yield upload
        except BaseException:
            self.discard(upload)
            raise

"""
Local-directory blob storage.

Files land in BLOB_LOCAL_DIR under a collision-free name and are addressed
as BLOB_PUBLIC_URL + name. Serving that directory (nginx, a static mount)
is left to the deployment.
"""

import asyncio
import uuid
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

from app.core.logging import get_logger
from app.services.interfaces.blob_storage import BlobStorage

logger = get_logger(__name__)


class LocalBlobStorage(BlobStorage):
    def __init__(self, directory: str, public_url: str):
        self.directory = Path(directory)
        self.public_url = public_url if public_url.endswith("/") else public_url + "/"

    async def upload(self, filename: str, content: bytes) -> Optional[str]:
        safe_name = Path(filename).name
        if not safe_name or not content:
            return None

        stored_name = f"{uuid.uuid4().hex[:8]}_{safe_name}"
        target = self.directory / stored_name
        try:
            await asyncio.to_thread(self._write, target, content)
        except OSError as e:
            logger.error("blob_upload_failed", filename=safe_name, error=str(e))
            return None

        logger.info("blob_uploaded", filename=stored_name, size=len(content))
        return f"{self.public_url}{stored_name}"

    async def delete(self, path: str) -> bool:
        # Only the final path segment is trusted; "../" tricks resolve to a bare name
        name = Path(urlparse(path).path).name
        if not name:
            return False

        target = self.directory / name
        if not target.is_file():
            return False

        try:
            await asyncio.to_thread(target.unlink)
        except OSError as e:
            logger.error("blob_delete_failed", filename=name, error=str(e))
            return False

        logger.info("blob_deleted", filename=name)
        return True

    def _write(self, target: Path, content: bytes) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content)

"""
Disabled blob storage - no image host configured.
"""

from typing import Optional

from app.services.interfaces.blob_storage import BlobStorage


class DisabledBlobStorage(BlobStorage):
    """
    No image hosting. Uploads return None so the API answers 400,
    deletes find nothing.
    """

    async def upload(self, filename: str, content: bytes) -> Optional[str]:
        return None

    async def delete(self, path: str) -> bool:
        return False

"""
Blob storage strategy interface.
Allows swapping where resource/institution images are hosted.
"""

from abc import ABC, abstractmethod
from typing import Optional


class BlobStorage(ABC):
    """
    Interface for image hosting.

    Implementations:
    - DisabledBlobStorage: uploads always fail, nothing is stored
    - LocalBlobStorage: files written to a directory served under a public URL
    """

    @abstractmethod
    async def upload(self, filename: str, content: bytes) -> Optional[str]:
        """
        Store a file.

        Returns:
            Public URL of the stored file, or None if the upload failed
        """
        pass

    @abstractmethod
    async def delete(self, path: str) -> bool:
        """
        Remove a previously uploaded file.

        Args:
            path: URL (or path) returned by upload

        Returns:
            True if a file was removed
        """
        pass

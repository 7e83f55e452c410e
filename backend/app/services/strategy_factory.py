"""
Blob storage strategy factory.
Configures where uploaded images are kept.
"""

from app.core.config import Settings
from app.services.interfaces.blob_storage import BlobStorage
from app.services.interfaces.disabled_blob_storage import DisabledBlobStorage
from app.services.local_blob_storage import LocalBlobStorage


def get_blob_storage_strategy(settings: Settings) -> BlobStorage:
    """
    Build the configured blob storage.

    Strategy selection via BLOB_STORAGE:
    - "local": LocalBlobStorage writing into BLOB_LOCAL_DIR
    - anything else: DisabledBlobStorage
    """
    if settings.BLOB_STORAGE == "local":
        return LocalBlobStorage(settings.BLOB_LOCAL_DIR, settings.BLOB_PUBLIC_URL)
    return DisabledBlobStorage()

"""
Service interfaces for dependency inversion.
Allows swapping implementations without changing business logic.
"""

from .blob_storage import BlobStorage
from .disabled_blob_storage import DisabledBlobStorage

__all__ = ['BlobStorage', 'DisabledBlobStorage']

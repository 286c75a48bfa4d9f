"""Storage module for image persistence."""

from .azure import AzureBlobStorage
from .base import BlobStorage, StorageError
from .factory import create_storage
from .memory import InMemoryBlobStorage

__all__ = [
    "AzureBlobStorage",
    "BlobStorage",
    "InMemoryBlobStorage",
    "StorageError",
    "create_storage",
]

"""Construction of the configured storage backend."""
import logging

from config import Settings

from .azure import AzureBlobStorage
from .base import BlobStorage
from .memory import InMemoryBlobStorage

logger = logging.getLogger(__name__)


def create_storage(settings: Settings) -> BlobStorage:
    """Create the storage backend selected by ``STORAGE_TYPE``.

    - "azure": AzureBlobStorage against AZURE_STORAGE_CONTAINER_NAME
    - "memory": InMemoryBlobStorage (data lost on restart)

    Raises:
        ValueError: If Azure is selected without a connection string.
    """
    if settings.storage_type == "memory":
        logger.info("Using in-memory blob storage")
        return InMemoryBlobStorage(base_url=settings.memory_storage_base_url)

    if not settings.azure_storage_connection_string:
        raise ValueError("AZURE_STORAGE_CONNECTION_STRING must be set when STORAGE_TYPE=azure")

    logger.info(f"Using Azure blob storage, container: {settings.azure_storage_container_name}")
    return AzureBlobStorage.from_connection_string(
        settings.azure_storage_connection_string,
        settings.azure_storage_container_name,
    )

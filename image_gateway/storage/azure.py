"""Azure Blob Storage implementation of BlobStorage."""
import logging
from typing import Any

from azure.core.exceptions import AzureError
from azure.storage.blob import ContentSettings
from azure.storage.blob.aio import ContainerClient

from image_gateway.schemas import ImageProperties, ImageRecord

from .base import BlobStorage, StorageError

logger = logging.getLogger(__name__)


def _error_message(exc: AzureError) -> str:
    return exc.message or str(exc)


def to_image_properties(props: Any) -> ImageProperties:
    """Convert Azure ``BlobProperties`` into the API properties model."""
    content_settings = props.content_settings
    blob_type = props.blob_type
    return ImageProperties(
        content_type=content_settings.content_type,
        content_length=props.size,
        content_encoding=content_settings.content_encoding,
        content_language=content_settings.content_language,
        cache_control=content_settings.cache_control,
        etag=props.etag,
        last_modified=props.last_modified,
        created_on=props.creation_time,
        blob_type=getattr(blob_type, "value", blob_type),
        metadata=dict(props.metadata or {}),
    )


class AzureBlobStorage(BlobStorage):
    """Blob storage backed by a single Azure Storage container.

    Uses the asyncio flavour of ``azure-storage-blob`` so that requests
    waiting on Azure do not block the event loop. One container client
    is shared by all requests.
    """

    def __init__(self, container_client: ContainerClient):
        """Initialize Azure storage.

        Args:
            container_client: Async container client the operations run against.
        """
        self._container = container_client
        logger.info(f"Initialized AzureBlobStorage for container: {container_client.container_name}")

    @classmethod
    def from_connection_string(cls, connection_string: str, container_name: str) -> "AzureBlobStorage":
        """Create storage for ``container_name`` from an account connection string."""
        if not connection_string:
            raise ValueError("Azure storage requires AZURE_STORAGE_CONNECTION_STRING")
        container_client = ContainerClient.from_connection_string(
            connection_string,
            container_name=container_name,
        )
        return cls(container_client)

    async def write(self, name: str, content: bytes, content_type: str) -> None:
        blob_client = self._container.get_blob_client(name)
        try:
            await blob_client.upload_blob(
                content,
                overwrite=True,
                content_settings=ContentSettings(content_type=content_type),
            )
        except AzureError as e:
            logger.error(f"Failed to upload blob {name}: {e}")
            raise StorageError(_error_message(e)) from e
        logger.debug(f"Uploaded blob {name} ({len(content)} bytes, {content_type})")

    async def list_blobs(self) -> list[ImageRecord]:
        records = []
        try:
            async for blob in self._container.list_blobs(include=["metadata"]):
                blob_client = self._container.get_blob_client(blob.name)
                records.append(
                    ImageRecord(
                        name=blob.name,
                        url=blob_client.url,
                        properties=to_image_properties(blob),
                    )
                )
        except AzureError as e:
            logger.error(f"Failed to list blobs: {e}")
            raise StorageError(_error_message(e)) from e
        return records

    async def get_properties(self, name: str) -> ImageProperties:
        blob_client = self._container.get_blob_client(name)
        try:
            props = await blob_client.get_blob_properties()
        except AzureError as e:
            logger.warning(f"Failed to fetch properties of blob {name}: {e}")
            raise StorageError(_error_message(e)) from e
        return to_image_properties(props)

    async def set_metadata(self, name: str, metadata: dict[str, str]) -> None:
        blob_client = self._container.get_blob_client(name)
        try:
            await blob_client.set_blob_metadata(metadata)
        except AzureError as e:
            logger.error(f"Failed to set metadata on blob {name}: {e}")
            raise StorageError(_error_message(e)) from e

    async def close(self) -> None:
        await self._container.close()

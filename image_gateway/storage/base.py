"""Storage client interface for image persistence."""

from typing import Protocol, runtime_checkable

from image_gateway.schemas import ImageProperties, ImageRecord


@runtime_checkable
class BlobStorage(Protocol):
    """Abstract interface for blob container operations.

    This interface defines the capability set the gateway needs from a
    remote blob container. Every operation is a single round trip to the
    backend; implementations must not cache results.
    """

    async def write(self, name: str, content: bytes, content_type: str) -> None:
        """Write content under the given blob name, replacing any existing blob.

        Args:
            name: Blob name (object key).
            content: Raw bytes to store.
            content_type: MIME type recorded on the blob.

        Raises:
            StorageError: If the blob cannot be written.
        """
        ...

    async def list_blobs(self) -> list[ImageRecord]:
        """Enumerate every blob in the container.

        Returns:
            list[ImageRecord]: One record per blob, in backend order.

        Raises:
            StorageError: If the enumeration fails.
        """
        ...

    async def get_properties(self, name: str) -> ImageProperties:
        """Fetch the current properties of a blob.

        Args:
            name: Blob name (object key).

        Returns:
            ImageProperties: Provider-reported properties.

        Raises:
            StorageError: If the blob does not exist or cannot be read.
        """
        ...

    async def set_metadata(self, name: str, metadata: dict[str, str]) -> None:
        """Replace the custom metadata of a blob.

        Args:
            name: Blob name (object key).
            metadata: New metadata; previous keys are dropped.

        Raises:
            StorageError: If the metadata cannot be set.
        """
        ...

    async def close(self) -> None:
        """Release network resources held by the client."""
        ...


class StorageError(Exception):
    """Base exception for storage-related errors."""
    pass

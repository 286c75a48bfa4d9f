"""In-memory implementation of BlobStorage."""
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from urllib.parse import quote

from image_gateway.schemas import ImageProperties, ImageRecord

from .base import BlobStorage, StorageError

logger = logging.getLogger(__name__)


@dataclass
class _StoredBlob:
    content: bytes
    content_type: str
    etag: str
    created_on: datetime
    last_modified: datetime
    metadata: dict[str, str] = field(default_factory=dict)


def _new_etag() -> str:
    return f'"0x{uuid.uuid4().hex[:15].upper()}"'


class InMemoryBlobStorage(BlobStorage):
    """In-memory blob container.

    Blobs are kept in a dictionary keyed by name and are lost when the
    process exits. Mirrors the Azure semantics the gateway relies on:
    writes overwrite, metadata updates replace, missing blobs fail.
    Suitable for local development and tests.
    """

    def __init__(self, base_url: str = "http://localhost/images"):
        """Initialize the in-memory container.

        Args:
            base_url: Prefix used to build blob URLs.
        """
        self.base_url = base_url.rstrip("/")
        self._blobs: dict[str, _StoredBlob] = {}
        logger.info(f"Initialized InMemoryBlobStorage with base URL: {self.base_url}")

    def _get(self, name: str) -> _StoredBlob:
        try:
            return self._blobs[name]
        except KeyError:
            raise StorageError(f"The specified blob does not exist: {name}") from None

    def _properties(self, blob: _StoredBlob) -> ImageProperties:
        return ImageProperties(
            content_type=blob.content_type,
            content_length=len(blob.content),
            etag=blob.etag,
            last_modified=blob.last_modified,
            created_on=blob.created_on,
            blob_type="BlockBlob",
            metadata=dict(blob.metadata),
        )

    def url_for(self, name: str) -> str:
        """Build the access URL of a blob."""
        return f"{self.base_url}/{quote(name)}"

    async def write(self, name: str, content: bytes, content_type: str) -> None:
        if not name:
            raise StorageError("Blob name cannot be empty")

        now = datetime.now(timezone.utc)
        # An overwrite starts from a fresh blob, as in Azure
        self._blobs[name] = _StoredBlob(
            content=bytes(content),
            content_type=content_type,
            etag=_new_etag(),
            created_on=now,
            last_modified=now,
        )
        logger.debug(f"Stored blob {name} ({len(content)} bytes)")

    async def list_blobs(self) -> list[ImageRecord]:
        return [
            ImageRecord(name=name, url=self.url_for(name), properties=self._properties(blob))
            for name, blob in self._blobs.items()
        ]

    async def get_properties(self, name: str) -> ImageProperties:
        return self._properties(self._get(name))

    async def set_metadata(self, name: str, metadata: dict[str, str]) -> None:
        blob = self._get(name)
        blob.metadata = dict(metadata)
        blob.etag = _new_etag()
        blob.last_modified = datetime.now(timezone.utc)

    async def read(self, name: str) -> bytes:
        """Return the stored content of a blob."""
        return self._get(name).content

    def count(self) -> int:
        """Get the number of blobs stored."""
        return len(self._blobs)

    def clear(self) -> None:
        """Remove all blobs."""
        self._blobs.clear()

    async def close(self) -> None:
        pass

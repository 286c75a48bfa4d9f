"""Unit tests for storage module."""

from typing import Protocol
from unittest.mock import Mock

import pytest

from config import Settings
from image_gateway.storage import (
    AzureBlobStorage,
    BlobStorage,
    InMemoryBlobStorage,
    StorageError,
    create_storage,
)


class TestBlobStorage:
    """Test BlobStorage interface."""

    def test_interface_protocol(self):
        """Test that BlobStorage is a proper Protocol."""
        assert issubclass(BlobStorage, Protocol)

    def test_interface_methods_defined(self):
        """Test that interface has required methods."""
        for method in ("write", "list_blobs", "get_properties", "set_metadata", "close"):
            assert hasattr(BlobStorage, method)

    def test_runtime_checkable(self):
        """Test that BlobStorage can be used with isinstance at runtime."""
        mock_client = Mock(spec=BlobStorage)
        assert isinstance(mock_client, BlobStorage)

    def test_non_compliant_class(self):
        """Test that non-compliant classes don't match the protocol."""
        class BadClient:
            async def write(self, name, content, content_type):
                return None
            # Missing the other operations

        assert not isinstance(BadClient(), BlobStorage)


class TestInMemoryBlobStorage:
    """Test InMemoryBlobStorage implementation."""

    @pytest.fixture
    def storage(self):
        return InMemoryBlobStorage(base_url="http://localhost/images/")

    def test_implements_protocol(self, storage):
        """Test that InMemoryBlobStorage implements BlobStorage protocol."""
        assert isinstance(storage, BlobStorage)

    def test_base_url_trailing_slash_removed(self, storage):
        assert storage.url_for("cat.png") == "http://localhost/images/cat.png"

    @pytest.mark.asyncio
    async def test_write_and_read(self, storage):
        """Test that written content and type can be read back."""
        await storage.write("cat.png", b"\x89PNG", "image/png")

        assert await storage.read("cat.png") == b"\x89PNG"
        properties = await storage.get_properties("cat.png")
        assert properties.content_type == "image/png"
        assert properties.content_length == 4
        assert properties.created_on == properties.last_modified

    @pytest.mark.asyncio
    async def test_write_overwrites(self, storage):
        """Test that a second write replaces the blob and its metadata."""
        await storage.write("cat.png", b"one", "image/png")
        await storage.set_metadata("cat.png", {"owner": "alice"})
        first_etag = (await storage.get_properties("cat.png")).etag

        await storage.write("cat.png", b"second", "image/jpeg")

        properties = await storage.get_properties("cat.png")
        assert storage.count() == 1
        assert properties.content_type == "image/jpeg"
        assert properties.content_length == 6
        assert properties.metadata == {}
        assert properties.etag != first_etag

    @pytest.mark.asyncio
    async def test_write_empty_name(self, storage):
        """Test that blobs need a name."""
        with pytest.raises(StorageError, match="cannot be empty"):
            await storage.write("", b"data", "image/png")

    @pytest.mark.asyncio
    async def test_list_blobs(self, storage):
        """Test listing returns one record per blob with URL and properties."""
        await storage.write("a.png", b"a", "image/png")
        await storage.write("b.gif", b"bb", "image/gif")

        records = await storage.list_blobs()

        assert [record.name for record in records] == ["a.png", "b.gif"]
        assert records[1].url == "http://localhost/images/b.gif"
        assert records[1].properties.content_length == 2

    @pytest.mark.asyncio
    async def test_set_metadata_replaces(self, storage):
        """Test that metadata updates replace the previous map."""
        await storage.write("cat.png", b"X", "image/png")
        await storage.set_metadata("cat.png", {"owner": "alice", "tag": "pet"})

        await storage.set_metadata("cat.png", {"a": "1"})

        assert (await storage.get_properties("cat.png")).metadata == {"a": "1"}

    @pytest.mark.asyncio
    async def test_metadata_is_copied(self, storage):
        """Test that callers cannot mutate stored metadata through their dict."""
        await storage.write("cat.png", b"X", "image/png")
        metadata = {"a": "1"}
        await storage.set_metadata("cat.png", metadata)

        metadata["b"] = "2"

        assert (await storage.get_properties("cat.png")).metadata == {"a": "1"}

    @pytest.mark.asyncio
    async def test_missing_blob(self, storage):
        """Test that operations on unknown blobs raise StorageError."""
        with pytest.raises(StorageError, match="does not exist"):
            await storage.get_properties("missing.png")
        with pytest.raises(StorageError, match="does not exist"):
            await storage.set_metadata("missing.png", {"a": "1"})

    @pytest.mark.asyncio
    async def test_clear(self, storage):
        await storage.write("cat.png", b"X", "image/png")
        storage.clear()
        assert storage.count() == 0
        assert await storage.list_blobs() == []


class TestCreateStorage:
    """Test storage factory."""

    def test_memory(self):
        """Test that STORAGE_TYPE=memory yields the in-memory backend."""
        settings = Settings(storage_type="memory", memory_storage_base_url="http://test/imgs")

        storage = create_storage(settings)

        assert isinstance(storage, InMemoryBlobStorage)
        assert storage.base_url == "http://test/imgs"

    def test_azure_requires_connection_string(self):
        """Test that Azure storage cannot be created without credentials."""
        settings = Settings(storage_type="azure", azure_storage_connection_string=None)

        with pytest.raises(ValueError, match="AZURE_STORAGE_CONNECTION_STRING"):
            create_storage(settings)

    def test_azure(self, monkeypatch):
        """Test that STORAGE_TYPE=azure builds AzureBlobStorage for the container."""
        calls = {}

        def fake_from_connection_string(cls, connection_string, container_name):
            calls["args"] = (connection_string, container_name)
            return cls(Mock(container_name=container_name))

        monkeypatch.setattr(
            AzureBlobStorage,
            "from_connection_string",
            classmethod(fake_from_connection_string),
        )
        settings = Settings(
            storage_type="azure",
            azure_storage_connection_string="UseDevelopmentStorage=true",
            azure_storage_container_name="photos",
        )

        storage = create_storage(settings)

        assert isinstance(storage, AzureBlobStorage)
        assert calls["args"] == ("UseDevelopmentStorage=true", "photos")

"""Image-related Pydantic schemas for API responses."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ImageProperties(BaseModel):
    """Provider-reported properties of a stored image blob.

    Serialized with camelCase keys (``contentType``, ``lastModified`` ...)
    so clients see the same shape regardless of backend.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "contentType": "image/png",
                    "contentLength": 2048,
                    "contentEncoding": None,
                    "contentLanguage": None,
                    "cacheControl": None,
                    "etag": "\"0x8DC2F1A7B3C4D5E\"",
                    "lastModified": "2024-05-01T12:00:00Z",
                    "createdOn": "2024-05-01T12:00:00Z",
                    "blobType": "BlockBlob",
                    "metadata": {"owner": "alice"},
                }
            ]
        },
    )

    content_type: Optional[str] = Field(None, description="MIME type declared at upload")
    content_length: Optional[int] = Field(None, description="Size of the blob in bytes", ge=0)
    content_encoding: Optional[str] = None
    content_language: Optional[str] = None
    cache_control: Optional[str] = None
    etag: Optional[str] = Field(None, description="Entity tag of the current blob version")
    last_modified: Optional[datetime] = None
    created_on: Optional[datetime] = None
    blob_type: Optional[str] = None
    metadata: dict[str, str] = Field(
        default_factory=dict,
        description="Custom key/value metadata attached to the blob"
    )


class ImageRecord(BaseModel):
    """A single entry of the image listing."""

    name: str = Field(..., min_length=1, description="Blob name, equal to the uploaded filename")
    url: str = Field(..., description="Access URL of the blob")
    properties: ImageProperties


class MessageResponse(BaseModel):
    """Confirmation returned by mutating endpoints."""

    message: str = Field(..., examples=["Image uploaded successfully"])


class ErrorResponse(BaseModel):
    """Body returned when a storage operation fails."""

    message: str = Field(..., examples=["Error uploading image"])
    error: str = Field(..., description="Message reported by the storage backend")

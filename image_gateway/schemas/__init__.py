"""Pydantic schemas for request/response validation."""

from .image import ErrorResponse, ImageProperties, ImageRecord, MessageResponse

__all__ = [
    "ErrorResponse",
    "ImageProperties",
    "ImageRecord",
    "MessageResponse",
]

"""FastAPI dependency injection configuration."""

import logging

from fastapi import Request

from image_gateway.storage import BlobStorage

logger = logging.getLogger(__name__)


def get_storage_client(request: Request) -> BlobStorage:
    """Get the storage client created at application startup.

    The client is built once by the application lifespan and kept on
    ``app.state``. Tests replace this dependency through
    ``app.dependency_overrides``.

    Args:
        request: Incoming request, used to reach the application state.

    Returns:
        BlobStorage: The shared storage client.

    Raises:
        RuntimeError: If the application has not been started.
    """
    storage = getattr(request.app.state, "storage", None)
    if storage is None:
        logger.error("Storage client requested before application startup")
        raise RuntimeError("Storage client is not initialized")
    return storage

import logging
from contextlib import asynccontextmanager
from typing import Any, Optional, Union

from fastapi import Depends, FastAPI, File, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from starlette.datastructures import UploadFile as StarletteUploadFile

from image_gateway.dependencies import get_storage_client
from image_gateway.errors import GatewayError, gateway_error_handler, storage_errors
from image_gateway.schemas import (
    ErrorResponse,
    ImageProperties,
    ImageRecord,
    MessageResponse,
)
from image_gateway.storage import BlobStorage, create_storage
from config import get_settings

# Get settings and configure logging before anything else
settings = get_settings()
settings.configure_logging()

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"

STORAGE_FAILURE = {500: {"model": ErrorResponse, "description": "Storage backend failure"}}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the storage client on startup and close it on shutdown."""
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Debug mode: {settings.debug}")
    logger.info(f"Storage type: {settings.storage_type}")

    app.state.storage = create_storage(settings)

    yield

    logger.info("Shutting down application")
    await app.state.storage.close()
    app.state.storage = None


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    debug=settings.debug,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(GatewayError, gateway_error_handler)


@app.get("/health")
def health_check() -> dict[str, str]:
    """Simple health-check endpoint."""
    return {
        "status": "ok",
        "environment": settings.environment,
        "version": settings.app_version,
    }


@app.get("/config")
def get_config() -> dict[str, Any]:
    """Get current configuration (non-sensitive values only)."""
    return {
        "app_name": settings.app_name,
        "app_version": settings.app_version,
        "environment": settings.environment,
        "debug": settings.debug,
        "storage_type": settings.storage_type,
        "container_name": settings.azure_storage_container_name,
        "log_level": settings.log_level,
        "log_json": settings.log_json,
        "max_upload_size": settings.max_upload_size,
    }


@app.post("/upload-image", response_model=MessageResponse, responses=STORAGE_FAILURE, tags=["images"])
async def upload_image(
    file: Union[UploadFile, str, None] = File(None),
    storage: BlobStorage = Depends(get_storage_client),
) -> MessageResponse:
    """Upload an image file.

    The original filename is used verbatim as the blob name, so uploading
    a file with an existing name replaces the stored blob.

    Args:
        file: The uploaded image file (multipart field ``file``).
        storage: Blob storage the image is written to.

    Returns:
        MessageResponse: Confirmation message.

    Raises:
        HTTPException: 400 if no named file was sent, 413 if it exceeds
            a configured MAX_UPLOAD_SIZE.
    """
    # A part without a filename arrives as a plain form value
    if not isinstance(file, StarletteUploadFile) or not file.filename:
        logger.warning("Upload request without a named file part")
        raise HTTPException(status_code=400, detail="No file uploaded; expected multipart field 'file'")

    content = await file.read()
    if settings.max_upload_size is not None and len(content) > settings.max_upload_size:
        logger.warning(f"Rejected upload {file.filename}: {len(content)} bytes exceeds limit")
        raise HTTPException(
            status_code=413,
            detail=f"File exceeds maximum upload size of {settings.max_upload_size} bytes",
        )

    content_type = file.content_type or DEFAULT_CONTENT_TYPE
    logger.info(f"Uploading image: {file.filename}, content length: {len(content)}, type: {content_type}")

    with storage_errors("Error uploading image"):
        await storage.write(file.filename, content, content_type)

    return MessageResponse(message="Image uploaded successfully")


@app.get("/api/images", response_model=list[ImageRecord], responses=STORAGE_FAILURE, tags=["images"])
async def list_images(storage: BlobStorage = Depends(get_storage_client)) -> list[ImageRecord]:
    """List every image in the container with its URL and properties."""
    with storage_errors("Error listing images"):
        images = await storage.list_blobs()

    logger.info(f"Listing {len(images)} images.")
    return images


@app.get("/images/{image_id}", response_model=ImageProperties, responses=STORAGE_FAILURE, tags=["images"])
async def get_image_details(
    image_id: str,
    storage: BlobStorage = Depends(get_storage_client),
) -> ImageProperties:
    """Get the current properties of an image.

    A missing image is reported like any other storage failure.
    """
    with storage_errors("Error fetching image details"):
        return await storage.get_properties(image_id)


@app.put("/images/{image_id}", response_model=MessageResponse, responses=STORAGE_FAILURE, tags=["images"])
async def update_image_metadata(
    image_id: str,
    metadata: dict[str, str],
    storage: BlobStorage = Depends(get_storage_client),
) -> MessageResponse:
    """Replace the custom metadata of an image with the request body."""
    logger.info(f"Updating metadata of {image_id}: {sorted(metadata)}")

    with storage_errors("Error updating image metadata"):
        await storage.set_metadata(image_id, metadata)

    return MessageResponse(message="Image metadata updated successfully")

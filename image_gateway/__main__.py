"""Run the gateway with uvicorn: ``python -m image_gateway``."""
import logging

import uvicorn

from config import get_settings

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()
    settings.configure_logging()
    logger.info(f"API server running on port {settings.port}")

    uvicorn.run(
        "image_gateway.main:app",
        host=settings.host,
        port=settings.port,
        workers=settings.worker_count,
        log_level=settings.log_level.lower(),
        log_config=None,
    )


if __name__ == "__main__":
    main()

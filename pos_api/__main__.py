"""
Run the API with uvicorn: ``python -m pos_api``.
Host and port come from API_HOST / API_PORT.
"""

import logging

import uvicorn

from pos_api.core.config import get_settings, setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()
    setup_logging()

    logger.info(f"✅ Server running at http://{settings.api_host}:{settings.api_port}")
    uvicorn.run(
        "pos_api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.is_development and settings.debug,
    )


if __name__ == "__main__":
    main()

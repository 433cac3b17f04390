#!/usr/bin/env python3
"""
Entry point for the Movie Catalog API.
Runs the FastAPI app under uvicorn using the configured host and port.
"""
import logging
import sys

import uvicorn

from app.core.config import settings

logger = logging.getLogger(__name__)


def main():
    """Main entry point for the application"""
    logger.info(f"Starting server on {settings.HOST}:{settings.PORT}")
    try:
        uvicorn.run(
            "app.server:app",
            host=settings.HOST,
            port=settings.PORT,
            log_level=settings.LOG_LEVEL.lower(),
        )
    except Exception as e:
        logger.error(f"Error starting application: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""
Main entry point for URL shortener service.

Concurrency: The server handles multiple connections simultaneously via async I/O
(FastAPI + asyncpg connection pool). Set WORKERS > 1 for multi-process scaling
across CPU cores (each worker has its own DB pool).

Usage:
    python app.py

Environment variables:
    DATABASE_URL - PostgreSQL connection URL (or memory://)
    CREATE_TABLES - Set to true to create the urls table on startup
    STORE_TIMEOUT_SECONDS - Timeout for every store call
    BASE_URL - Base URL for short links
    PORT - Port to listen on
    WORKERS - Number of uvicorn worker processes (default 1)
    ENABLE_DEBUG_ROUTES - Serve GET /api/debug/urls
    LOG_LEVEL - Logging level
"""

import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import load_config
from shortener.database import create_store
from shortener.service import URLShortenerService
from shortener.shortcode import ShortCodeGenerator
from shortener.common.logging_config import setup_logging
from web_app import create_app


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Own the store for the lifetime of the process and hand it to the service."""
    config = app.state.config
    logger = app.state.logger

    logger.info("Starting URL shortener service...")

    db = create_store(config, logger=logger)
    logger.info(f"Using {type(db).__name__} store")

    generator = ShortCodeGenerator(default_length=config.short_code_length)
    service = URLShortenerService(
        db=db,
        short_code_generator=generator,
        logger=logger,
        max_collision_retries=config.max_collision_retries,
    )

    app.state.service = service

    logger.info("Service started successfully")

    yield

    logger.info("Shutting down URL shortener service...")

    await service.close()

    logger.info("Service stopped")


def build_app(config=None) -> FastAPI:
    """Create the application with logging configured and the lifespan attached."""
    config = config or load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    app = create_app(service_instance=None, config=config)

    app.state.config = config
    app.state.logger = logger

    app.router.lifespan_context = lifespan

    return app


def main():
    """Main entry point."""
    config = load_config()
    app = build_app(config)
    logger = app.state.logger

    logger.info("URL Shortener Service")
    logger.info(f"Configuration: {config.model_dump(exclude={'database_url'})}")

    # Configure uvicorn: async handles many concurrent connections per worker;
    # workers > 1 runs multiple processes for CPU scaling (each has its own DB pool).
    if config.workers > 1:
        # uvicorn spawns worker processes only from an import string
        uvicorn.run(
            "app:build_app",
            factory=True,
            host=config.host,
            port=config.port,
            workers=config.workers,
            log_level=config.log_level.lower(),
            access_log=False,
        )
        return

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
        access_log=False,
    )

    server = uvicorn.Server(uvicorn_config)

    # Setup signal handlers for graceful shutdown
    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    try:
        logger.info(f"Starting server on {config.host}:{config.port}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()

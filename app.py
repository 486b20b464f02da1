#!/usr/bin/env python3
"""
Main entry point for the short link service.

Concurrency: requests are served concurrently via async I/O (FastAPI +
asyncpg pool or redis.asyncio). Set WORKERS > 1 for multi-process scaling
with a shared store (PostgreSQL or Redis); memory:// is per-process.

Usage:
    python app.py

Environment variables:
    STORAGE_URL - Storage connection string (memory://, postgresql://..., redis://...)
    STORAGE_CREATE_TABLES - Set to 1 to create the PostgreSQL schema on startup
    PORT - Port to listen on
    WORKERS - Number of uvicorn worker processes (default 1)
    SHORT_ID_LENGTH - Length of generated short IDs (default 8)
    MAX_GENERATION_ATTEMPTS - Insert attempts per create (default 5)
    REQUIRE_HTTP_SCHEME - Only accept http/https URLs (default true)
    LOG_LEVEL - Logging level
"""

import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import Config, load_config
from shortlink.common.logging_config import setup_logging
from shortlink.idgen import ShortIdGenerator
from shortlink.service import RedirectService
from shortlink.store import create_store
from web_app import create_app


def build_service(config: Config, logger) -> RedirectService:
    """Create the store and service described by ``config``."""
    store = create_store(
        config.storage_url,
        pool_max_size=config.storage_pool_max_size,
        create_tables=config.storage_create_tables,
        logger=logger,
    )
    return RedirectService(
        store=store,
        id_generator=ShortIdGenerator(default_length=config.short_id_length),
        logger=logger,
        max_generation_attempts=config.max_generation_attempts,
        require_http_scheme=config.require_http_scheme,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info("Starting short link service...")
    logger.info(f"Using storage backend {config.storage_url.split('://', 1)[0]}://")

    service = build_service(config, logger)
    app.state.store = service.store
    app.state.service = service

    health = await service.health_check()
    if not health["overall"]:
        logger.warning("Storage health check failed at startup")

    logger.info("Service started successfully")

    yield

    logger.info("Shutting down short link service...")
    await service.close()
    logger.info("Service stopped")


def create_application() -> FastAPI:
    """Build the configured application.

    uvicorn imports this by name in every worker process, so each worker
    gets its own logging setup, store and service.
    """
    config = load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    app = create_app(
        store_instance=None,  # Will be set in lifespan
        service_instance=None,
        config=config,
    )

    app.state.config = config
    app.state.logger = logger
    app.router.lifespan_context = lifespan
    return app


def main():
    """Main entry point."""
    config = load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info("Short Link Service")
    logger.info(f"Configuration: {config.model_dump(exclude={'storage_url'})}")

    try:
        logger.info(f"Starting server on {config.host}:{config.port} with {config.workers} worker(s)")
        uvicorn.run(
            "app:create_application",
            factory=True,
            host=config.host,
            port=config.port,
            workers=config.workers,
            log_level=config.log_level.lower(),
            access_log=True,
        )
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()

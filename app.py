#!/usr/bin/env python3
"""
Main entry point for the short link service.

Concurrency: The server handles multiple connections simultaneously via async I/O
(FastAPI + asyncpg connection pool). Set WORKERS > 1 for multi-process scaling
across CPU cores. uvicorn then imports ``app:build_app`` in every worker, so each
worker builds its own app and DB pool and the datastore sees up to
WORKERS * POOL_MAX_SIZE connections.

Usage:
    python app.py

Environment variables:
    DATABASE_URL - PostgreSQL connection URL (or memory://)
    CREATE_TABLES - Set to 'true' to create the url table on startup
    POOL_MAX_SIZE - Maximum datastore connections per worker (default 50)
    POOL_TIMEOUT_SECONDS - Pool acquire / query timeout (default 5)
    SHORT_CODE_LENGTH - Length of generated ids (default 4)
    MAX_COLLISION_RETRIES - Insert attempts per shorten request (default 5)
    BASE_URL - Base URL for short links
    PORT - Port to listen on
    WORKERS - Number of uvicorn worker processes (default 1)
    LOG_LEVEL - Logging level
"""

import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import load_config
from shortlink.database import create_gateway
from shortlink.service import ShortLinkService
from shortlink.shortcode import ShortCodeGenerator
from shortlink.common.logging_config import setup_logging
from web_app import create_app


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info("Starting short link service...")

    db = create_gateway(config, logger=logger)
    if config.create_tables:
        await db.ensure_tables()

    generator = ShortCodeGenerator(length=config.short_code_length)
    service = ShortLinkService(
        db=db,
        short_code_generator=generator,
        logger=logger,
        max_collision_retries=config.max_collision_retries,
    )
    app.state.service = service

    logger.info("Service started successfully")

    yield

    logger.info("Shutting down short link service...")
    await service.close()
    logger.info("Service stopped")


def build_app(config=None) -> FastAPI:
    """Build the FastAPI app with config, logging and lifespan wired in."""
    config = config or load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    app = create_app(service_instance=None, config=config)
    app.state.logger = logger
    app.router.lifespan_context = lifespan

    return app


def main():
    """Main entry point."""
    config = load_config()
    app = build_app(config)
    logger = app.state.logger

    logger.info("Shortlink Service")
    logger.info(f"Configuration: {config.safe_dump()}")

    if config.workers > 1:
        # uvicorn only spawns workers for an import string; it runs its own signal handling
        logger.info(f"Starting {config.workers} workers on {config.host}:{config.port}")
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

#!/usr/bin/env python3
"""
Main entry point for URL shortener service.

Concurrency: FastAPI runs the synchronous route handlers in its thread pool
(one worker thread per in-flight request). All mappings live in a single
in-memory store owned by the service, so the server always runs as one
process; state is lost on restart.

Usage:
    python app.py

Environment variables (all optional):
    HOST - Host to bind to (default 0.0.0.0)
    PORT - Port to listen on (default 8080)
    BASE_URL - Base URL for short links (default http://localhost:8080)
    SHORT_CODE_LENGTH - Length of generated codes (default 6)
    MAX_COLLISION_RETRIES - Allocation attempts per request (default 10)
    SELF_CHECK_ON_STARTUP - Run the startup self-check (default true)
    LOG_LEVEL - Logging level
"""

import logging
import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import load_config
from shortener.exceptions import GenerationError
from shortener.service import URLShortenerService
from shortener.shortcode import ShortCodeGenerator, ALPHABET
from shortener.store import MappingStore
from shortener.common.logging_config import setup_logging
from web_app import create_app
from web_app.api.schemas import ShortenResponse


def run_self_check(logger: logging.Logger) -> None:
    """Exercise the generator, store and response schema on scratch instances.

    Raises:
        RuntimeError: If any check fails
    """
    logger.info("Running startup self-check...")

    try:
        code = ShortCodeGenerator(default_length=6).generate()
    except GenerationError as e:
        raise RuntimeError(f"Short code generation failed: {e}") from e
    if len(code) != 6 or any(c not in ALPHABET for c in code):
        raise RuntimeError(f"Short code generation failed: {code!r}")
    logger.info("Short code generation works")

    store = MappingStore()
    store.put("abc123", "https://example.com")
    url, found = store.get("abc123")
    if not found or url != "https://example.com":
        raise RuntimeError("Mapping store round trip failed")
    logger.info("Mapping store works")

    payload = ShortenResponse(
        short_url="http://localhost:8080/abc123",
        short_code="abc123",
        original_url="https://example.com",
    ).model_dump_json()
    logger.info(f"JSON response: {payload}")

    logger.info("Self-check passed")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    logger = app.state.logger

    logger.info("URL shortener service started")

    yield

    mappings = len(app.state.service.store)
    logger.info(f"Shutting down URL shortener service ({mappings} mappings discarded)")


def main():
    """Main entry point."""
    config = load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info("URL Shortener Service")
    logger.info(f"Configuration: {config.model_dump()}")

    if config.self_check_on_startup:
        try:
            run_self_check(logger)
        except RuntimeError as e:
            logger.error(f"Self-check failed: {e}")
            sys.exit(1)

    service = URLShortenerService(
        store=MappingStore(),
        short_code_generator=ShortCodeGenerator(default_length=config.short_code_length),
        code_length=config.short_code_length,
        max_collision_retries=config.max_collision_retries,
    )

    app = create_app(service_instance=service, config=config)
    app.state.logger = logger
    app.router.lifespan_context = lifespan

    # A single worker: each process would otherwise hold its own mapping table.
    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        workers=1,
        log_level=config.log_level.lower(),
        access_log=True,
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

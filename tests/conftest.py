"""Pytest configuration and fixtures."""

import pytest
from typing import AsyncGenerator, Iterable, List

from httpx import ASGITransport, AsyncClient

from config import Config
from shortener.exceptions import GenerationError
from shortener.service import URLShortenerService
from shortener.shortcode import ShortCodeGenerator
from shortener.store import MappingStore
from shortener.common.logging_config import setup_logging
from web_app import create_app

TEST_BASE_URL = "http://testserver"


class ScriptedGenerator(ShortCodeGenerator):
    """Generator that hands out a fixed sequence of codes."""

    def __init__(self, codes: Iterable[str]):
        super().__init__(default_length=6)
        self.codes: List[str] = list(codes)
        self.calls = 0

    def generate(self, length=None) -> str:
        self.calls += 1
        return self.codes.pop(0)


class FailingGenerator(ShortCodeGenerator):
    """Generator whose random source always fails."""

    def generate(self, length=None) -> str:
        raise GenerationError("Random source failed: entropy pool unavailable")


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def short_code_generator():
    """Create short code generator."""
    return ShortCodeGenerator(default_length=6)


@pytest.fixture
def store():
    """Create an isolated, empty mapping store."""
    return MappingStore()


@pytest.fixture
def service(store, short_code_generator, logger) -> URLShortenerService:
    """Create service instance."""
    return URLShortenerService(
        store=store,
        short_code_generator=short_code_generator,
        logger=logger,
    )


@pytest.fixture
def config():
    """Create test configuration."""
    return Config(base_url=TEST_BASE_URL)


@pytest.fixture
def app(service, config):
    """Create test FastAPI app."""
    return create_app(service_instance=service, config=config)


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Create test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url=TEST_BASE_URL) as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]

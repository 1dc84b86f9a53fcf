"""Pytest configuration and fixtures."""

import pytest
from datetime import datetime, timezone
from httpx import ASGITransport, AsyncClient

from config import Config
from shortlink.database.base import ShortLinkGatewayBase
from shortlink.database.memory import InMemoryShortLinkGateway
from shortlink.database.models import Found, Inserted, NotFound, ShortLink
from shortlink.service import ShortLinkService
from shortlink.shortcode import ShortCodeGenerator
from shortlink.common.logging_config import setup_logging
from web_app import create_app


class CountingGenerator(ShortCodeGenerator):
    """Generator that records every code it hands out."""

    def __init__(self, length: int = 4, codes=None):
        super().__init__(length=length)
        self._scripted = list(codes or [])
        self.generated = []

    def generate(self) -> str:
        code = self._scripted.pop(0) if self._scripted else super().generate()
        self.generated.append(code)
        return code


class ScriptedGateway(ShortLinkGatewayBase):
    """Gateway whose insert outcome is decided by a callback; records calls."""

    def __init__(self, on_insert=None, on_lookup=None):
        super().__init__("scripted://")
        self.on_insert = on_insert
        self.on_lookup = on_lookup
        self.insert_calls = []
        self.lookup_calls = []
        self.rows = {}
        self.closed = False

    async def insert(self, short_id, long_url):
        self.insert_calls.append((short_id, long_url))
        if self.on_insert is not None:
            result = self.on_insert(short_id, long_url)
        else:
            result = Inserted(
                link=ShortLink(id=short_id, long_url=long_url, created_at=datetime.now(timezone.utc))
            )
        if isinstance(result, Inserted):
            self.rows[short_id] = result.link
        return result

    async def lookup(self, short_id):
        self.lookup_calls.append(short_id)
        if self.on_lookup is not None:
            return self.on_lookup(short_id)
        if short_id in self.rows:
            return Found(link=self.rows[short_id])
        return NotFound(short_id=short_id)

    async def health_check(self):
        return True

    async def close(self):
        self.closed = True


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
async def test_db(logger):
    """In-memory gateway instance."""
    db = InMemoryShortLinkGateway(logger=logger)

    yield db

    await db.close()


@pytest.fixture
def short_code_generator():
    """Create short code generator."""
    return ShortCodeGenerator(length=4)


@pytest.fixture
def service(test_db, short_code_generator, logger) -> ShortLinkService:
    """Create service instance."""
    return ShortLinkService(
        db=test_db,
        short_code_generator=short_code_generator,
        logger=logger,
    )


@pytest.fixture
def config():
    """Test configuration."""
    return Config(
        database_url="memory://",
        base_url="http://testserver",
    )


@pytest.fixture
def app(service, config):
    """Create test FastAPI app."""
    return create_app(service_instance=service, config=config)


@pytest.fixture
async def client(app):
    """Create test client."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]

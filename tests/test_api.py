"""Tests for API endpoints."""

import pytest
from httpx import ASGITransport, AsyncClient

from shortlink.database.models import Conflict, GatewayFailure
from shortlink.service import ShortLinkService
from web_app import create_app

from conftest import ScriptedGateway


@pytest.fixture
async def scripted_client(config, logger):
    """Client over an app whose gateway behaviour is set per test."""
    gateway = ScriptedGateway()
    service = ShortLinkService(db=gateway, logger=logger, max_collision_retries=3)
    app = create_app(service_instance=service, config=config)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac, gateway


class TestAPIEndpoints:
    """Test API endpoints."""

    async def test_shorten_url(self, client, sample_urls):
        """Test POST /api/shorten."""
        response = await client.post("/api/shorten", json={"url": sample_urls[0]})

        assert response.status_code == 200
        data = response.json()
        assert len(data["short_id"]) == 4
        assert data["long_url"] == sample_urls[0]
        assert data["short_url"] == f"http://testserver/{data['short_id']}"
        assert "created_at" in data

    async def test_shorten_behind_proxy(self, client, sample_urls):
        """Short URL follows X-Forwarded-* headers."""
        response = await client.post(
            "/api/shorten",
            json={"url": sample_urls[0]},
            headers={
                "X-Forwarded-Proto": "https",
                "X-Forwarded-Host": "sho.rt",
                "X-Forwarded-Prefix": "/s/",
            },
        )

        data = response.json()
        assert data["short_url"] == f"https://sho.rt/s/{data['short_id']}"

    @pytest.mark.parametrize("url", ["not-a-url", "ftp://example.com", "https://", "http://exa mple.com"])
    async def test_shorten_invalid_url(self, client, url):
        """Test POST /api/shorten with invalid URL."""
        response = await client.post("/api/shorten", json={"url": url})

        assert response.status_code == 400
        assert "Invalid URL" in response.json()["detail"]

    async def test_shorten_missing_url(self, client):
        response = await client.post("/api/shorten", json={})

        assert response.status_code == 422

    async def test_get_link(self, client, sample_urls):
        """Test GET /api/links/{short_id}."""
        create_response = await client.post("/api/shorten", json={"url": sample_urls[0]})
        short_id = create_response.json()["short_id"]

        response = await client.get(f"/api/links/{short_id}")

        assert response.status_code == 200
        data = response.json()
        assert data["short_id"] == short_id
        assert data["long_url"] == sample_urls[0]

    async def test_get_link_not_found(self, client):
        """Test GET /api/links/{short_id} for nonexistent id."""
        response = await client.get("/api/links/zzzz")

        assert response.status_code == 404
        assert "zzzz" in response.json()["detail"]

    async def test_health_check(self, client):
        """Test GET /api/health."""
        response = await client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == "healthy"
        assert "timestamp" in data


class TestAPIErrors:
    """Service errors surface as 503."""

    async def test_retries_exhausted(self, scripted_client):
        client, gateway = scripted_client
        gateway.on_insert = lambda sid, url: Conflict(short_id=sid)

        response = await client.post("/api/shorten", json={"url": "https://example.com"})

        assert response.status_code == 503
        assert "Maximum retries" in response.json()["detail"]
        assert len(gateway.insert_calls) == 3

    async def test_gateway_failure_on_shorten(self, scripted_client):
        client, gateway = scripted_client
        gateway.on_insert = lambda sid, url: GatewayFailure(operation="insert", message="connection refused")

        response = await client.post("/api/shorten", json={"url": "https://example.com"})

        assert response.status_code == 503
        assert "connection refused" in response.json()["detail"]
        assert len(gateway.insert_calls) == 1

    async def test_gateway_failure_on_lookup(self, scripted_client):
        client, gateway = scripted_client
        gateway.on_lookup = lambda sid: GatewayFailure(operation="lookup", message="timeout")

        response = await client.get("/api/links/abcd")

        assert response.status_code == 503

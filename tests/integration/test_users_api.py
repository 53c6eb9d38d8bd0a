"""Integration tests for the demo API.

Runs the real FastAPI app in-process over httpx's ASGI transport with the
UserService wired to in-memory SQLite and cache.
"""

import pytest
from httpx import ASGITransport, AsyncClient

from monitoring_stack.api.dependencies import get_user_service
from monitoring_stack.api.main import create_app


@pytest.fixture
def app(user_service):
    application = create_app()
    application.dependency_overrides[get_user_service] = lambda: user_service
    return application


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


class TestUsersEndpoints:
    """GET/POST /api/users."""

    async def test_list_empty(self, client):
        response = await client.get("/api/users")

        assert response.status_code == 200
        assert response.json() == []

    async def test_create_then_list(self, client):
        created = await client.post("/api/users", json={"name": "Ada", "email": "ada@example.com"})

        assert created.status_code == 200
        assert created.json() == {"id": 1, "name": "Ada", "email": "ada@example.com"}

        listed = await client.get("/api/users")
        assert listed.json() == [{"id": 1, "name": "Ada", "email": "ada@example.com"}]

    async def test_list_not_stale_after_create(self, client):
        """A warm cache is dropped by the write."""
        await client.get("/api/users")
        await client.post("/api/users", json={"name": "Grace", "email": "grace@example.com"})

        names = [u["name"] for u in (await client.get("/api/users")).json()]

        assert names == ["Grace"]

    async def test_get_by_id(self, client):
        created = (await client.post("/api/users", json={"name": "Ada", "email": "ada@example.com"})).json()

        response = await client.get(f"/api/users/{created['id']}")

        assert response.status_code == 200
        assert response.json() == created

    async def test_get_unknown_id_is_404(self, client):
        response = await client.get("/api/users/999")

        assert response.status_code == 404
        assert response.json()["error"] == "user_not_found"
        assert response.json()["path"] == "/api/users/999"

    @pytest.mark.parametrize(
        "payload",
        [
            {"name": "Ada", "email": "not-an-email"},
            {"name": "", "email": "ada@example.com"},
            {"email": "ada@example.com"},
        ],
    )
    async def test_invalid_payload(self, client, payload):
        response = await client.post("/api/users", json=payload)

        assert response.status_code == 422
        assert response.json()["error"] == "validation_error"


class TestMetricsEndpoint:
    """GET /api/metrics."""

    async def test_metrics_shape(self, client):
        await client.post("/api/users", json={"name": "Ada", "email": "ada@example.com"})

        body = (await client.get("/api/metrics")).json()

        assert set(body) == {"activeUsers", "responseTime", "cacheHitRate"}
        assert body["activeUsers"] == 1
        assert 50 <= body["responseTime"] < 150
        assert 60 <= body["cacheHitRate"] < 100


class TestHealthAndPrometheus:
    """Plain-text health probe and the Prometheus scrape endpoint."""

    async def test_health(self, client):
        response = await client.get("/api/health")

        assert response.status_code == 200
        assert response.text == "OK"
        assert response.headers["content-type"].startswith("text/plain")

    async def test_prometheus_scrape(self, client):
        await client.get("/api/health")

        response = await client.get("/metrics")

        assert response.status_code == 200
        assert "monitoring_backend_request_total" in response.text
        assert 'endpoint="/api/health"' in response.text

    async def test_endpoint_label_is_route_template(self, client):
        """Unrouted paths share one series; routed paths use their template."""
        for i in range(3):
            assert (await client.get(f"/scan/{i}")).status_code == 404
        await client.get("/api/users/12345")

        text = (await client.get("/metrics")).text

        assert 'endpoint="unmatched"' in text
        assert 'endpoint="/api/users/{user_id}"' in text
        assert "/scan/" not in text
        assert 'endpoint="/api/users/12345"' not in text

    async def test_uninitialized_service_is_500(self):
        app = create_app()
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            response = await ac.get("/api/users")

        assert response.status_code == 500
        assert response.json()["error"] == "internal_server_error"

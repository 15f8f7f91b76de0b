from __future__ import annotations

import logging
from collections.abc import AsyncIterator

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.exc import OperationalError

import courtbook.main as main_module


class _UnreachableSession:
    async def __aenter__(self) -> "_UnreachableSession":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        return None

    async def execute(self, _statement: object) -> None:
        raise OperationalError("SELECT 1", {}, ConnectionRefusedError("connection refused"))


@pytest_asyncio.fixture()
async def asgi_client() -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=main_module.app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest.mark.asyncio
async def test_database_readiness_logs_and_reports_failure(
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
) -> None:
    monkeypatch.setattr(main_module, "SessionLocal", _UnreachableSession)

    with caplog.at_level(logging.ERROR, logger=main_module.logger.name):
        assert await main_module._is_database_ready() is False

    assert any("Database readiness check failed" in record.getMessage() for record in caplog.records)


@pytest.mark.asyncio
async def test_ready_endpoint_renders_503_in_error_envelope(
    monkeypatch: pytest.MonkeyPatch,
    asgi_client: httpx.AsyncClient,
) -> None:
    async def _not_ready() -> bool:
        return False

    monkeypatch.setattr(main_module, "_is_database_ready", _not_ready)

    response = await asgi_client.get("/ready")

    assert response.status_code == 503
    assert response.json() == {"error": {"code": "http_error", "message": "Database is not ready"}}


@pytest.mark.asyncio
async def test_ready_endpoint_reports_database_ok(
    monkeypatch: pytest.MonkeyPatch,
    asgi_client: httpx.AsyncClient,
) -> None:
    async def _ready() -> bool:
        return True

    monkeypatch.setattr(main_module, "_is_database_ready", _ready)

    response = await asgi_client.get("/ready")

    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "ready"
    assert payload["database"] == "ok"
    assert "timestamp" in payload


@pytest.mark.asyncio
async def test_service_exposes_health_checks_without_root_page(asgi_client: httpx.AsyncClient) -> None:
    health_response = await asgi_client.get("/health")
    assert health_response.status_code == 200
    assert health_response.json() == {"status": "ok"}

    root_response = await asgi_client.get("/")
    assert root_response.status_code == 404

"""Tests for table status, health, root and cross-cutting behaviour."""

import logging

from sqlalchemy import text

from pos_api import __main__ as launcher
from pos_api.core.config import get_settings


async def test_tablestat_empty(client):
    response = await client.get("/api/tablestat")

    assert response.status_code == 200
    assert response.json() == []


async def test_tablestat_passes_rows_through(client, engine):
    async with engine.begin() as conn:
        await conn.execute(text(
            "INSERT INTO tablestat (table_name, status, seats) VALUES "
            "('Table 1', 'occupied', 4), ('Table 2', 'free', 2)"
        ))

    response = await client.get("/api/tablestat")

    assert response.status_code == 200
    assert sorted(response.json(), key=lambda r: r["table_name"]) == [
        {"table_name": "Table 1", "status": "occupied", "seats": 4},
        {"table_name": "Table 2", "status": "free", "seats": 2},
    ]


async def test_tablestat_database_failure(broken_client):
    response = await broken_client.get("/api/tablestat")

    assert response.status_code == 500
    assert response.text == "Server error"


async def test_health_reports_database(client):
    response = await client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "operational"
    assert body["database"] == "healthy"


async def test_health_degraded_without_database(broken_client):
    response = await broken_client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "degraded"
    assert body["database"].startswith("unhealthy")


async def test_root_lists_links(client):
    response = await client.get("/")

    assert response.status_code == 200
    assert response.json()["documentation"] == "/docs"


async def test_cross_origin_requests_allowed(client):
    response = await client.get("/api/menu", headers={"Origin": "http://pos.local"})

    assert response.headers["access-control-allow-origin"] == "*"


async def test_cors_preflight(client):
    response = await client.options(
        "/api/menu",
        headers={
            "Origin": "http://pos.local",
            "Access-Control-Request-Method": "DELETE",
        },
    )

    assert response.status_code == 200
    assert "DELETE" in response.headers["access-control-allow-methods"]


async def test_unknown_route_is_plain_text_404(client):
    response = await client.get("/api/nothing")

    assert response.status_code == 404
    assert response.text == "Not Found"


def test_launcher_logs_the_address_it_binds(monkeypatch, caplog):
    calls = {}
    monkeypatch.setattr(launcher.uvicorn, "run", lambda app, **kwargs: calls.update(app=app, **kwargs))
    settings = get_settings()

    with caplog.at_level(logging.INFO, logger="pos_api.__main__"):
        launcher.main()

    assert calls["app"] == "pos_api.main:app"
    assert calls["host"] == settings.api_host
    assert calls["port"] == settings.api_port
    assert f"http://{settings.api_host}:{settings.api_port}" in caplog.text

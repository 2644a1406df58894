"""
Tests for dashboard counters, HTML pages and operational endpoints.
"""

import logging
from datetime import date, timedelta

import pytest
from httpx import AsyncClient

from app.core.logging import setup_logging
from app.models import Trip
from app.services.stats_service import get_dashboard_stats


@pytest.mark.asyncio
async def test_stats_empty(client: AsyncClient):
    response = await client.get("/api/stats")
    assert response.status_code == 200
    assert response.json() == {
        "totalUsers": 0,
        "activeTrips": 0,
        "tripOrganizers": 0,
        "totalBookings": 0,
    }


@pytest.mark.asyncio
async def test_stats_counts(client: AsyncClient, test_booking, second_user):
    response = await client.get("/api/stats")
    data = response.json()
    assert data["totalUsers"] == 2
    assert data["tripOrganizers"] == 1
    assert data["totalBookings"] == 1


@pytest.mark.asyncio
async def test_active_trips_ignore_finished(db_session):
    """Trips stay active through their end date; open-ended trips always count."""
    today = date(2025, 6, 15)
    db_session.add_all([
        Trip(name="Finished", destination="A", end_date=today - timedelta(days=1)),
        Trip(name="Ends today", destination="B", end_date=today),
        Trip(name="Open ended", destination="C"),
    ])
    await db_session.commit()

    stats = await get_dashboard_stats(db_session, today=today)
    assert stats.active_trips == 2


@pytest.mark.asyncio
async def test_dashboard_page(client: AsyncClient, test_user):
    response = await client.get("/")
    assert response.status_code == 200
    assert "text/html" in response.headers["content-type"]
    assert "Total Users" in response.text


@pytest.mark.asyncio
@pytest.mark.parametrize("slug", ["users", "trips", "organizers", "bookings"])
async def test_resource_pages(client: AsyncClient, slug):
    response = await client.get(f"/{slug}")
    assert response.status_code == 200
    assert f'data-resource="{slug}"' in response.text


@pytest.mark.asyncio
async def test_bookings_page_lists_types(client: AsyncClient):
    response = await client.get("/bookings")
    for booking_type in ("Hotel", "Flight", "Train", "Other"):
        assert f'<option value="{booking_type}">' in response.text


@pytest.mark.asyncio
async def test_static_script_served(client: AsyncClient):
    response = await client.get("/static/app.js")
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["database"] == "connected"


@pytest.mark.asyncio
async def test_request_id_header(client: AsyncClient):
    response = await client.get("/api/users", headers={"X-Request-ID": "abc123"})
    assert response.headers["X-Request-ID"] == "abc123"
    assert response.headers["X-Response-Time"].endswith("ms")


@pytest.mark.asyncio
async def test_metrics_exposed(client: AsyncClient):
    await client.get("/api/users")
    response = await client.get("/metrics")
    assert response.status_code == 200
    assert "http_requests_total" in response.text


@pytest.mark.asyncio
async def test_unknown_route_uses_error_body(client: AsyncClient):
    response = await client.get("/api/nothing-here")
    assert response.status_code == 404
    assert "error" in response.json()


def test_setup_logging_installs_single_handler():
    """Repeated setup replaces handlers instead of stacking them."""
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        setup_logging()
        setup_logging()
        assert len(root.handlers) == 1
        assert logging.getLogger("uvicorn.access").propagate
    finally:
        root.handlers = saved_handlers
        root.setLevel(saved_level)

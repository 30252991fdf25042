"""Tests for the globe session data flow."""

from __future__ import annotations

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from globe_server.client.session import LOAD_ERROR_NOTICE, GlobeSession

NOW = 1_700_000_000_000


@pytest.fixture
async def app_client():
    from globe_server.main import app

    transport = ASGITransport(app=app)
    headers = {"x-vercel-ip-country": "US"}
    async with AsyncClient(transport=transport, base_url="http://test", headers=headers) as c:
        yield c


def _static_client(response: httpx.Response) -> AsyncClient:
    return AsyncClient(
        transport=httpx.MockTransport(lambda request: response),
        base_url="http://test",
    )


@pytest.mark.asyncio
async def test_starts_with_placeholders(app_client):
    session = GlobeSession(app_client, now_ms=NOW)
    assert len(session.points) == 4
    assert all(p.placeholder for p in session.points)
    assert session.error is None


@pytest.mark.asyncio
async def test_load_merges_entries(app_client):
    session = GlobeSession(app_client, now_ms=NOW)
    await session.load()

    assert session.error is None
    assert len(session.points) == 5
    real = [p for p in session.points if not p.placeholder]
    assert (real[0].lat, real[0].lng) == (40.0, -97.5)
    assert len(session.animator.markers) == 5


@pytest.mark.asyncio
async def test_load_failure_keeps_placeholders():
    async with _static_client(httpx.Response(500, json={"detail": "boom"})) as client:
        session = GlobeSession(client, now_ms=NOW)
        await session.load()

    assert session.error == LOAD_ERROR_NOTICE
    assert len(session.points) == 4


@pytest.mark.asyncio
async def test_transport_failure_keeps_placeholders():
    def fail(request):
        raise httpx.ConnectError("offline", request=request)

    async with AsyncClient(transport=httpx.MockTransport(fail), base_url="http://test") as client:
        session = GlobeSession(client, now_ms=NOW)
        await session.load()

    assert session.error == LOAD_ERROR_NOTICE
    assert len(session.points) == 4


@pytest.mark.asyncio
async def test_cancelled_session_discards_response(app_client):
    session = GlobeSession(app_client, now_ms=NOW)
    session.close()
    await session.load()

    assert session.cancelled is True
    assert len(session.points) == 4
    assert session.error is None



@pytest.mark.asyncio
async def test_close_while_request_in_flight_discards_response():
    holder = {}

    def answer_after_close(request):
        holder["session"].close()
        return httpx.Response(200, json={"entries": [{"id": "late", "lat": 10, "lng": 20, "ts": NOW}]})

    async with AsyncClient(transport=httpx.MockTransport(answer_after_close), base_url="http://test") as client:
        session = holder["session"] = GlobeSession(client, now_ms=NOW)
        await session.load()

    assert session.cancelled is True
    assert len(session.points) == 4
    assert all(p.placeholder for p in session.points)
    assert session.error is None


@pytest.mark.asyncio
async def test_close_while_request_in_flight_suppresses_notice():
    holder = {}

    def fail_after_close(request):
        holder["session"].close()
        raise httpx.ConnectError("offline", request=request)

    async with AsyncClient(transport=httpx.MockTransport(fail_after_close), base_url="http://test") as client:
        session = holder["session"] = GlobeSession(client, now_ms=NOW)
        await session.load()

    assert session.error is None
    assert len(session.points) == 4


@pytest.mark.asyncio
async def test_served_placeholder_flag_not_trusted():
    entry = {"id": "real", "lat": 10, "lng": 20, "ts": NOW, "isPlaceholder": True}
    async with _static_client(httpx.Response(200, json={"entries": [entry]})) as client:
        session = GlobeSession(client, now_ms=NOW)
        await session.load()

    assert len(session.points) == 5
    assert [p.id for p in session.points if not p.placeholder] == ["real"]


@pytest.mark.asyncio
async def test_unexpected_payload_ignored():
    async with _static_client(httpx.Response(200, json={"entries": "nope"})) as client:
        session = GlobeSession(client, now_ms=NOW)
        await session.load()

    assert session.error is None
    assert len(session.points) == 4


@pytest.mark.asyncio
async def test_rotation_survives_reload(app_client):
    session = GlobeSession(app_client, now_ms=NOW)
    before = session.frame(0.5, 0.5).rotation_y
    await session.load()
    after = session.frame(0.6, 0.1).rotation_y
    assert after > before

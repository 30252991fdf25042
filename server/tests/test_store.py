"""Tests for the KV-backed rolling visitor list."""

from __future__ import annotations

import json

import httpx
import pytest

from conftest import KV_TOKEN, KV_URL
from globe_server.config import StoreConfig
from globe_server.core.models import VisitorPoint
from globe_server.core.stats import VisitorStats
from globe_server.storage.kv_store import KVRestVisitorStore


def _point(n: int) -> VisitorPoint:
    return VisitorPoint(id=f"visit-{n}", lat=2.5 * (n % 30), lng=-5.0, timestamp=1_700_000_000_000 + n)


def _store(client, **overrides) -> KVRestVisitorStore:
    config = StoreConfig(url=KV_URL, token=KV_TOKEN, **overrides)
    return KVRestVisitorStore(config, client=client, stats=VisitorStats())


@pytest.mark.asyncio
async def test_append_then_read(kv_client, fake_kv):
    store = _store(kv_client)
    assert await store.append(_point(1)) is True
    assert await store.append(_point(2)) is True

    points = await store.read_all()
    assert [p.id for p in points] == ["visit-2", "visit-1"]
    assert points[0] == _point(2)


@pytest.mark.asyncio
async def test_wire_format(kv_client, fake_kv):
    store = _store(kv_client)
    await store.append(_point(7))

    push, trim = fake_kv.commands
    assert push[:2] == ["LPUSH", "visitors-globe"]
    assert json.loads(push[2]) == {"id": "visit-7", "lat": 17.5, "lng": -5.0, "ts": 1_700_000_000_007}
    assert trim == ["LTRIM", "visitors-globe", "0", "199"]


@pytest.mark.asyncio
async def test_list_capped_at_200_newest_first(kv_client, fake_kv):
    store = _store(kv_client)
    for n in range(250):
        await store.append(_point(n))

    assert len(fake_kv.lists["visitors-globe"]) == 200
    points = await store.read_all()
    assert len(points) == 200
    assert [p.id for p in points] == [f"visit-{n}" for n in range(249, 49, -1)]


@pytest.mark.asyncio
async def test_custom_capacity_and_key(kv_client, fake_kv):
    store = _store(kv_client, list_key="other", max_entries=3)
    for n in range(5):
        await store.append(_point(n))
    assert [p.id for p in await store.read_all()] == ["visit-4", "visit-3", "visit-2"]
    assert "visitors-globe" not in fake_kv.lists


@pytest.mark.asyncio
async def test_unconfigured_is_silent_noop(kv_client, fake_kv):
    store = KVRestVisitorStore(StoreConfig(url=KV_URL, token=""), client=kv_client)
    assert store.configured is False
    assert await store.append(_point(1)) is False
    assert await store.read_all() == []
    assert fake_kv.commands == []


@pytest.mark.asyncio
async def test_unreachable_store_degrades(kv_client, fake_kv):
    stats = VisitorStats()
    store = KVRestVisitorStore(StoreConfig(url=KV_URL, token=KV_TOKEN), client=kv_client, stats=stats)
    fake_kv.unreachable = True

    assert await store.append(_point(1)) is False
    assert await store.read_all() == []
    assert stats.snapshot()["store_errors"] == 2


@pytest.mark.asyncio
async def test_auth_error_degrades(kv_client, fake_kv):
    store = KVRestVisitorStore(StoreConfig(url=KV_URL, token="wrong"), client=kv_client)
    assert await store.append(_point(1)) is False
    assert await store.read_all() == []


@pytest.mark.asyncio
async def test_non_json_response_degrades():
    transport = httpx.MockTransport(lambda request: httpx.Response(502, text="Bad Gateway"))
    async with httpx.AsyncClient(transport=transport) as client:
        store = _store(client)
        assert await store.append(_point(1)) is False
        assert await store.read_all() == []


@pytest.mark.asyncio
async def test_malformed_entries_skipped(kv_client, fake_kv):
    stats = VisitorStats()
    store = KVRestVisitorStore(StoreConfig(url=KV_URL, token=KV_TOKEN), client=kv_client, stats=stats)
    await store.append(_point(1))
    fake_kv.lists["visitors-globe"][:0] = [
        "{not json",
        json.dumps({"id": "x"}),
        "42",
        json.dumps({"id": "nan", "lat": "NaN", "lng": 0, "ts": 1}),
        '{"id": "inf", "lat": 10, "lng": Infinity, "ts": 1}',
        '{"id": "huge-ts", "lat": 10, "lng": 20, "ts": 1e999}',
    ]

    points = await store.read_all()
    assert [p.id for p in points] == ["visit-1"]
    assert stats.snapshot()["malformed_entries"] == 6


@pytest.mark.asyncio
async def test_stored_placeholder_flag_ignored(kv_client, fake_kv):
    fake_kv.lists["visitors-globe"] = [
        json.dumps({"id": "sneaky", "lat": 0, "lng": 0, "ts": 1, "isPlaceholder": True}),
    ]
    store = _store(kv_client)

    points = await store.read_all()
    assert [p.id for p in points] == ["sneaky"]
    assert points[0].placeholder is False
    assert "isPlaceholder" not in points[0].to_dict()

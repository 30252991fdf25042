"""Shared test fixtures."""

from __future__ import annotations

import json

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

import globe_server.main as main_module
from globe_server.config import AppConfig
from globe_server.core.stats import VisitorStats

KV_URL = "https://kv.test"
KV_TOKEN = "test-token"


class FakeKV:
    """In-memory stand-in for the KV REST API (LPUSH / LTRIM / LRANGE only)."""

    def __init__(self) -> None:
        self.lists: dict[str, list[str]] = {}
        self.commands: list[list[str]] = []
        self.unreachable = False

    def handler(self, request: httpx.Request) -> httpx.Response:
        if self.unreachable:
            raise httpx.ConnectError("store unreachable", request=request)
        if request.headers.get("authorization") != f"Bearer {KV_TOKEN}":
            return httpx.Response(401, json={"error": "WRONGPASS invalid token"})

        command = json.loads(request.content)
        self.commands.append(command)
        name, key, *args = command
        items = self.lists.setdefault(key, [])

        if name == "LPUSH":
            for value in args:
                items.insert(0, value)
            return httpx.Response(200, json={"result": len(items)})
        if name == "LTRIM":
            start, stop = int(args[0]), int(args[1])
            self.lists[key] = items[start:stop + 1]
            return httpx.Response(200, json={"result": "OK"})
        if name == "LRANGE":
            start, stop = int(args[0]), int(args[1])
            return httpx.Response(200, json={"result": items[start:stop + 1]})
        return httpx.Response(400, json={"error": f"ERR unknown command '{name}'"})


@pytest.fixture
def fake_kv():
    return FakeKV()


@pytest.fixture
def kv_client(fake_kv):
    return httpx.AsyncClient(transport=httpx.MockTransport(fake_kv.handler))


@pytest.fixture(autouse=True)
def _init_server(kv_client):
    """Initialize server singletons for every test, backed by the fake store."""
    config = AppConfig()
    config.store.url = KV_URL
    config.store.token = KV_TOKEN
    config.logging.level = "warning"

    stats = VisitorStats()
    recorder, _ = main_module.build_recorder(config, stats, kv_client)

    # Patch module-level singletons
    main_module._config = config
    main_module._stats = stats
    main_module._recorder = recorder

    yield config

    # Cleanup
    main_module._config = None
    main_module._stats = None
    main_module._recorder = None


@pytest.fixture
def unconfigured_store(_init_server):
    """Drop the store credentials; the store reads the same config object."""
    _init_server.store.url = ""
    _init_server.store.token = ""
    return _init_server


@pytest.fixture
def unreachable_store(fake_kv):
    fake_kv.unreachable = True
    return fake_kv


@pytest.fixture
async def client():
    from globe_server.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

from __future__ import annotations

import fnmatch

import orjson as json
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from redis.exceptions import ConnectionError as RedisConnectionError


class FakeCache:
    """In-memory stand-in for app.redis_cache.Cache."""

    def __init__(self):
        self.store = {}
        self.failing = False
        self.set_calls = 0

    def _check(self):
        if self.failing:
            raise RedisConnectionError("Redis is unavailable")

    async def get(self, key):
        self._check()
        raw = self.store.get(key)
        return json.loads(raw) if raw is not None else None

    async def set(self, key, value, ttl=None):
        self._check()
        self.set_calls += 1
        self.store[key] = json.dumps(value)

    async def invalidate(self, pattern):
        self._check()
        keys = [key for key in self.store if fnmatch.fnmatchcase(key, pattern)]
        for key in keys:
            del self.store[key]
        return len(keys)

    async def ping(self):
        self._check()
        return True

    async def close(self):
        pass


@pytest.fixture(scope="session")
def app_instance():
    from app.main import app  # type: ignore

    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def fake_cache(app_instance):
    from app.dependencies import get_cache

    cache = FakeCache()
    app_instance.dependency_overrides[get_cache] = lambda: cache
    yield cache
    app_instance.dependency_overrides.pop(get_cache, None)


@pytest_asyncio.fixture
async def client(app_instance, fake_cache):
    """HTTP client bound to the ASGI app, backed by an in-memory database."""
    from tortoise import Tortoise, connections

    await Tortoise.init(db_url="sqlite://:memory:", modules={"app": ["app.models"]})
    await Tortoise.generate_schemas()
    transport = ASGITransport(app=app_instance)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    await connections.close_all()


AGENT_ID = "7f5d7c1e-2b7a-4a51-9a55-0d3b1f7c2a10"


def build_report_payload(latitude=None, longitude=None, agent_id=AGENT_ID, status="COMPLIANT"):
    payload = {
        "agent_id": agent_id,
        "status": status,
        "scanned_data": {"productName": "Amoxicillin 500mg", "lotNumber": "A-1234"},
        "front_image_url": "https://storage.example.com/reports/front.jpg",
        "back_image_url": "https://storage.example.com/reports/back.jpg",
    }
    if status == "NON_COMPLIANT":
        payload["non_compliance_reason"] = "EXPIRED_PRODUCT"
    if latitude is not None:
        payload["location"] = {
            "latitude": latitude,
            "longitude": longitude,
            "address": "Manila, Philippines",
        }
    return payload


@pytest.fixture
def report_payload():
    return build_report_payload


@pytest.fixture
def submit(client):
    """Submits a report through the API and returns the stored report."""

    async def _submit(*args, **kwargs):
        resp = await client.post("/compliance/report", json=build_report_payload(*args, **kwargs))
        assert resp.status_code == 201, resp.text
        return resp.json()["data"]

    return _submit

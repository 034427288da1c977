"""Shared fixtures: a local HTTP origin serving playlists and segments."""

import asyncio

import pytest
from aiohttp import web


class FakeOrigin:
    """Serves registered paths and can fail a path a given number of times."""

    def __init__(self):
        self.routes: dict[str, bytes] = {}
        self.failures: dict[str, int] = {}
        self.requests: list[str] = []
        self.base_url = ""

    def add(self, path: str, body: str | bytes, fail_times: int = 0) -> str:
        self.routes[path] = body.encode() if isinstance(body, str) else body
        if fail_times:
            self.failures[path] = fail_times
        return self.url(path)

    def url(self, path: str) -> str:
        return self.base_url + path.lstrip("/")

    def hits(self, path: str) -> int:
        return self.requests.count(path)

    async def handle(self, request: web.Request) -> web.Response:
        path = request.path
        self.requests.append(path)
        if path not in self.routes:
            raise web.HTTPNotFound()
        if self.failures.get(path, 0) > 0:
            self.failures[path] -= 1
            raise web.HTTPInternalServerError()
        return web.Response(body=self.routes[path])


@pytest.fixture
async def origin(aiohttp_server):
    fake = FakeOrigin()
    app = web.Application()
    app.router.add_route("GET", "/{tail:.*}", fake.handle)
    server = await aiohttp_server(app)
    fake.base_url = str(server.make_url("/"))
    return fake


@pytest.fixture
def recorded_sleeps(monkeypatch):
    """Replaces asyncio.sleep with a recorder that returns immediately."""
    delays: list[float] = []

    async def fake_sleep(delay, result=None):
        delays.append(delay)
        return result

    monkeypatch.setattr(asyncio, "sleep", fake_sleep)
    return delays

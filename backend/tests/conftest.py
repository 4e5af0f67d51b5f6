"""
Shared fixtures: settings pointed at a temp directory, and a fake upstream
that stands in for Google and Anthropic through an httpx mock transport.
"""
import json

import httpx
import pytest
from fastapi.testclient import TestClient

from gozleme_finder.core.config import Settings
from gozleme_finder.main import create_app


class FakeUpstream:
    """Records outbound requests and replies with canned responses per URL path."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self._routes: dict[str, list] = {}

    def add(self, path: str, *replies):
        """Queue replies (httpx.Response or an exception to raise) for a path; the last one repeats."""
        self._routes[path] = list(replies)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        replies = self._routes.get(request.url.path)
        if not replies:
            return httpx.Response(404, json={"error": {"message": f"no stub for {request.url.path}"}})
        reply = replies.pop(0) if len(replies) > 1 else replies[0]
        if isinstance(reply, Exception):
            raise reply
        return reply

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    def last_json(self) -> dict:
        return json.loads(self.requests[-1].content)


def make_settings(tmp_path, **overrides) -> Settings:
    values = dict(
        GOOGLE_PLACES_KEY="places-key",
        GOOGLE_MAPS_KEY="maps-key",
        ANTHROPIC_KEY="anthropic-key",
        DATA_DIR=tmp_path,
        STATIC_DIR=tmp_path / "static",
        CACHE_BUILDER_PAUSE=0,
        LOG_DIRECTORY="",
    )
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings(tmp_path):
    return make_settings(tmp_path)


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def client(settings, upstream):
    return TestClient(create_app(settings, transport=upstream.transport))


@pytest.fixture
def write_json(tmp_path):
    def _write(filename, data):
        path = tmp_path / filename
        path.write_text(json.dumps(data), encoding="utf-8")
        return path
    return _write

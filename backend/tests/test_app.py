from types import SimpleNamespace

import httpx

from conftest import make_settings
from fastapi.testclient import TestClient

from gozleme_finder.main import create_app

MESSAGES_PATH = "/v1/messages"


def _client(tmp_path, upstream=None, **overrides):
    transport = upstream.transport if upstream else None
    return TestClient(create_app(make_settings(tmp_path, **overrides), transport=transport))


# ── Health / keys ────────────────────────────────────────────────────────


def test_health_reports_configured_keys(client):
    assert client.get("/health").json() == {
        "status": "ok",
        "googlePlacesKeySet": True,
        "googleMapsKeySet": True,
        "anthropicKeySet": True,
    }


def test_health_with_no_keys(tmp_path):
    body = _client(tmp_path, GOOGLE_PLACES_KEY="", GOOGLE_MAPS_KEY="", ANTHROPIC_KEY="").get("/health").json()

    assert body["status"] == "ok"
    assert not body["googlePlacesKeySet"]
    assert not body["googleMapsKeySet"]
    assert not body["anthropicKeySet"]


def test_maps_key_exposed(client):
    assert client.get("/api/maps-key").json() == {"key": "maps-key"}


def test_maps_key_unconfigured_is_404(tmp_path):
    resp = _client(tmp_path, GOOGLE_PLACES_KEY="", GOOGLE_MAPS_KEY="").get("/api/maps-key")

    assert resp.status_code == 404
    assert resp.json() == {"error": "GOOGLE_MAPS_KEY not configured in .env"}


# ── Claude passthrough ───────────────────────────────────────────────────


def test_claude_forwards_payload_with_server_key(client, upstream):
    reply = {"content": [{"type": "text", "text": "Merhaba"}], "role": "assistant"}
    upstream.add(MESSAGES_PATH, httpx.Response(200, json=reply))
    payload = {"model": "claude-sonnet-4-20250514", "max_tokens": 100, "messages": [{"role": "user", "content": "hi"}]}

    resp = client.post("/api/claude", json=payload)

    assert resp.status_code == 200
    assert resp.json() == reply
    assert upstream.last_json() == payload
    assert upstream.requests[0].headers["x-api-key"] == "anthropic-key"


def test_claude_passes_upstream_errors_through(client, upstream):
    error = {"type": "error", "error": {"type": "invalid_request_error", "message": "max_tokens: required"}}
    upstream.add(MESSAGES_PATH, httpx.Response(400, json=error))

    resp = client.post("/api/claude", json={"messages": []})

    assert resp.status_code == 400
    assert resp.json() == error


def test_claude_transport_failure_is_502(client, upstream):
    upstream.add(MESSAGES_PATH, httpx.ConnectError("no route to host"))

    resp = client.post("/api/claude", json={"messages": []})

    assert resp.status_code == 502
    assert resp.json() == {"error": "Claude proxy failed: no route to host"}


def test_claude_without_key_is_400(tmp_path, upstream):
    resp = _client(tmp_path, upstream, ANTHROPIC_KEY="").post("/api/claude", json={"messages": []})

    assert resp.status_code == 400
    assert resp.json() == {"error": "ANTHROPIC_KEY not set in .env"}
    assert upstream.requests == []


# ── Frontend / middleware ────────────────────────────────────────────────


def test_pages_served_from_static_dir(tmp_path):
    static = tmp_path / "static"
    static.mkdir()
    (static / "index.html").write_text("<h1>Gozleme Finder</h1>", encoding="utf-8")
    (static / "admin.html").write_text("<h1>Admin</h1>", encoding="utf-8")
    (static / "app.js").write_text("console.log('hi')", encoding="utf-8")
    client = _client(tmp_path)

    assert "Gozleme Finder" in client.get("/").text
    assert "Admin" in client.get("/admin").text
    assert client.get("/app.js").status_code == 200
    # API routes still win over the static mount
    assert client.get("/health").json()["status"] == "ok"


def test_missing_page_is_404(client):
    resp = client.get("/")

    assert resp.status_code == 404
    assert resp.json() == {"error": "index.html not found"}


def test_production_redirects_plain_http(tmp_path):
    client = _client(tmp_path, ENVIRONMENT="production")

    resp = client.get("/health", follow_redirects=False)

    assert resp.status_code == 301
    assert resp.headers["location"].startswith("https://")
    assert resp.headers["location"].endswith("/health")


def test_production_allows_forwarded_https(tmp_path):
    client = _client(tmp_path, ENVIRONMENT="production")

    resp = client.get("/health", headers={"x-forwarded-proto": "https"})

    assert resp.status_code == 200


def test_malformed_json_body_is_400(client):
    resp = client.post("/api/geocode", content="{oops", headers={"Content-Type": "application/json"})

    assert resp.status_code == 400
    assert "error" in resp.json()


def test_serve_runs_uvicorn_on_configured_port(monkeypatch):
    import uvicorn
    from gozleme_finder import main

    calls = []
    monkeypatch.setattr(uvicorn, "run", lambda target, **kwargs: calls.append((target, kwargs)))
    monkeypatch.setattr(main, "get_settings", lambda: SimpleNamespace(PORT=4321))

    main.serve()

    assert calls == [("gozleme_finder.main:app", {"host": "0.0.0.0", "port": 4321})]
# tests/test_server.py
import pytest
from fastapi.testclient import TestClient

from conftest import LONG_TEXT, Recorder, timeout_error
from textbrief.config import TextbriefConfig
from textbrief.server.main import create_app
from textbrief.utils import round_half_up


def client_for(cfg, recorder=None):
    transport = recorder.transport() if recorder else None
    return TestClient(create_app(cfg, transport=transport))


def test_health_reports_mode(demo_cfg, ai_cfg):
    body = client_for(demo_cfg).get("/api/health").json()
    assert body["status"] == "OK"
    assert body["mode"] == "demo"
    assert body["timestamp"].endswith("Z")
    assert client_for(ai_cfg).get("/api/health").json()["mode"] == "ai"


@pytest.mark.parametrize("payload,error", [
    ({}, "Text is required"),
    ({"text": ""}, "Text is required"),
    ({"text": None}, "Text is required"),
    ({"text": 123}, "Invalid input"),
    ({"text": ["a", "b"]}, "Invalid input"),
    ({"text": "too short"}, "Text too short"),
    ({"text": "a" * 100_001}, "Text too long"),
])
def test_rejects_bad_text(demo_cfg, payload, error):
    r = client_for(demo_cfg).post("/api/summarize", json=payload)
    assert r.status_code == 400
    assert r.json()["error"] == error
    assert r.json()["message"]


def test_rejects_malformed_json(demo_cfg):
    r = client_for(demo_cfg).post(
        "/api/summarize", content=b"{not json", headers={"Content-Type": "application/json"}
    )
    assert r.status_code == 400
    assert r.json()["error"] == "Invalid JSON"


def test_length_limits_come_from_config():
    cfg = TextbriefConfig(min_text_length=10, max_text_length=20)
    client = client_for(cfg)
    assert client.post("/api/summarize", json={"text": "x" * 21}).json()["error"] == "Text too long"
    assert client.post("/api/summarize", json={"text": "x" * 15}).status_code == 200


def test_summarize_demo(demo_cfg):
    r = client_for(demo_cfg).post("/api/summarize", json={"text": LONG_TEXT})
    assert r.status_code == 200
    body = r.json()
    assert body["mode"] == "demo"
    assert body["fallback"] is False
    assert body["originalLength"] == len(LONG_TEXT)
    assert body["summaryLength"] == len(body["summary"])
    assert body["compressionRatio"] == round_half_up(
        (body["originalLength"] - body["summaryLength"]) / body["originalLength"] * 100
    )


def test_summarize_ai(ai_cfg):
    rec = Recorder(body=[{"summary_text": "The council debated the transit plan."}])
    body = client_for(ai_cfg, rec).post("/api/summarize", json={"text": LONG_TEXT}).json()
    assert body["mode"] == "ai"
    assert body["summary"] == "The council debated the transit plan."


def test_model_failure_falls_back(ai_cfg):
    body = client_for(ai_cfg, Recorder(status=503)).post(
        "/api/summarize", json={"text": LONG_TEXT}
    ).json()
    assert body["mode"] == "demo"
    assert body["fallback"] is True


@pytest.mark.parametrize("recorder,status,error", [
    (Recorder(status=401), 401, "API Configuration Error"),
    (Recorder(status=503), 503, "Model Loading"),
    (Recorder(exc=timeout_error), 408, "Request Timeout"),
    (Recorder(status=500), 500, "Internal Server Error"),
    (Recorder(body={"unexpected": True}), 500, "Internal Server Error"),
])
def test_errors_map_to_status_without_fallback(ai_cfg, recorder, status, error):
    ai_cfg.fallback_enabled = False
    r = client_for(ai_cfg, recorder).post("/api/summarize", json={"text": LONG_TEXT})
    assert r.status_code == status
    assert r.json()["error"] == error


def test_unknown_route(demo_cfg):
    r = client_for(demo_cfg).get("/api/nope")
    assert r.status_code == 404
    assert r.json() == {"error": "Not Found", "message": "The requested endpoint does not exist"}


def test_cors_allows_dev_origins(demo_cfg):
    r = client_for(demo_cfg).get("/api/health", headers={"Origin": "http://localhost:5173"})
    assert r.headers["access-control-allow-origin"] == "http://localhost:5173"
    r = client_for(demo_cfg).get("/api/health", headers={"Origin": "http://evil.example"})
    assert "access-control-allow-origin" not in r.headers


@pytest.mark.parametrize("kwargs", [
    {},
    {"json": ["x"]},
    {"json": "plain string"},
])
def test_missing_or_non_object_body_means_no_text(demo_cfg, kwargs):
    r = client_for(demo_cfg).post("/api/summarize", **kwargs)
    assert r.status_code == 400
    assert r.json()["error"] == "Text is required"


def test_bad_model_url_falls_back(ai_cfg):
    ai_cfg.api_url = "https://example.com/\x01model"
    body = client_for(ai_cfg, Recorder(body=[{"summary_text": "unused"}])).post(
        "/api/summarize", json={"text": LONG_TEXT}
    ).json()
    assert body["mode"] == "demo"
    assert body["fallback"] is True

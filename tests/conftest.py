"""
Pytest configuration and fixtures
"""

import json
import os
from urllib.parse import unquote

import httpx
import pytest

# Set test environment variables before importing app modules
os.environ.setdefault("LIVEKIT_URL", "wss://livekit.test")
os.environ.setdefault("LIVEKIT_API_KEY", "test-api-key")
os.environ.setdefault("LIVEKIT_API_SECRET", "test-api-secret")
os.environ.setdefault("CONTROL_API_URL", "http://backend.test")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DEBUG", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from fastapi.testclient import TestClient


class StubControlAPI:
    """In-memory stand-in for the backend Control API"""

    def __init__(self):
        self.requests = []
        self.sip_configs = []
        self.agent_configs = []
        self.failure = None

    def fail_with(self, status_code, body):
        self.failure = (status_code, body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.failure:
            status_code, body = self.failure
            return httpx.Response(status_code, json=body)

        body = json.loads(request.content) if request.content else None
        route = (request.method, request.url.path)

        if route == ("POST", "/calls/outbound"):
            return httpx.Response(200, json={
                "room_name": "outbound-room-1",
                "stt_model": body.get("stt") or "assemblyai/universal-streaming:en",
                "llm_model": body.get("llm") or "openai/gpt-4o-mini",
                "tts_voice": body.get("tts") or "elevenlabs:pNInz6obpgDQGcFmaJgB",
                "value_sources": {"stt": "request" if body.get("stt") else "default"},
                "defaults_used": [] if body.get("stt") else ["stt"],
            })
        if route == ("POST", "/sessions/web"):
            return httpx.Response(200, json={
                "token": "join-token",
                "room_name": "web-room-1",
                "livekit_url": "wss://livekit.test",
                "metadata": {"llm": body.get("llm")},
            })
        if route == ("GET", "/sip-configs"):
            return httpx.Response(200, json=self.sip_configs)
        if route == ("POST", "/sip-configs"):
            self.sip_configs.append(body)
            return httpx.Response(200, json={"success": True, "config": body})
        if route == ("GET", "/configs"):
            return httpx.Response(200, json={"items": self.agent_configs})
        if route == ("POST", "/configs"):
            record = dict(body, _id=f"cfg-{len(self.agent_configs) + 1}")
            self.agent_configs.append(record)
            return httpx.Response(200, json=record)
        if request.method == "GET" and request.url.path.startswith("/configs/phone/"):
            phone = unquote(request.url.path.rsplit("/", 1)[1])
            for record in self.agent_configs:
                if record.get("phone_number") == phone:
                    return httpx.Response(200, json=record)
            return httpx.Response(404, json={"detail": f"No config for {phone}"})

        return httpx.Response(404, json={"detail": "Not found"})


@pytest.fixture
def activity_store(tmp_path):
    """Fixture for an activity log backed by a temporary file"""
    from testbench.services.activity_log import ActivityLogStore
    return ActivityLogStore(file_path=str(tmp_path / "activity.json"), max_entries=20)


@pytest.fixture
def test_client(activity_store):
    """Fixture for test client"""
    from testbench.main import app
    from testbench.api.dependencies import get_activity_store

    app.dependency_overrides[get_activity_store] = lambda: activity_store
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def control_api_stub(test_client):
    """Route Control API traffic to an in-memory stub backend"""
    from testbench.main import app
    from testbench.api.dependencies import get_control_api
    from testbench.services.control_api import ControlAPIService

    stub = StubControlAPI()
    app.dependency_overrides[get_control_api] = lambda: ControlAPIService(
        transport=httpx.MockTransport(stub.handler)
    )
    return stub


@pytest.fixture
def sample_call_request():
    """Sample make-call request data"""
    return {
        "phoneNumber": "+14155551234",
        "stt": "deepgram/nova-2",
        "llm": "openai/gpt-4o-mini",
        "tts": "elevenlabs:pNInz6obpgDQGcFmaJgB",
        "agent_instructions": "You are a helpful voice AI assistant."
    }

"""
Tests for API endpoints
"""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from testbench.core.config import settings
from testbench.core.exceptions import LiveKitServiceError
from testbench.models.rooms import RoomInfo
from testbench.services.activity_log import OUTBOUND_ACTIVITY, WEB_SESSION_ACTIVITY, LIVE_ACTIVITY


def _override(dependency, instance):
    from testbench.main import app
    app.dependency_overrides[dependency] = lambda: instance


class TestHealthEndpoints:
    """Tests for health check endpoints"""

    def test_health_check(self, test_client):
        response = test_client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "timestamp" in data

    def test_root_endpoint(self, test_client):
        response = test_client.get("/")
        assert response.status_code == 200
        assert response.json()["service"] == "LiveKit Test Bench"

    def test_ready_reports_collaborators(self, test_client, monkeypatch):
        monkeypatch.setattr(settings, "control_api_url", "")

        data = test_client.get("/ready").json()

        assert data["status"] == "degraded"
        assert data["checks"]["control_api"] is False
        assert data["checks"]["livekit"] is True


class TestCloudWatchLogsEndpoint:
    """Tests for /api/cloudwatch-logs"""

    @pytest.fixture(autouse=True)
    def cloudwatch_env(self, monkeypatch):
        monkeypatch.setattr(settings, "enable_cloudwatch_logs", True)
        monkeypatch.setattr(settings, "cloudwatch_logs_token", None)
        monkeypatch.setattr(settings, "cloudwatch_region", "us-east-1")
        monkeypatch.setattr(settings, "aws_region", None)
        monkeypatch.setattr(settings, "aws_default_region", None)
        monkeypatch.setattr(settings, "cloudwatch_log_group", "/ecs/voice")
        monkeypatch.setattr(settings, "cloudwatch_stream_prefix", None)

    @pytest.fixture
    def aws_client(self, test_client):
        from testbench.api.dependencies import get_cloudwatch_service
        from testbench.main import app
        from testbench.services.logs import CloudWatchLogService

        client = MagicMock()
        client.filter_log_events.return_value = {
            "events": [
                {"timestamp": 1700000002000, "message": "agent joined"},
                {"timestamp": 1700000001000, "message": "room created\n"},
            ]
        }
        # Built per request so settings patched in a test are seen
        app.dependency_overrides[get_cloudwatch_service] = lambda: CloudWatchLogService(
            client_factory=lambda region: client
        )
        return client

    def test_disabled_returns_404(self, test_client, monkeypatch):
        monkeypatch.setattr(settings, "enable_cloudwatch_logs", False)

        response = test_client.get("/api/cloudwatch-logs")

        assert response.status_code == 404
        assert response.json()["error"] == "Not available"

    def test_token_required(self, test_client, aws_client, monkeypatch):
        monkeypatch.setattr(settings, "cloudwatch_logs_token", "s3cret")

        missing = test_client.get("/api/cloudwatch-logs")
        wrong = test_client.get("/api/cloudwatch-logs", headers={"Authorization": "Bearer nope"})
        right = test_client.get("/api/cloudwatch-logs", headers={"Authorization": "Bearer s3cret"})

        assert missing.status_code == 401
        assert missing.json()["error"] == "Unauthorized"
        assert missing.headers["WWW-Authenticate"] == "Bearer"
        assert wrong.status_code == 401
        assert right.status_code == 200

    def test_returns_sorted_lines(self, test_client, aws_client):
        response = test_client.get("/api/cloudwatch-logs", params={"service": "agent", "tail": "50"})

        assert response.status_code == 200
        data = response.json()
        assert data["service"] == "agent"
        assert data["tail"] == 50
        assert data["logs"] == (
            "2023-11-14T22:13:21.000Z room created\n"
            "2023-11-14T22:13:22.000Z agent joined"
        )
        assert aws_client.filter_log_events.call_args.kwargs["logStreamNamePrefix"] == "livekit/agent"

    def test_invalid_service(self, test_client, aws_client):
        response = test_client.get("/api/cloudwatch-logs", params={"service": "mysql"})

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "Invalid service"
        assert "caddy" in data["details"]["allowed"]

    def test_missing_configuration_lists_settings(self, test_client, monkeypatch):
        monkeypatch.setattr(settings, "cloudwatch_region", None)
        monkeypatch.setattr(settings, "cloudwatch_log_group", None)

        response = test_client.get("/api/cloudwatch-logs")

        assert response.status_code == 500
        assert response.json()["details"]["missing"] == ["region", "logGroup"]

    def test_request_overrides_fill_configuration(self, test_client, aws_client, monkeypatch):
        monkeypatch.setattr(settings, "cloudwatch_log_group", None)

        response = test_client.get(
            "/api/cloudwatch-logs",
            params={"logGroup": "/ecs/other", "streamPrefix": "prod"}
        )

        assert response.status_code == 200
        kwargs = aws_client.filter_log_events.call_args.kwargs
        assert kwargs["logGroupName"] == "/ecs/other"
        assert kwargs["logStreamNamePrefix"] == "prod/livekit"

    def test_debug_snapshot(self, test_client, aws_client, monkeypatch):
        monkeypatch.setattr(settings, "cloudwatch_log_group", None)

        response = test_client.get("/api/cloudwatch-logs", params={"debug": "true", "service": "sip"})

        assert response.status_code == 200
        data = response.json()
        assert data["debug"] is True
        assert data["missing"] == ["logGroup"]
        assert data["resolved"]["region"] == {"value": "us-east-1", "source": "env"}
        assert data["request"]["service"] == "sip"
        aws_client.filter_log_events.assert_not_called()


class TestLocalLogsEndpoint:
    """Tests for /api/local-logs"""

    @pytest.fixture
    def docker(self, test_client, monkeypatch):
        from testbench.api.dependencies import get_docker_service

        monkeypatch.setattr(settings, "enable_local_logs", True)
        monkeypatch.setattr(settings, "environment", "development")
        service = MagicMock()
        service.fetch_logs = AsyncMock(return_value="agent | INFO ready\nagent | ERROR boom\nagent | error again")
        _override(get_docker_service, service)
        return service

    def test_disabled_in_production(self, test_client, docker, monkeypatch):
        monkeypatch.setattr(settings, "environment", "production")

        assert test_client.get("/api/local-logs").status_code == 404

    def test_invalid_service(self, test_client, docker):
        response = test_client.get("/api/local-logs", params={"service": "caddy"})

        assert response.status_code == 400
        docker.fetch_logs.assert_not_called()

    def test_since_converted_to_seconds(self, test_client, docker):
        response = test_client.get(
            "/api/local-logs",
            params={"service": "agent", "tail": "9999", "since": "1700000000000"}
        )

        assert response.status_code == 200
        assert response.json()["tail"] == 500
        docker.fetch_logs.assert_awaited_once_with("agent", 500, 1700000000)

    def test_filter_case_sensitivity(self, test_client, docker):
        insensitive = test_client.get("/api/local-logs", params={"filter": "error"}).json()
        sensitive = test_client.get(
            "/api/local-logs", params={"filter": "error", "caseSensitive": "true"}
        ).json()

        assert insensitive["logs"] == "agent | ERROR boom\nagent | error again"
        assert sensitive["logs"] == "agent | error again"


class TestRoomEndpoints:
    """Tests for /api/rooms"""

    @pytest.fixture
    def rooms(self, test_client):
        from testbench.api.dependencies import get_room_service

        service = MagicMock()
        service.list_rooms = AsyncMock(return_value=[
            RoomInfo(name="call-1", sid="RM_1", num_participants=2),
            RoomInfo(name="call-2", sid="RM_2", participants_available=False),
        ])
        service.delete_room = AsyncMock()
        _override(get_room_service, service)
        return service

    def test_list_rooms(self, test_client, rooms):
        response = test_client.get("/api/rooms")

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 2
        assert data["rooms"][0]["numParticipants"] == 2
        assert data["rooms"][1]["participantsAvailable"] is False

    def test_delete_requires_room(self, test_client, rooms):
        response = test_client.delete("/api/rooms")

        assert response.status_code == 400
        rooms.delete_room.assert_not_called()

    def test_delete_room_records_activity(self, test_client, rooms, activity_store):
        response = test_client.delete("/api/rooms", params={"room": "call-1"})

        assert response.status_code == 200
        assert response.json()["success"] is True
        rooms.delete_room.assert_awaited_once_with("call-1")

        entry = activity_store.list(LIVE_ACTIVITY)[0]
        assert entry.action == "room_deleted"
        assert entry.room_name == "call-1"

    def test_livekit_failure(self, test_client, rooms):
        rooms.list_rooms.side_effect = LiveKitServiceError("connection refused", operation="list rooms")

        response = test_client.get("/api/rooms")

        assert response.status_code == 500
        assert response.json()["error"] == "Failed to list rooms: connection refused"


class TestCallEndpoints:
    """Tests for make-call and start-web-session"""

    def test_make_call_requires_phone(self, test_client, control_api_stub):
        response = test_client.post("/api/make-call", json={"stt": "deepgram/nova-2"})

        assert response.status_code == 400
        assert response.json()["error"] == "Phone number is required"
        assert control_api_stub.requests == []

    def test_make_call_rejects_non_e164(self, test_client, control_api_stub):
        response = test_client.post("/api/make-call", json={"phoneNumber": "4155551234"})

        assert response.status_code == 400
        assert "E.164" in response.json()["details"]["hint"]

    def test_make_call_rejects_bad_caller_number(self, test_client, control_api_stub):
        response = test_client.post(
            "/api/make-call",
            json={"phoneNumber": "+14155551234", "callerNumber": "12"}
        )

        assert response.status_code == 400
        assert response.json()["details"]["field"] == "callerNumber"

    def test_make_call_forwards_snake_case(self, test_client, control_api_stub, sample_call_request, activity_store):
        sample_call_request["phoneNumber"] = "+1 (415) 555-1234"

        response = test_client.post("/api/make-call", json=sample_call_request)

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["roomName"] == "outbound-room-1"
        assert data["configuration"] == {
            "stt": "deepgram/nova-2",
            "llm": "openai/gpt-4o-mini",
            "tts": "elevenlabs:pNInz6obpgDQGcFmaJgB",
        }

        forwarded = control_api_stub.requests[0]
        assert str(forwarded.url) == "http://backend.test/calls/outbound"
        body = json.loads(forwarded.content)
        assert body["phone_number"] == "+14155551234"
        assert body["agent_instructions"] == sample_call_request["agent_instructions"]

        entry = activity_store.list(OUTBOUND_ACTIVITY)[0]
        assert entry.action == "call_initiated"
        assert entry.status == "success"
        assert entry.room_name == "outbound-room-1"

    def test_make_call_upstream_error_keeps_status(self, test_client, control_api_stub, sample_call_request, activity_store):
        control_api_stub.fail_with(422, {"detail": "No outbound trunk configured"})

        response = test_client.post("/api/make-call", json=sample_call_request)

        assert response.status_code == 422
        assert response.json()["error"] == "No outbound trunk configured"
        assert activity_store.list(OUTBOUND_ACTIVITY)[0].status == "error"

    def test_make_call_backend_unreachable(self, test_client, sample_call_request):
        import httpx
        from testbench.api.dependencies import get_control_api
        from testbench.services.control_api import ControlAPIService

        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        _override(get_control_api, ControlAPIService(transport=httpx.MockTransport(refuse)))

        response = test_client.post("/api/make-call", json=sample_call_request)

        assert response.status_code == 502
        data = response.json()
        assert "connection refused" in data["error"]
        assert data["details"]["backendUrl"] == "http://backend.test/calls/outbound"

    def test_make_call_without_backend_url(self, test_client, sample_call_request, monkeypatch):
        monkeypatch.setattr(settings, "control_api_url", "true")

        response = test_client.post("/api/make-call", json=sample_call_request)

        assert response.status_code == 500
        assert response.json()["details"]["missing"] == ["CONTROL_API_URL"]

    def test_proxy_health(self, test_client):
        response = test_client.get("/api/make-call")

        assert response.status_code == 200
        assert response.json() == {
            "status": "ok",
            "service": "livekit-call-trigger",
            "backendUrl": "http://backend.test",
        }
        assert test_client.get("/api/start-web-session").json()["service"] == "livekit-web-session"

    def test_start_web_session(self, test_client, control_api_stub, activity_store):
        response = test_client.post("/api/start-web-session", json={"llm": "openai/gpt-4o"})

        assert response.status_code == 200
        data = response.json()
        assert data["token"] == "join-token"
        assert data["roomName"] == "web-room-1"
        assert data["livekitUrl"] == "wss://livekit.test"

        entry = activity_store.list(WEB_SESSION_ACTIVITY)[0]
        assert entry.action == "session_started"
        assert "token" not in entry.api_response

    def test_start_web_session_with_invalid_body(self, test_client, control_api_stub):
        response = test_client.post(
            "/api/start-web-session",
            content="not json",
            headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 200
        assert json.loads(control_api_stub.requests[0].content) == {
            "stt": None,
            "llm": None,
            "tts": None,
            "agent_instructions": None,
        }


class TestConfigEndpoints:
    """Tests for SIP/agent configs, numbers and stats"""

    def test_agent_config_rejects_invalid_fields(self, test_client, control_api_stub):
        response = test_client.post("/api/agent-configs", json={"name": ["not", "a", "string"]})

        assert response.status_code == 422
        assert control_api_stub.requests == []

    def test_sip_config_forwards_only_sent_fields(self, test_client, control_api_stub):
        test_client.post("/api/sip-configs", json={"phone_number": "+15550001", "notes": "main line"})

        forwarded = json.loads(control_api_stub.requests[0].content)
        assert forwarded == {"phone_number": "+15550001", "notes": "main line"}

    def test_agent_config_round_trip(self, test_client, control_api_stub):
        saved = test_client.post(
            "/api/agent-configs",
            json={"name": "support", "phone_number": "+15550001", "llm": "openai/gpt-4o"}
        )
        listed = test_client.get("/api/agent-configs")

        assert saved.status_code == 200
        data = listed.json()
        assert data["count"] == 1
        assert data["configs"][0]["name"] == "support"
        assert data["configs"][0]["_id"] == "cfg-1"

    def test_agent_config_by_phone(self, test_client, control_api_stub):
        test_client.post("/api/agent-configs", json={"name": "sales", "phone_number": "+15550002"})

        found = test_client.get("/api/agent-configs/phone/+15550002")
        missing = test_client.get("/api/agent-configs/phone/+15559999")

        assert found.status_code == 200
        assert found.json()["name"] == "sales"
        assert missing.status_code == 404
        assert missing.json()["error"] == "No config for +15559999"

    def test_sip_config_round_trip(self, test_client, control_api_stub):
        test_client.post("/api/sip-configs", json={"phone_number": "+15550001", "outbound_trunk": "ST_1"})

        response = test_client.get("/api/sip-configs")

        assert response.json() == [{"phone_number": "+15550001", "outbound_trunk": "ST_1"}]

    def test_numbers_merge(self, test_client, control_api_stub):
        control_api_stub.sip_configs = [{"phone_number": "+15550002"}, {"phone_number": "+15550001"}]
        control_api_stub.agent_configs = [{"phone_number": "+15550001", "name": "support"}]

        data = test_client.get("/api/numbers").json()

        assert data["count"] == 2
        assert data["sipCount"] == 2
        assert data["agentCount"] == 1
        assert data["numbers"][0]["phone_number"] == "+15550001"
        assert data["numbers"][0]["agentConfig"]["name"] == "support"

    def test_stats_with_failing_source(self, test_client, control_api_stub):
        from testbench.api.dependencies import get_room_service

        rooms = MagicMock()
        rooms.list_rooms = AsyncMock(side_effect=LiveKitServiceError("down", operation="list rooms"))
        _override(get_room_service, rooms)
        control_api_stub.sip_configs = [{"phone_number": "+15550001"}]
        control_api_stub.agent_configs = [{"phone_number": "+15550002"}]

        response = test_client.get("/api/stats")

        assert response.status_code == 200
        data = response.json()
        assert data["activeRooms"] == 0
        assert data["registeredNumbers"] == 2
        assert data["agentConfigs"] == 1
        assert data["errors"] == {"livekit": "Failed to list rooms: down"}


class TestActivityEndpoints:
    """Tests for /api/activity"""

    def test_add_list_update_clear(self, test_client):
        created = test_client.post(
            "/api/activity/dashboard-activity",
            json={"action": "sync_complete", "status": "pending", "roomName": "r1"}
        )
        assert created.status_code == 201
        entry = created.json()
        assert entry["roomName"] == "r1"

        updated = test_client.patch(
            f"/api/activity/dashboard-activity/{entry['id']}",
            json={"status": "success", "details": "done"}
        )
        assert updated.json()["status"] == "success"
        assert updated.json()["id"] == entry["id"]

        listed = test_client.get("/api/activity/dashboard-activity").json()
        assert [e["details"] for e in listed] == ["done"]

        cleared = test_client.delete("/api/activity/dashboard-activity")
        assert cleared.json() == {"success": True, "removed": 1}

    def test_update_unknown_entry(self, test_client):
        response = test_client.patch("/api/activity/live-activity/missing", json={"details": "x"})

        assert response.status_code == 404

    def test_update_with_null_status_is_rejected(self, test_client, activity_store):
        from testbench.services.activity_log import ActivityLogStore

        kept = activity_store.add(LIVE_ACTIVITY, "room_deleted", details="other page")
        entry = activity_store.add(OUTBOUND_ACTIVITY, "call_initiated")

        response = test_client.patch(
            f"/api/activity/{OUTBOUND_ACTIVITY}/{entry.id}",
            json={"status": None}
        )

        assert response.status_code == 400
        assert response.json()["details"]["field"] == "status"
        assert activity_store.list(OUTBOUND_ACTIVITY)[0].status == "pending"

        reloaded = ActivityLogStore(file_path=str(activity_store.records_file))
        assert reloaded.list(LIVE_ACTIVITY)[0].id == kept.id
        assert reloaded.list(OUTBOUND_ACTIVITY)[0].id == entry.id

    def test_update_with_null_action_is_rejected(self, test_client, activity_store):
        entry = activity_store.add(OUTBOUND_ACTIVITY, "call_initiated")

        response = test_client.patch(
            f"/api/activity/{OUTBOUND_ACTIVITY}/{entry.id}",
            json={"action": None}
        )

        assert response.status_code == 400
        assert activity_store.list(OUTBOUND_ACTIVITY)[0].action == "call_initiated"

    def test_recent_across_pages(self, test_client, activity_store):
        activity_store.add(OUTBOUND_ACTIVITY, "call_initiated")
        activity_store.add(LIVE_ACTIVITY, "room_deleted")

        data = test_client.get("/api/activity", params={"limit": 1}).json()

        assert len(data) == 1


class TestCatalogAndDebug:
    """Tests for catalog and diagnostics endpoints"""

    def test_models(self, test_client):
        data = test_client.get("/api/models").json()

        assert data["defaults"]["llm"] == "openai/gpt-4o-mini"
        values = [o["value"] for category in data["stt"] for o in category["options"]]
        assert "assemblyai/universal-streaming:en" in values

    def test_plugins(self, test_client):
        data = test_client.get("/api/plugins").json()

        assert set(data) == {"stt", "llm", "tts"}
        assert all("envKey" in provider for provider in data["llm"])

    def test_debug_hides_values(self, test_client):
        response = test_client.get("/api/debug")

        assert response.status_code == 200
        data = response.json()
        assert data["livekit"]["LIVEKIT_API_SECRET"]["status"] == "set"
        assert "test-api-secret" not in response.text

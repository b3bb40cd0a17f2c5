"""
Tests for interview configuration endpoints.

Tests:
- Creation gated by enterprise and job role verification
- Validation of the input contract
- Fetch, partial update and delete with notifications
- Enterprise/role lookup
"""

import uuid
import pytest

from core.exceptions import MessageBusError, MessageTimeoutError
from core.utils.datetime import now

BASE = "/api/interview-configs"


@pytest.fixture
async def created(client, bus, config_data):
    response = await client.post(BASE, json=config_data)
    assert response.status_code == 201
    bus.sent.clear()
    bus.emitted.clear()
    return response.json()


class TestCreateConfig:
    """Test configuration creation."""

    async def test_create_success(self, client, bus, config_data):
        response = await client.post(BASE, json=config_data)

        assert response.status_code == 201
        body = response.json()
        assert uuid.UUID(body["id"])
        assert body["created_at"]
        for field, value in config_data.items():
            assert body[field] == value

    async def test_create_verifies_enterprise_and_role(self, client, bus, config_data):
        await client.post(BASE, json=config_data)

        assert bus.sent == [
            ("verify_enterprise", config_data["enterprise_id"]),
            ("verify_job_role", config_data["job_role_id"]),
        ]

    async def test_create_emits_once(self, client, bus, config_data):
        start = now()
        response = await client.post(BASE, json=config_data)

        assert [pattern for pattern, _ in bus.emitted] == ["interview_config_created"]
        event = bus.events("interview_config_created")[0]
        assert event["config"]["id"] == response.json()["id"]
        assert event["timestamp"] >= start

    async def test_missing_enterprise(self, client, bus, config_data):
        bus.replies["verify_enterprise"] = False

        response = await client.post(BASE, json=config_data)

        assert response.status_code == 404
        error = response.json()["error"]
        assert error["code"] == "REFERENCE_NOT_FOUND"
        assert error["message"] == "Enterprise not found"
        assert bus.emitted == []
        assert (await client.get(BASE)).json() == []

    async def test_missing_job_role(self, client, bus, config_data):
        bus.replies["verify_job_role"] = False

        response = await client.post(BASE, json=config_data)

        assert response.status_code == 404
        assert response.json()["error"]["message"] == "Job role not found"
        assert (await client.get(BASE)).json() == []

    async def test_verification_timeout(self, client, bus, config_data):
        bus.replies["verify_job_role"] = MessageTimeoutError("verify_job_role", 5.0)

        response = await client.post(BASE, json=config_data)

        assert response.status_code == 504
        assert response.json()["error"]["code"] == "MESSAGE_BUS_TIMEOUT"
        assert (await client.get(BASE)).json() == []

    async def test_message_bus_unavailable(self, client, bus, config_data):
        bus.replies["verify_enterprise"] = MessageBusError("No subscriber is handling 'verify_enterprise'")

        response = await client.post(BASE, json=config_data)

        assert response.status_code == 503
        assert bus.emitted == []

    @pytest.mark.parametrize("field,value", [
        ("complexity_level", 0),
        ("complexity_level", 6),
        ("duration_minutes", 0),
        ("num_questions", -1),
        ("validity_hours", 0),
        ("enterprise_id", "not-a-uuid"),
        ("num_questions", 2.5),
    ])
    async def test_invalid_fields(self, client, bus, config_data, field, value):
        response = await client.post(BASE, json={**config_data, field: value})

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"
        assert bus.sent == []

    async def test_missing_required_field(self, client, config_data):
        config_data.pop("validity_hours")

        response = await client.post(BASE, json=config_data)
        assert response.status_code == 422

    async def test_unknown_field_rejected(self, client, config_data):
        response = await client.post(BASE, json={**config_data, "admin": True})
        assert response.status_code == 422


class TestReadConfig:
    """Test configuration retrieval."""

    async def test_list(self, client, created):
        response = await client.get(BASE)

        assert response.status_code == 200
        assert [config["id"] for config in response.json()] == [created["id"]]

    async def test_get_by_id(self, client, created):
        response = await client.get(f"{BASE}/{created['id']}")

        assert response.status_code == 200
        assert response.json() == created

    async def test_get_missing(self, client):
        missing = str(uuid.uuid4())

        response = await client.get(f"{BASE}/{missing}")

        assert response.status_code == 404
        error = response.json()["error"]
        assert error["code"] == "NOT_FOUND"
        assert error["message"] == f"Interview config with ID {missing} not found"

    async def test_get_malformed_id(self, client):
        response = await client.get(f"{BASE}/not-a-uuid")
        assert response.status_code == 404

    async def test_find_by_enterprise_and_role(self, client, bus, created, config_data):
        response = await client.get(
            f"{BASE}/enterprise/{config_data['enterprise_id']}/role/{config_data['job_role_id']}"
        )

        assert response.status_code == 200
        assert [config["id"] for config in response.json()] == [created["id"]]
        assert {pattern for pattern, _ in bus.sent} == {"verify_enterprise", "verify_job_role"}

    async def test_find_by_enterprise_and_role_unverified(self, client, bus, created, config_data):
        bus.replies["verify_job_role"] = False

        response = await client.get(
            f"{BASE}/enterprise/{config_data['enterprise_id']}/role/{config_data['job_role_id']}"
        )

        assert response.status_code == 404
        assert response.json()["error"]["message"] == "Job role not found"


class TestUpdateConfig:
    """Test partial updates."""

    async def test_partial_update(self, client, bus, created):
        response = await client.patch(f"{BASE}/{created['id']}", json={"num_questions": 12})

        assert response.status_code == 200
        body = response.json()
        assert body["num_questions"] == 12
        assert {k: v for k, v in body.items() if k != "num_questions"} == {
            k: v for k, v in created.items() if k != "num_questions"
        }
        assert bus.sent == []
        assert bus.events("interview_config_updated")[0]["config"]["num_questions"] == 12

    async def test_null_for_required_field(self, client, bus, created):
        response = await client.patch(f"{BASE}/{created['id']}", json={"duration_minutes": None})

        assert response.status_code == 422
        assert bus.emitted == []

    async def test_out_of_range(self, client, created):
        response = await client.patch(f"{BASE}/{created['id']}", json={"complexity_level": 9})
        assert response.status_code == 422

    async def test_update_missing(self, client, bus):
        response = await client.patch(f"{BASE}/{uuid.uuid4()}", json={"num_questions": 3})

        assert response.status_code == 404
        assert bus.emitted == []


class TestDeleteConfig:
    """Test deletion."""

    async def test_delete(self, client, bus, created):
        response = await client.delete(f"{BASE}/{created['id']}")

        assert response.status_code == 200
        assert response.json() == {"message": "Interview config deleted successfully"}
        event = bus.events("interview_config_deleted")[0]
        assert event["config_id"] == created["id"]
        assert (await client.get(f"{BASE}/{created['id']}")).status_code == 404

    async def test_delete_missing(self, client, bus):
        response = await client.delete(f"{BASE}/{uuid.uuid4()}")

        assert response.status_code == 404
        assert bus.emitted == []

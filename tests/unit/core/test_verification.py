"""Tests for reference existence checks over the message bus."""

import asyncio

import pytest

from core.exceptions import MessageTimeoutError, ReferenceNotFoundError
from core.messaging import Reference, ensure_references_exist, reply_exists
from core.messaging.verification import (
    VERIFY_APPLICATION,
    VERIFY_ENTERPRISE,
    VERIFY_JOB_ROLE,
    VERIFY_SENIORITY_LEVEL,
)


class TestReplyExists:
    """Test interpretation of verification replies."""

    @pytest.mark.parametrize("reply,expected", [
        (True, True),
        ({"exists": True}, True),
        (False, False),
        ({"exists": False}, False),
        ({}, False),
        (None, False),
        ("true", False),
        (1, False),
    ])
    def test_reply_values(self, reply, expected):
        assert reply_exists(reply) is expected


class TestReference:
    """Test reference labels."""

    @pytest.mark.parametrize("pattern,label", [
        (VERIFY_ENTERPRISE, "Enterprise"),
        (VERIFY_JOB_ROLE, "Job role"),
        (VERIFY_SENIORITY_LEVEL, "Seniority level"),
        (VERIFY_APPLICATION, "Application"),
        ("verify_badge", "badge"),
    ])
    def test_resource_label(self, pattern, label):
        assert Reference(pattern, "x").resource == label


class TestEnsureReferencesExist:
    """Test the verification precondition."""

    async def test_all_references_exist(self, bus):
        await ensure_references_exist(
            bus,
            Reference(VERIFY_ENTERPRISE, "ent-1"),
            Reference(VERIFY_JOB_ROLE, "role-1"),
        )

        assert bus.sent == [(VERIFY_ENTERPRISE, "ent-1"), (VERIFY_JOB_ROLE, "role-1")]

    async def test_no_references_sends_nothing(self, bus):
        await ensure_references_exist(bus)
        assert bus.sent == []

    async def test_missing_reference_names_resource(self, bus):
        bus.replies[VERIFY_APPLICATION] = False

        with pytest.raises(ReferenceNotFoundError) as exc_info:
            await ensure_references_exist(bus, Reference(VERIFY_APPLICATION, "app-9"))

        assert exc_info.value.message == "Application not found"
        assert exc_info.value.identifier == "app-9"
        assert exc_info.value.error_code == "REFERENCE_NOT_FOUND"

    async def test_first_missing_in_declaration_order(self, bus):
        bus.replies[VERIFY_ENTERPRISE] = False
        bus.replies[VERIFY_JOB_ROLE] = False

        with pytest.raises(ReferenceNotFoundError, match="Enterprise not found"):
            await ensure_references_exist(
                bus,
                Reference(VERIFY_ENTERPRISE, "ent-1"),
                Reference(VERIFY_JOB_ROLE, "role-1"),
            )

    async def test_second_reference_missing(self, bus):
        bus.replies[VERIFY_JOB_ROLE] = {"exists": False}

        with pytest.raises(ReferenceNotFoundError, match="Job role not found"):
            await ensure_references_exist(
                bus,
                Reference(VERIFY_ENTERPRISE, "ent-1"),
                Reference(VERIFY_JOB_ROLE, "role-1"),
            )

    async def test_identifier_sent_as_string(self, bus):
        await ensure_references_exist(bus, Reference(VERIFY_APPLICATION, 42))
        assert bus.sent == [(VERIFY_APPLICATION, "42")]

    async def test_channel_failure_propagates(self, bus):
        bus.replies[VERIFY_JOB_ROLE] = MessageTimeoutError(VERIFY_JOB_ROLE, 5.0)

        with pytest.raises(MessageTimeoutError):
            await ensure_references_exist(bus, Reference(VERIFY_JOB_ROLE, "role-1"))

    async def test_references_are_checked_concurrently(self):
        class SlowBus:
            def __init__(self):
                self.in_flight = 0
                self.peak = 0

            async def send(self, pattern, data):
                self.in_flight += 1
                self.peak = max(self.peak, self.in_flight)
                await asyncio.sleep(0.01)
                self.in_flight -= 1
                return True

        slow = SlowBus()
        await ensure_references_exist(
            slow,
            Reference(VERIFY_JOB_ROLE, "role-1"),
            Reference(VERIFY_SENIORITY_LEVEL, "level-1"),
        )

        assert slow.peak == 2

"""
Existence checks for resources owned by other modules or services.

Before a write that depends on a foreign identifier, the endpoint layer asks
the owner over the message bus whether the identifier exists. The check is a
pure precondition: it never touches the entity store.
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Protocol

from core.exceptions import ReferenceNotFoundError

# Outbound verification queries and the resource each one names in errors
VERIFY_ENTERPRISE = "verify_enterprise"
VERIFY_JOB_ROLE = "verify_job_role"
VERIFY_SENIORITY_LEVEL = "verify_seniority_level"
VERIFY_APPLICATION = "verify_application"
VERIFY_INTERVIEW = "verify_interview"
VERIFY_QUESTION = "verify_question"

RESOURCE_LABELS = {
    VERIFY_ENTERPRISE: "Enterprise",
    VERIFY_JOB_ROLE: "Job role",
    VERIFY_SENIORITY_LEVEL: "Seniority level",
    VERIFY_APPLICATION: "Application",
    VERIFY_INTERVIEW: "Interview",
    VERIFY_QUESTION: "Question",
}


class RequestSender(Protocol):
    async def send(self, pattern: str, data: Any) -> Any: ...


@dataclass(frozen=True)
class Reference:
    """One foreign identifier to verify."""

    pattern: str
    identifier: str

    @property
    def resource(self) -> str:
        return RESOURCE_LABELS.get(self.pattern, self.pattern.removeprefix("verify_"))


def reply_exists(reply: Any) -> bool:
    """Interpret a verification reply: a bare boolean or ``{"exists": bool}``."""
    if isinstance(reply, dict):
        return bool(reply.get("exists"))
    return reply is True


async def ensure_references_exist(bus: RequestSender, *references: Reference) -> None:
    """
    Verify every reference concurrently and fail on the first missing one.

    Replies are joined before any decision is made, so the error always names
    the first missing reference in declaration order.

    Raises:
        ReferenceNotFoundError: A reply was not a positive existence flag
        MessageBusError: The channel failed or timed out
    """
    if not references:
        return
    replies = await asyncio.gather(
        *(bus.send(reference.pattern, str(reference.identifier)) for reference in references)
    )
    for reference, reply in zip(references, replies):
        if not reply_exists(reply):
            raise ReferenceNotFoundError(reference.resource, reference.identifier)

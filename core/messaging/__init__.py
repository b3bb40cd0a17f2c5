"""
Message channel package: Redis request/reply + events, and reference verification.
"""

from core.messaging.bus import MessageBus, encode_packet, reply_channel
from core.messaging.verification import (
    Reference,
    ensure_references_exist,
    reply_exists,
)

__all__ = [
    "MessageBus",
    "encode_packet",
    "reply_channel",
    "Reference",
    "ensure_references_exist",
    "reply_exists",
]

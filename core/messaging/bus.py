"""
Redis pub/sub message bus.

Request/reply queries and fire-and-forget events share one publisher and one
subscriber connection per process. Packets are JSON and use the envelope the
other interview-platform services speak:

    request: {"pattern": ..., "data": ..., "id": ...}       on channel <pattern>
    reply:   {"id": ..., "response": ..., "err": ..., "isDisposed": true}
                                                             on channel <pattern>.reply
    event:   {"pattern": ..., "data": ...}                   on channel <pattern>
"""

import asyncio
import contextlib
import json
import logging
import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Awaitable, Callable, Dict, List, Optional, Set

from redis.asyncio import Redis, from_url
from redis.asyncio.client import PubSub
from redis.asyncio.retry import Retry
from redis.backoff import ExponentialBackoff
from redis.exceptions import (
    ConnectionError as RedisConnectionError,
    RedisError,
    TimeoutError as RedisTimeoutError,
)

from core.exceptions import MessageBusError, MessageTimeoutError

logger = logging.getLogger(__name__)

Handler = Callable[[Any], Awaitable[Any]]

REPLY_SUFFIX = ".reply"


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, uuid.UUID):
        return str(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def encode_packet(packet: Dict[str, Any]) -> str:
    """Serialize a packet, rendering datetimes, decimals and uuids."""
    return json.dumps(packet, default=_json_default)


def reply_channel(pattern: str) -> str:
    return f"{pattern}{REPLY_SUFFIX}"


class MessageBus:
    """
    Process-wide request/reply and event channel over Redis pub/sub.

    Handlers are registered before ``connect()`` so that their channels are
    subscribed when the listener starts. ``send`` awaits exactly one reply per
    request, matched by correlation id; ``emit`` schedules a publish and
    returns immediately.
    """

    def __init__(
        self,
        redis_url: str,
        request_timeout: float = 5.0,
        connect_timeout: float = 10.0,
        retry_attempts: int = 5,
        retry_delay: float = 1.0,
    ):
        """
        Args:
            redis_url: Redis connection URL
            request_timeout: Seconds to wait for a reply in ``send``
            connect_timeout: Socket connect timeout in seconds
            retry_attempts: Connection retries before giving up
            retry_delay: Base delay of the exponential connection backoff
        """
        self.redis_url = redis_url
        self.request_timeout = request_timeout
        self.connect_timeout = connect_timeout
        self.retry_attempts = retry_attempts
        self.retry_delay = retry_delay

        self._publisher: Optional[Redis] = None
        self._subscriber: Optional[Redis] = None
        self._pubsub: Optional[PubSub] = None
        self._listener: Optional[asyncio.Task] = None

        self._message_handlers: Dict[str, Handler] = {}
        self._event_handlers: Dict[str, List[Handler]] = {}
        self._reply_channels: Set[str] = set()
        self._subscribed: Set[str] = set()
        self._pending: Dict[str, asyncio.Future] = {}
        self._tasks: Set[asyncio.Task] = set()
        self._subscribe_lock = asyncio.Lock()

    @property
    def connected(self) -> bool:
        return self._publisher is not None and self._pubsub is not None

    # ==================== Registration ==================== #

    def message_handler(self, pattern: str, handler: Handler) -> None:
        """Register the responder for a request/reply pattern."""
        self._message_handlers[pattern] = handler
        self._subscribe_later(pattern)

    def event_handler(self, pattern: str, handler: Handler) -> None:
        """Register a consumer for an event pattern."""
        self._event_handlers.setdefault(pattern, []).append(handler)
        self._subscribe_later(pattern)

    def expect_replies(self, *patterns: str) -> None:
        """Declare outbound query patterns so their reply channels are subscribed up front."""
        for pattern in patterns:
            channel = reply_channel(pattern)
            self._reply_channels.add(channel)
            self._subscribe_later(channel)

    def _subscribe_later(self, channel: str) -> None:
        if self.connected and channel not in self._subscribed:
            self._track(asyncio.get_running_loop().create_task(self._ensure_subscribed(channel)))

    # ==================== Lifecycle ==================== #

    def _create_client(self) -> Redis:
        return from_url(
            self.redis_url,
            decode_responses=True,
            socket_connect_timeout=self.connect_timeout,
            retry=Retry(ExponentialBackoff(cap=3.0, base=self.retry_delay), self.retry_attempts),
            retry_on_error=[RedisConnectionError, RedisTimeoutError],
        )

    async def connect(self) -> None:
        """Open connections, subscribe every known channel and start listening."""
        if self.connected:
            return

        publisher = self._create_client()
        subscriber = self._create_client()
        try:
            await publisher.ping()
            pubsub = subscriber.pubsub(ignore_subscribe_messages=True)
            channels = (
                set(self._message_handlers)
                | set(self._event_handlers)
                | self._reply_channels
            )
            if channels:
                await pubsub.subscribe(*sorted(channels))
        except RedisError as exc:
            await publisher.aclose()
            await subscriber.aclose()
            raise MessageBusError(f"Could not connect to message bus: {exc}") from exc

        self._publisher = publisher
        self._subscriber = subscriber
        self._pubsub = pubsub
        self._subscribed = channels
        self._listener = asyncio.create_task(self._listen(), name="message-bus-listener")
        logger.info(f"Message bus connected, subscribed to {len(channels)} channels")

    async def close(self) -> None:
        """Stop listening, fail pending requests and close connections."""
        if self._listener is not None:
            self._listener.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._listener
            self._listener = None

        for future in self._pending.values():
            if not future.done():
                future.set_exception(MessageBusError("Message bus closed"))
        self._pending.clear()

        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

        if self._pubsub is not None:
            await self._pubsub.aclose()
        if self._subscriber is not None:
            await self._subscriber.aclose()
        if self._publisher is not None:
            await self._publisher.aclose()
        self._pubsub = self._subscriber = self._publisher = None
        self._subscribed = set()
        logger.info("Message bus closed")

    # ==================== Outbound ==================== #

    async def send(self, pattern: str, data: Any, timeout: Optional[float] = None) -> Any:
        """
        Publish a request and await its single reply.

        Args:
            pattern: Query name, e.g. ``verify_interview``
            data: JSON-serializable payload
            timeout: Seconds to wait; defaults to ``request_timeout``

        Returns:
            The ``response`` field of the reply packet

        Raises:
            MessageTimeoutError: No reply arrived in time
            MessageBusError: Not connected, no subscriber, redis failure or remote error
        """
        if not self.connected:
            raise MessageBusError("Message bus is not connected")

        timeout = self.request_timeout if timeout is None else timeout
        await self._ensure_subscribed(reply_channel(pattern))

        request_id = str(uuid.uuid4())
        future = asyncio.get_running_loop().create_future()
        self._pending[request_id] = future
        try:
            receivers = await self._publisher.publish(
                pattern,
                encode_packet({"pattern": pattern, "data": data, "id": request_id}),
            )
            if receivers == 0:
                raise MessageBusError(f"No subscriber is handling '{pattern}'")
            return await asyncio.wait_for(future, timeout)
        except asyncio.TimeoutError:
            raise MessageTimeoutError(pattern, timeout) from None
        except RedisError as exc:
            raise MessageBusError(f"Failed to send '{pattern}': {exc}") from exc
        finally:
            self._pending.pop(request_id, None)

    def emit(self, pattern: str, data: Any) -> None:
        """
        Schedule an event publish and return immediately.

        Delivery is best-effort: failures are logged and never reach the caller.
        """
        if not self.connected:
            logger.warning(f"Dropping event '{pattern}': message bus is not connected")
            return
        self._track(asyncio.get_running_loop().create_task(self._publish_event(pattern, data)))

    async def _publish_event(self, pattern: str, data: Any) -> None:
        try:
            await self._publisher.publish(pattern, encode_packet({"pattern": pattern, "data": data}))
        except Exception as exc:
            logger.warning(f"Failed to publish event '{pattern}': {exc}")

    # ==================== Inbound ==================== #

    async def _ensure_subscribed(self, channel: str) -> None:
        if channel in self._subscribed:
            return
        async with self._subscribe_lock:
            if channel in self._subscribed:
                return
            await self._pubsub.subscribe(channel)
            self._subscribed.add(channel)

    async def _listen(self) -> None:
        while True:
            if not self._pubsub.subscribed:
                await asyncio.sleep(0.1)
                continue
            try:
                message = await self._pubsub.get_message(
                    ignore_subscribe_messages=True, timeout=1.0
                )
            except RedisError as exc:
                logger.error(f"Message bus listener error: {exc}")
                await asyncio.sleep(self.retry_delay)
                continue
            if message is not None:
                self.dispatch(message["channel"], message["data"])

    def dispatch(self, channel: str, raw: str) -> None:
        """Route one pub/sub message to a pending request, a responder or event handlers."""
        try:
            packet = json.loads(raw)
        except (TypeError, ValueError):
            logger.warning(f"Discarding malformed packet on '{channel}'")
            return
        if not isinstance(packet, dict):
            logger.warning(f"Discarding non-object packet on '{channel}'")
            return

        if channel.endswith(REPLY_SUFFIX):
            self._resolve(packet)
        elif "id" in packet:
            handler = self._message_handlers.get(channel)
            if handler is not None:
                self._track(asyncio.create_task(self._respond(channel, handler, packet)))
        else:
            for handler in self._event_handlers.get(channel, []):
                self._track(asyncio.create_task(self._consume(channel, handler, packet.get("data"))))

    def _resolve(self, packet: Dict[str, Any]) -> None:
        future = self._pending.get(packet.get("id"))
        if future is None or future.done():
            return
        if packet.get("err") is not None:
            future.set_exception(MessageBusError(f"Remote handler failed: {packet['err']}"))
        elif "response" in packet or packet.get("isDisposed"):
            future.set_result(packet.get("response"))

    async def _respond(self, pattern: str, handler: Handler, packet: Dict[str, Any]) -> None:
        reply: Dict[str, Any] = {"id": packet["id"], "isDisposed": True}
        try:
            reply["response"] = await handler(packet.get("data"))
        except Exception as exc:
            logger.error(f"Responder for '{pattern}' failed", exc_info=True)
            reply["err"] = str(exc)
        try:
            await self._publisher.publish(reply_channel(pattern), encode_packet(reply))
        except RedisError as exc:
            logger.error(f"Failed to publish reply for '{pattern}': {exc}")

    async def _consume(self, pattern: str, handler: Handler, data: Any) -> None:
        try:
            await handler(data)
        except Exception:
            logger.error(f"Event handler for '{pattern}' failed", exc_info=True)

    def _track(self, task: asyncio.Task) -> None:
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

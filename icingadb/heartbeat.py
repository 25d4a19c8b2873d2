"""Reading Icinga 2 heartbeats from the icinga:stats Redis stream."""

import asyncio
import json
import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any

from icingadb.meta import parse_binary
from icingadb.stats import StatsMessage

TIMEOUT = 60.0
"""Seconds a heartbeat may be absent once one has been received before it counts as lost."""

STREAM = "icinga:stats"

_log = logging.getLogger(__name__)


class HeartbeatError(Exception):
    """The heartbeat controller stopped because of an error."""


def _text(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode()
    return value


@dataclass(frozen=True)
class HeartbeatMessage:
    """A heartbeat received from Icinga 2 together with the time it was received."""

    received: datetime
    stats: StatsMessage = field(default_factory=StatsMessage)

    def environment_id(self) -> bytes:
        """Return the Icinga DB environment ID carried by the heartbeat."""
        raw = self.stats.get("icingadb_environment")
        if not isinstance(raw, str):
            raise ValueError('heartbeat message misses "icingadb_environment"')
        value = json.loads(raw)
        if value is None:
            return b""
        return parse_binary(value)

    def expiry_time(self) -> datetime:
        """Return the time at which this heartbeat expires."""
        return self.received + timedelta(seconds=TIMEOUT)


class Heartbeat:
    """Reads heartbeats periodically and reports them, and their loss, as events."""

    def __init__(
        self,
        client: Any,
        logger: logging.Logger | None = None,
        *,
        timeout: float = TIMEOUT,
        throttle: float = 3.0,
        block_ms: int = 1000,
    ) -> None:
        self._client = client
        self._logger = logger or _log
        self._timeout = timeout
        self._throttle = throttle
        self._block_ms = block_ms
        self._active = False
        self._last_received_ms = 0
        self._last_message_ms = 0
        self._events: asyncio.Queue | None = None
        self._task: asyncio.Task | None = None
        self._error: HeartbeatError | None = None

    @property
    def last_received(self) -> int:
        """Receive time of the last heartbeat in milliseconds, 0 if none is current."""
        return self._last_received_ms

    @property
    def last_message_time(self) -> int:
        """Timestamp of the last heartbeat message in milliseconds, 0 if unknown."""
        return self._last_message_ms

    @property
    def error(self) -> HeartbeatError | None:
        """The error the controller stopped with, if any."""
        return self._error

    @property
    def done(self) -> bool:
        """Whether the controller has stopped."""
        return self._task is not None and self._task.done()

    def start(self) -> "Heartbeat":
        """Start the controller in the running event loop."""
        if self._task is not None:
            raise RuntimeError("heartbeat already started")
        self._events = asyncio.Queue(maxsize=1)
        self._task = asyncio.get_running_loop().create_task(self._run())
        return self

    async def next_event(self) -> HeartbeatMessage | None:
        """Wait for the next event: a message on receipt, None on heartbeat loss."""
        if self._task is None or self._events is None:
            raise RuntimeError("heartbeat not started")
        getter = asyncio.ensure_future(self._events.get())
        try:
            done, _ = await asyncio.wait(
                {getter, self._task}, return_when=asyncio.FIRST_COMPLETED
            )
            if getter in done:
                return getter.result()
        finally:
            if not getter.done():
                getter.cancel()
        try:
            return self._events.get_nowait()
        except asyncio.QueueEmpty:
            pass
        if self._error is not None:
            raise self._error
        raise RuntimeError("heartbeat stopped")

    async def close(self) -> None:
        """Stop the controller, wait for it and raise its error, if any."""
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        if self._error is not None:
            raise self._error

    async def __aenter__(self) -> "Heartbeat":
        return self.start()

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def _run(self) -> None:
        messages: asyncio.Queue = asyncio.Queue(maxsize=1)
        tasks = {
            asyncio.ensure_future(self._produce(messages)),
            asyncio.ensure_future(self._track(messages)),
        }
        try:
            done, _ = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
        finally:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
        for task in done:
            if not task.cancelled() and task.exception() is not None:
                cause = task.exception()
                self._error = HeartbeatError(f"heartbeat failed: {cause}")
                self._error.__cause__ = cause
                break

    async def _produce(self, messages: asyncio.Queue) -> None:
        last_id = "$"
        while True:
            try:
                result = await self._client.xread(
                    {STREAM: last_id}, count=1, block=self._block_ms
                )
            except asyncio.CancelledError:
                raise
            except Exception as exc:
                raise RuntimeError(f"can't read Icinga heartbeat: {exc}") from exc
            if not result or not result[0][1]:
                continue

            message_id, values = result[0][1][0]
            stats = StatsMessage({_text(k): _text(v) for k, v in values.items()})
            await messages.put(
                HeartbeatMessage(received=datetime.now(timezone.utc), stats=stats)
            )
            last_id = _text(message_id)
            await asyncio.sleep(self._throttle)

    async def _track(self, messages: asyncio.Queue) -> None:
        while True:
            try:
                message = await asyncio.wait_for(messages.get(), self._timeout)
            except asyncio.TimeoutError:
                if self._active:
                    self._logger.warning(
                        "Lost Icinga heartbeat (timeout %ss)", self._timeout
                    )
                    self._send_event(None)
                    self._active = False
                else:
                    self._logger.warning("Waiting for Icinga heartbeat")
                self._last_received_ms = 0
                self._last_message_ms = 0
                continue

            if not self._active:
                environment = message.environment_id()
                self._logger.info(
                    "Received Icinga heartbeat (environment %s)", environment.hex()
                )
                self._active = True

            self._last_received_ms = int(message.received.timestamp() * 1000)
            try:
                stats_time = message.stats.time()
            except ValueError as exc:
                self._logger.warning(
                    "Received Icinga heartbeat with invalid stats time: %s", exc
                )
                self._last_message_ms = 0
            else:
                self._last_message_ms = stats_time or 0

            self._send_event(message)

    def _send_event(self, message: HeartbeatMessage | None) -> None:
        assert self._events is not None
        try:
            old = self._events.get_nowait()
        except asyncio.QueueEmpty:
            pass
        else:
            if old is not None:
                self._logger.debug(
                    "Previous heartbeat not read from channel (previous %s, current %s)",
                    old.received,
                    message.received if message is not None else None,
                )
            else:
                self._logger.debug("Previous heartbeat loss event not read from channel")
        self._events.put_nowait(message)


def _now_ms() -> int:
    return int(time.time() * 1000)
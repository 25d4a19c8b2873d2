"""Own heartbeat and sync statistics written to Redis for monitoring by Icinga 2."""

import asyncio
import gc
import logging
import re
import threading
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

HEARTBEAT_STREAM = "icingadb:telemetry:heartbeat"
STATS_STREAM = "icingadb:telemetry:stats"

START_TIME = int(time.time() * 1000)

_log = logging.getLogger(__name__)
_BOOL_TO_STR = {False: "0", True: "1"}


class _DbConnErr:
    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.message = ""
        self.since_milli = 0


_db_conn_err = _DbConnErr()


def update_current_db_conn_err(err: BaseException | str | None) -> None:
    """Record the current database connection error, or None after recovery."""
    now = int(time.time() * 1000)
    with _db_conn_err.lock:
        if _db_conn_err.since_milli >= now:
            return
        message = "" if err is None else str(err)
        if _db_conn_err.message == message:
            return
        if _db_conn_err.message == "" or message == "":
            _db_conn_err.since_milli = now
        _db_conn_err.message = message


def get_current_db_conn_err() -> tuple[str, int]:
    """Return the current error message ("" if none) and when the error state last changed in ms."""
    with _db_conn_err.lock:
        return _db_conn_err.message, _db_conn_err.since_milli


@dataclass(frozen=True)
class SuccessfulSync:
    """Finish time and duration of the last successful sync, in milliseconds."""

    finish_milli: int = 0
    duration_milli: int = 0


@dataclass(frozen=True)
class _Description:
    name: str
    is_float: bool
    cumulative: bool
    read: Callable[[], Any]


def _descriptions() -> list[_Description]:
    started = time.monotonic()
    descriptions = []
    for gen in range(len(gc.get_stats())):
        for key, unit in (
            ("collections", "collections"),
            ("collected", "objects"),
            ("uncollectable", "objects"),
        ):
            descriptions.append(
                _Description(
                    f"/gc/gen{gen}/{key}:{unit}",
                    False,
                    True,
                    lambda gen=gen, key=key: gc.get_stats()[gen][key],
                )
            )
        descriptions.append(
            _Description(
                f"/gc/gen{gen}/pending:objects",
                False,
                False,
                lambda gen=gen: gc.get_count()[gen],
            )
        )
    descriptions.append(
        _Description("/sched/threads:threads", False, False, threading.active_count)
    )
    descriptions.append(
        _Description("/cpu/process:seconds", True, True, time.process_time)
    )
    descriptions.append(
        _Description(
            "/process/uptime:seconds", True, False, lambda: time.monotonic() - started
        )
    )
    return descriptions


class RuntimeMetrics:
    """Interpreter metrics rendered as performance data."""

    def __init__(self) -> None:
        forbidden = re.compile(r"\W")
        self._metrics = []
        for d in _descriptions():
            name = "python_" + forbidden.sub("_", d.name).lstrip("_")
            if d.name.endswith(":bytes"):
                unit = "B"
            elif d.name.endswith(":seconds"):
                unit = "s"
            elif d.cumulative:
                unit = "c"
            else:
                unit = ""
            self._metrics.append((name, unit, d))

    def performance_data(self) -> str:
        """Return all metrics as space separated name=value pairs."""
        parts = []
        for name, unit, d in self._metrics:
            value = d.read()
            if d.is_float:
                parts.append(f"{name}={float(value):f}{unit}")
            else:
                parts.append(f"{name}={int(value):d}{unit}")
        return " ".join(parts)


class Counter:
    """A thread-safe counter that is read and reset at once."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._value = 0

    @property
    def value(self) -> int:
        with self._lock:
            return self._value

    def add(self, amount: int = 1) -> None:
        """Increase the counter by amount."""
        with self._lock:
            self._value += amount

    def reset(self) -> int:
        """Return the current value and set the counter to zero."""
        with self._lock:
            value, self._value = self._value, 0
            return value


@dataclass
class _Stats:
    config: Counter = field(default_factory=Counter)
    state: Counter = field(default_factory=Counter)
    history: Counter = field(default_factory=Counter)
    overdue: Counter = field(default_factory=Counter)
    history_cleanup: Counter = field(default_factory=Counter)


STATS = _Stats()
"""Counters to be increased by each sync once per object synced."""


def heartbeat_values(
    version: str,
    last_heartbeat: int,
    ha_state: tuple[int, bool, bool],
    ongoing_sync_start: int,
    last_sync: SuccessfulSync,
    metrics: Any,
) -> dict[str, str]:
    """Build the fields of one own heartbeat message."""
    responsible_ts, responsible, other_responsible = ha_state
    db_conn_err, db_conn_err_since = get_current_db_conn_err()
    return {
        "version": version,
        "time": str(int(time.time() * 1000)),
        "start-time": str(START_TIME),
        "error": db_conn_err,
        "error-since": str(db_conn_err_since),
        "performance-data": metrics.performance_data(),
        "last-heartbeat-received": str(last_heartbeat),
        "ha-responsible": _BOOL_TO_STR[bool(responsible)],
        "ha-responsible-ts": str(responsible_ts),
        "ha-other-responsible": _BOOL_TO_STR[bool(other_responsible)],
        "sync-ongoing-since": str(ongoing_sync_start),
        "sync-success-finish": str(last_sync.finish_milli),
        "sync-success-duration": str(last_sync.duration_milli),
    }


async def _periodic(interval: float, fn: Callable[[float], Awaitable[None]]) -> None:
    loop = asyncio.get_running_loop()
    tick = loop.time()
    while True:
        await fn(tick)
        tick += interval
        await asyncio.sleep(max(0.0, tick - loop.time()))


class _HeartbeatWriter:
    interval = 1.0

    def __init__(self, client, ha, heartbeat, version, logger) -> None:
        self.client = client
        self.ha = ha
        self.heartbeat = heartbeat
        self.version = version
        self.logger = logger
        self.last_sync = SuccessfulSync()
        self.ongoing_sync_start = 0
        self._metrics = RuntimeMetrics()
        self._last_err = ""
        self._silence_until = 0.0
        self.task = asyncio.get_running_loop().create_task(
            _periodic(self.interval, self._tick)
        )

    async def stop(self) -> None:
        self.task.cancel()
        try:
            await self.task
        except asyncio.CancelledError:
            pass

    async def _tick(self, tick: float) -> None:
        values = heartbeat_values(
            self.version,
            self.heartbeat.last_received,
            self.ha.state(),
            self.ongoing_sync_start,
            self.last_sync,
            self._metrics,
        )
        loop = asyncio.get_running_loop()
        now = time.monotonic()
        try:
            await asyncio.wait_for(
                self.client.xadd(HEARTBEAT_STREAM, values, maxlen=1, approximate=False),
                timeout=max(0.0, tick + self.interval - loop.time()),
            )
        except asyncio.CancelledError:
            raise
        except asyncio.TimeoutError:
            self._reset_error()
        except Exception as exc:
            current = str(exc)
            log = self.logger.debug
            if current != self._last_err or now > self._silence_until:
                log = self.logger.warning
                self._last_err = current
                self._silence_until = now + 60.0
            log("Can't update own heartbeat: %s", exc)
        else:
            self._reset_error()

    def _reset_error(self) -> None:
        self._last_err = ""
        self._silence_until = 0.0


def start_heartbeat(client, ha, heartbeat, version, logger=None) -> _HeartbeatWriter:
    """Write own heartbeats every second; set last_sync on the result to report syncs."""
    return _HeartbeatWriter(client, ha, heartbeat, version, logger or _log)


def write_stats(client, logger=None) -> asyncio.Task:
    """Forward and reset the sync counters every second; return the running task."""
    logger = logger or _log
    counters = {
        "config_sync": STATS.config,
        "state_sync": STATS.state,
        "history_sync": STATS.history,
        "overdue_sync": STATS.overdue,
        "history_cleanup": STATS.history_cleanup,
    }

    async def tick(_: float) -> None:
        data = {}
        for kind, counter in counters.items():
            if (count := counter.reset()) > 0:
                data[kind] = str(count)
        if not data:
            return
        try:
            await client.xadd(STATS_STREAM, data, maxlen=15 * 60, approximate=True)
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            logger.warning("Can't update own stats: %s", exc)

    return asyncio.get_running_loop().create_task(_periodic(1.0, tick))
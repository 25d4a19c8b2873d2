import asyncio
import logging
import re
import time

import pytest

from icingadb.telemetry import (
    STATS,
    Counter,
    RuntimeMetrics,
    SuccessfulSync,
    get_current_db_conn_err,
    heartbeat_values,
    start_heartbeat,
    update_current_db_conn_err,
    write_stats,
)


class FakeRedis:
    def __init__(self, error=None):
        self.error = error
        self.calls = []

    async def xadd(self, name, fields, maxlen=None, approximate=True):
        self.calls.append((name, dict(fields), maxlen, approximate))
        if self.error is not None:
            raise self.error
        return b"1-0"


class FakeHa:
    def state(self):
        return 4711, True, False


class FakeHeartbeat:
    last_received = 123


class FakeMetrics:
    def performance_data(self):
        return "x=1"


def _update(err):
    time.sleep(0.003)
    update_current_db_conn_err(err)


def test_db_conn_err_transitions():
    _update(None)
    _update(RuntimeError("boom"))
    message, since = get_current_db_conn_err()
    assert message == "boom"
    assert since > 0

    _update(RuntimeError("boom"))
    assert get_current_db_conn_err() == ("boom", since)

    _update(RuntimeError("other"))
    assert get_current_db_conn_err() == ("other", since)

    _update(None)
    message, recovered = get_current_db_conn_err()
    assert message == ""
    assert recovered > since


def test_counter_reset():
    counter = Counter()
    counter.add(3)
    counter.add(2)
    assert counter.value == 5
    assert counter.reset() == 5
    assert counter.reset() == 0


def test_performance_data_format():
    data = RuntimeMetrics().performance_data()
    entries = data.split(" ")
    assert entries
    for entry in entries:
        assert re.fullmatch(r"python_\w+=\d+(\.\d{6})?[Bsc]?", entry), entry
    assert any(e.startswith("python_cpu_process_seconds=") and e.endswith("s") for e in entries)


def test_heartbeat_values():
    values = heartbeat_values(
        "1.0.0", 123, (4711, True, False), 99, SuccessfulSync(7, 8), FakeMetrics()
    )
    assert set(values) == {
        "version", "time", "start-time", "error", "error-since",
        "performance-data", "last-heartbeat-received", "ha-responsible",
        "ha-responsible-ts", "ha-other-responsible", "sync-ongoing-since",
        "sync-success-finish", "sync-success-duration",
    }
    assert values["version"] == "1.0.0"
    assert values["ha-responsible"] == "1"
    assert values["ha-other-responsible"] == "0"
    assert values["ha-responsible-ts"] == "4711"
    assert values["sync-success-finish"] == "7"
    assert values["sync-success-duration"] == "8"
    assert values["performance-data"] == "x=1"
    assert values["error"] == get_current_db_conn_err()[0]
    assert int(values["time"]) >= int(values["start-time"])


@pytest.mark.asyncio
async def test_start_heartbeat_writes():
    client = FakeRedis()
    writer = start_heartbeat(client, FakeHa(), FakeHeartbeat(), "1.0.0")
    writer.last_sync = SuccessfulSync(5, 6)
    await asyncio.sleep(0.05)
    await writer.stop()
    name, fields, maxlen, approximate = client.calls[0]
    assert name == "icingadb:telemetry:heartbeat"
    assert maxlen == 1
    assert approximate is False
    assert fields["last-heartbeat-received"] == "123"
    assert fields["ha-responsible"] == "1"


@pytest.mark.asyncio
async def test_start_heartbeat_logs_errors(caplog):
    client = FakeRedis(error=ConnectionError("down"))
    with caplog.at_level(logging.DEBUG, logger="icingadb.telemetry"):
        writer = start_heartbeat(client, FakeHa(), FakeHeartbeat(), "1.0.0")
        await asyncio.sleep(0.05)
        await writer.stop()
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert any("Can't update own heartbeat" in r.getMessage() for r in warnings)


@pytest.mark.asyncio
async def test_write_stats():
    client = FakeRedis()
    STATS.config.reset()
    STATS.state.reset()
    STATS.history.reset()
    STATS.overdue.reset()
    STATS.history_cleanup.reset()
    STATS.config.add(3)
    STATS.history.add(2)
    task = write_stats(client)
    await asyncio.sleep(0.05)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
    name, fields, maxlen, approximate = client.calls[0]
    assert name == "icingadb:telemetry:stats"
    assert fields == {"config_sync": "3", "history_sync": "2"}
    assert maxlen == 15 * 60
    assert approximate is True
    assert STATS.config.value == 0
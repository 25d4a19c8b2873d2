# icingadb

An object model and a set of asyncio helpers for synchronising the monitoring
data of Icinga 2, as it appears in Redis, towards a relational database.
The package has no runtime dependencies beyond the standard library.

## What is in it

- **Entities** (`icingadb.meta`, `icingadb.checkable`, `icingadb.command`,
  `icingadb.objects`): hosts, services, their states, groups and members,
  check/event/notification commands with their arguments and environment
  variables, comments, downtimes, endpoints, zones, notifications, time
  periods, URLs, users and user groups, all as keyword-only dataclasses.
  Entities carry a binary `id`, most also a `checksum`. `Entity.load(data)`
  fills an entity from a JSON object (text or an already decoded mapping);
  hex strings become `bytes`, unknown keys are ignored and wrongly typed
  values raise `ValueError`.
- **Helpers** (`icingadb.meta`): `parse_binary(text)` decodes a hex ID,
  `checksum(value)` returns the SHA-1 digest of a string or bytes.
  `Environment.new_context(parent)` returns a `ChainMap` carrying the
  environment, and `environment_from_context(ctx)` gets it back (raising
  `LookupError` if there is none).
- **Custom variables** (`icingadb.customvar`): `flatten(value, prefix)` turns a
  nested value into flat `name -> value` pairs (`None` for JSON null, `"{}"`
  and `"[]"` for empty containers), and `expand_customvars(customvars)` yields
  each `Customvar` together with the list of its `CustomvarFlat` rows.
- **Host addresses** (`icingadb.checkable`): `Host.address_bin()` gives the
  IPv4 address as 4 bytes and `Host.address6_bin()` the address as 16 bytes
  (IPv4 addresses mapped), or `None` when the address is not valid.
- **History** (`icingadb.history`): acknowledgement, comment, downtime,
  flapping, notification and state history rows, with the rules that pick the
  event time written to the shared `history` table (`HistoryAck.event_time()`,
  `HistoryComment.event_time()`, `HistoryDowntime.event_time()`,
  `HistoryFlapping.event_time()`) and `SlaHistoryDowntime.downtime_end()`.
  `upsert()` returns the columns to update when a row already exists.
- **Factories** (`icingadb.factories`): `CONFIG_FACTORIES` and
  `STATE_FACTORIES` list the entity classes of a full synchronisation;
  `new_overdue_host_state(id, overdue)` and
  `new_overdue_service_state(id, overdue)` build overdue state entities from a
  hex ID.
- **Icinga 2 status** (`icingadb.stats`): `StatsMessage` is a message of the
  `icinga:stats` stream; `icinga_status()` returns its `IcingaStatus` and
  `time()` its timestamp in milliseconds, both raising `ValueError` when the
  field is missing.
- **Heartbeat** (`icingadb.heartbeat`): `Heartbeat(client)` reads
  `icinga:stats` every few seconds and reports events through
  `await next_event()`: a `HeartbeatMessage` when a heartbeat arrives, `None`
  once none has arrived for a minute. `last_received` and
  `last_message_time` give the times in milliseconds; `close()` stops it and
  raises `HeartbeatError` if reading failed.
- **Entity streams** (`icingadb.entity_stream`): `create_entities(factory, pairs)`
  yields entities from Redis hash field/value pairs, and
  `set_checksums(entities, checksums)` copies checksums onto them, raising
  `ValueError` when one is missing.
- **Telemetry** (`icingadb.telemetry`): `start_heartbeat(...)` writes the own
  heartbeat to `icingadb:telemetry:heartbeat` every second; `write_stats(...)`
  writes the `STATS` counters to `icingadb:telemetry:stats` every second;
  `update_current_db_conn_err` and `get_current_db_conn_err` track the
  current database connection error. `RuntimeMetrics` renders interpreter
  metrics as performance data and `Counter` is a thread-safe counter.

The Redis client is passed in and only needs awaitable `xread(streams, count=,
block=)` and `xadd(name, fields, maxlen=, approximate=)` methods, such as
those of `redis.asyncio.Redis` from the separately installed `redis`
distribution.

## What it does not do

There is no command to run and no database layer: the package does not
connect to Redis or a database by itself, and does not write entities or
history rows anywhere. It models the data and provides the reading, checksum
and telemetry steps; storing the results is left to the caller.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Examples

Binary IDs and checksums:

```python
from icingadb.meta import parse_binary, checksum

object_id = parse_binary("172a")       # b"\x17\x2a"
name_checksum = checksum("web01")      # SHA-1 digest of the name
```

Flattening a custom variable:

```python
from icingadb.customvar import flatten

flat = flatten({"disks": ["/", "/var"], "os": "Linux"}, "vars")
# {"vars.disks[0]": "/", "vars.disks[1]": "/var", "vars.os": "Linux"}
```

Reading the timestamp of an Icinga 2 stats message:

```python
from icingadb.stats import StatsMessage

message = StatsMessage({"timestamp": "1700000000000"})
when = message.time()   # 1700000000000
```

Waiting for the Icinga 2 heartbeat:

```python
from icingadb.heartbeat import Heartbeat

async def watch(client):
    async with Heartbeat(client) as heartbeat:
        event = await heartbeat.next_event()
        if event is not None:
            print(event.environment_id().hex())
```

Counting synchronised objects for telemetry:

```python
from icingadb.telemetry import Counter

config_sync = Counter()
config_sync.add(3)
config_sync.reset()   # returns 3 and starts again from zero
```
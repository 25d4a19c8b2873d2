"""Messages of the icinga:stats stream and the Icinga status they carry."""

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from icingadb.meta import Entity


def _to_milli(value: Any) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"expected a timestamp in milliseconds, got {value!r}")
    return int(value)


@dataclass(kw_only=True)
class IcingaStatus(Entity):
    """Icinga status information.

    icinga2_environment is the Icinga 2 environment, unrelated to environment IDs.
    """

    icinga2_environment: str = field(default="", metadata={"json": "environment"})
    node_name: str = ""
    version: str = ""
    program_start: int | None = None
    endpoint_id: bytes | None = None
    notifications_enabled: bool | None = field(
        default=None, metadata={"json": "enable_notifications"}
    )
    active_service_checks_enabled: bool | None = field(
        default=None, metadata={"json": "enable_service_checks"}
    )
    active_host_checks_enabled: bool | None = field(
        default=None, metadata={"json": "enable_host_checks"}
    )
    event_handlers_enabled: bool | None = field(
        default=None, metadata={"json": "enable_event_handlers"}
    )
    flap_detection_enabled: bool | None = field(
        default=None, metadata={"json": "enable_flapping"}
    )
    performance_data_enabled: bool | None = field(
        default=None, metadata={"json": "enable_perfdata"}
    )


def _child(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ValueError(f"expected a JSON object at {key!r}, got {value!r}")
    return value


class StatsMessage(dict):
    """A message from the icinga:stats stream."""

    def icinga_status(self) -> IcingaStatus:
        """Extract the Icinga status; raise ValueError if it is missing or malformed."""
        raw = self.get("IcingaApplication")
        if not isinstance(raw, str):
            raise ValueError(f'bad message {dict(self)!r}. "IcingaApplication" missing')
        envelope = json.loads(raw)
        if not isinstance(envelope, Mapping):
            raise ValueError(f"expected a JSON object, got {envelope!r}")
        app = dict(_child(_child(_child(envelope, "status"), "icingaapplication"), "app"))
        if "program_start" in app:
            app["program_start"] = _to_milli(app["program_start"])
        return IcingaStatus().load(app)

    def time(self) -> int | None:
        """Return the message timestamp in milliseconds; raise ValueError if missing or malformed."""
        raw = self.get("timestamp")
        if not isinstance(raw, str):
            raise ValueError(f'bad message {dict(self)!r}. "timestamp" missing')
        return _to_milli(json.loads(raw))
"""Hosts, services, their states, groups and custom variable links."""

import ipaddress
from dataclasses import dataclass
from typing import Any

from icingadb.meta import (
    CustomvarMeta,
    EntityWithChecksum,
    EnvironmentMeta,
    GroupMeta,
    MemberMeta,
    NameCiMeta,
)


def _parse_ip(address: str) -> ipaddress.IPv4Address | ipaddress.IPv6Address | None:
    if "%" in address:
        return None
    try:
        return ipaddress.ip_address(address)
    except ValueError:
        return None


@dataclass(kw_only=True)
class Checkable(EntityWithChecksum, EnvironmentMeta, NameCiMeta):
    """Configuration shared by hosts and services."""

    action_url_id: bytes | None = None
    active_checks_enabled: bool | None = None
    check_interval: float = 0.0
    check_timeperiod_name: str = ""
    check_timeperiod_id: bytes | None = None
    check_retry_interval: float = 0.0
    check_timeout: float = 0.0
    checkcommand_name: str = ""
    checkcommand_id: bytes | None = None
    command_endpoint_name: str = ""
    command_endpoint_id: bytes | None = None
    display_name: str = ""
    event_handler_enabled: bool | None = None
    eventcommand_name: str = ""
    eventcommand_id: bytes | None = None
    flapping_enabled: bool | None = None
    flapping_threshold_high: float = 0.0
    flapping_threshold_low: float = 0.0
    icon_image_alt: str = ""
    icon_image_id: bytes | None = None
    is_volatile: bool | None = None
    max_check_attempts: int = 0
    notes: str = ""
    notes_url_id: bytes | None = None
    notifications_enabled: bool | None = None
    passive_checks_enabled: bool | None = None
    perfdata_enabled: bool | None = None
    zone_name: str = ""
    zone_id: bytes | None = None


@dataclass(kw_only=True)
class Host(Checkable):
    """A monitored host."""

    address: str = ""
    address6: str = ""

    def address_bin(self) -> bytes | None:
        """The IPv4 address as 4 bytes, or None if it is not an IPv4 address."""
        ip = _parse_ip(self.address)
        if isinstance(ip, ipaddress.IPv6Address):
            ip = ip.ipv4_mapped
        return ip.packed if ip is not None else None

    def address6_bin(self) -> bytes | None:
        """The IPv6 address as 16 bytes (IPv4 mapped if needed), or None if invalid."""
        ip = _parse_ip(self.address6)
        if ip is None:
            return None
        if isinstance(ip, ipaddress.IPv4Address):
            return bytes(10) + b"\xff\xff" + ip.packed
        return ip.packed


@dataclass(kw_only=True)
class HostCustomvar(CustomvarMeta):
    host_id: bytes | None = None


@dataclass(kw_only=True)
class State(EntityWithChecksum, EnvironmentMeta):
    """Runtime state shared by hosts and services."""

    acknowledgement_comment_id: bytes | None = None
    last_comment_id: bytes | None = None
    check_attempt: int = 0
    check_commandline: str | None = None
    check_source: str | None = None
    scheduling_source: str | None = None
    execution_time: float = 0.0
    hard_state: int = 0
    in_downtime: bool | None = None
    is_acknowledged: Any = None
    is_flapping: bool | None = None
    is_handled: bool | None = None
    is_problem: bool | None = None
    is_reachable: bool | None = None
    last_state_change: int | None = None
    last_update: int | None = None
    latency: float = 0.0
    long_output: str | None = None
    next_check: int | None = None
    next_update: int | None = None
    output: str | None = None
    performance_data: str | None = None
    normalized_performance_data: str | None = None
    previous_soft_state: int = 0
    previous_hard_state: int = 0
    severity: int = 0
    soft_state: int = 0
    state_type: Any = None
    check_timeout: float = 0.0


@dataclass(kw_only=True)
class HostState(State):
    host_id: bytes | None = None


@dataclass(kw_only=True)
class Hostgroup(GroupMeta):
    pass


@dataclass(kw_only=True)
class HostgroupCustomvar(CustomvarMeta):
    hostgroup_id: bytes | None = None


@dataclass(kw_only=True)
class HostgroupMember(MemberMeta):
    host_id: bytes | None = None
    hostgroup_id: bytes | None = None


@dataclass(kw_only=True)
class Service(Checkable):
    """A monitored service."""

    host_id: bytes | None = None


@dataclass(kw_only=True)
class ServiceCustomvar(CustomvarMeta):
    service_id: bytes | None = None


@dataclass(kw_only=True)
class ServiceState(State):
    service_id: bytes | None = None
    host_id: bytes | None = None


@dataclass(kw_only=True)
class Servicegroup(GroupMeta):
    pass


@dataclass(kw_only=True)
class ServicegroupCustomvar(CustomvarMeta):
    servicegroup_id: bytes | None = None


@dataclass(kw_only=True)
class ServicegroupMember(MemberMeta):
    service_id: bytes | None = None
    servicegroup_id: bytes | None = None
"""Comments, downtimes, zones, notifications, time periods, URLs and users."""

from dataclasses import dataclass, field
from typing import Any

from icingadb.meta import (
    CustomvarMeta,
    EntityWithChecksum,
    EntityWithoutChecksum,
    EnvironmentMeta,
    GroupMeta,
    MemberMeta,
    NameCiMeta,
    NameMeta,
)


@dataclass(kw_only=True)
class Comment(EntityWithChecksum, EnvironmentMeta, NameMeta):
    """A comment on a host or service."""

    object_type: str = ""
    host_id: bytes | None = None
    service_id: bytes | None = None
    author: str = ""
    text: str = ""
    entry_type: Any = None
    entry_time: int | None = None
    is_persistent: bool | None = None
    is_sticky: bool | None = None
    expire_time: int | None = None
    zone_id: bytes | None = None


@dataclass(kw_only=True)
class Downtime(EntityWithChecksum, EnvironmentMeta, NameMeta):
    """A scheduled downtime of a host or service."""

    triggered_by_id: bytes | None = None
    parent_id: bytes | None = None
    object_type: str = ""
    host_id: bytes | None = None
    service_id: bytes | None = None
    author: str = ""
    comment: str = ""
    entry_time: int | None = None
    scheduled_start_time: int | None = None
    scheduled_end_time: int | None = None
    scheduled_duration: int = 0
    is_flexible: bool | None = None
    flexible_duration: int = 0
    is_in_effect: bool | None = None
    start_time: int | None = None
    end_time: int | None = None
    duration: int = 0
    scheduled_by: str | None = None
    zone_id: bytes | None = None


@dataclass(kw_only=True)
class Endpoint(EntityWithChecksum, EnvironmentMeta, NameCiMeta):
    """An Icinga 2 endpoint."""

    zone_id: bytes | None = None


@dataclass(kw_only=True)
class Zone(EntityWithChecksum, EnvironmentMeta, NameCiMeta):
    """An Icinga 2 zone."""

    is_global: bool | None = None
    parent_id: bytes | None = None
    depth: int = 0


@dataclass(kw_only=True)
class IcingadbInstance(EntityWithoutChecksum, EnvironmentMeta):
    """A running Icinga DB instance and what it knows about Icinga 2."""

    endpoint_id: bytes | None = None
    heartbeat: int | None = None
    responsible: bool | None = None
    icinga2_version: str = ""
    icinga2_start_time: int | None = None
    icinga2_notifications_enabled: bool | None = None
    icinga2_active_service_checks_enabled: bool | None = None
    icinga2_active_host_checks_enabled: bool | None = None
    icinga2_event_handlers_enabled: bool | None = None
    icinga2_flap_detection_enabled: bool | None = None
    icinga2_performance_data_enabled: bool | None = None


@dataclass(kw_only=True)
class Notification(EntityWithChecksum, EnvironmentMeta, NameCiMeta):
    """A notification rule."""

    host_id: bytes | None = None
    service_id: bytes | None = None
    notificationcommand_id: bytes | None = None
    times_begin: int | None = None
    times_end: int | None = None
    notification_interval: int = 0
    timeperiod_id: bytes | None = None
    states: Any = None
    types: Any = None
    zone_id: bytes | None = None


@dataclass(kw_only=True)
class NotificationUser(EntityWithoutChecksum, EnvironmentMeta):
    notification_id: bytes | None = None
    user_id: bytes | None = None


@dataclass(kw_only=True)
class NotificationUsergroup(EntityWithoutChecksum, EnvironmentMeta):
    notification_id: bytes | None = None
    usergroup_id: bytes | None = None


@dataclass(kw_only=True)
class NotificationRecipient(EntityWithoutChecksum, EnvironmentMeta):
    notification_id: bytes | None = None
    user_id: bytes | None = None
    usergroup_id: bytes | None = None


@dataclass(kw_only=True)
class NotificationCustomvar(CustomvarMeta):
    notification_id: bytes | None = None


@dataclass(kw_only=True)
class Timeperiod(EntityWithChecksum, EnvironmentMeta, NameCiMeta):
    """A time period."""

    display_name: str = ""
    prefer_includes: bool | None = None
    zone_id: bytes | None = None


@dataclass(kw_only=True)
class TimeperiodRange(EntityWithoutChecksum, EnvironmentMeta):
    timeperiod_id: bytes | None = None
    range_key: str = ""
    range_value: str = ""


@dataclass(kw_only=True)
class TimeperiodOverrideInclude(EntityWithoutChecksum, EnvironmentMeta):
    timeperiod_id: bytes | None = None
    override_id: bytes | None = field(default=None, metadata={"json": "include_id"})


@dataclass(kw_only=True)
class TimeperiodOverrideExclude(EntityWithoutChecksum, EnvironmentMeta):
    timeperiod_id: bytes | None = None
    override_id: bytes | None = field(default=None, metadata={"json": "exclude_id"})


@dataclass(kw_only=True)
class TimeperiodCustomvar(CustomvarMeta):
    timeperiod_id: bytes | None = None


@dataclass(kw_only=True)
class ActionUrl(EntityWithoutChecksum, EnvironmentMeta):
    action_url: str = ""


@dataclass(kw_only=True)
class NotesUrl(EntityWithoutChecksum, EnvironmentMeta):
    notes_url: str = ""


@dataclass(kw_only=True)
class IconImage(EntityWithoutChecksum, EnvironmentMeta):
    icon_image: str = ""


@dataclass(kw_only=True)
class User(EntityWithChecksum, EnvironmentMeta, NameCiMeta):
    """A notification recipient."""

    display_name: str = ""
    email: str = ""
    pager: str = ""
    notifications_enabled: bool | None = None
    timeperiod_id: bytes | None = None
    states: Any = None
    types: Any = None
    zone_id: bytes | None = None


@dataclass(kw_only=True)
class UserCustomvar(CustomvarMeta):
    user_id: bytes | None = None


@dataclass(kw_only=True)
class Usergroup(GroupMeta):
    pass


@dataclass(kw_only=True)
class UsergroupCustomvar(CustomvarMeta):
    usergroup_id: bytes | None = None


@dataclass(kw_only=True)
class UsergroupMember(MemberMeta):
    user_id: bytes | None = None
    usergroup_id: bytes | None = None
"""Factories of synchronised entity types and overdue state entities."""

from dataclasses import dataclass

from icingadb.checkable import (
    Host,
    HostCustomvar,
    Hostgroup,
    HostgroupCustomvar,
    HostgroupMember,
    HostState,
    Service,
    ServiceCustomvar,
    Servicegroup,
    ServicegroupCustomvar,
    ServicegroupMember,
    ServiceState,
)
from icingadb.command import (
    Checkcommand,
    CheckcommandArgument,
    CheckcommandCustomvar,
    CheckcommandEnvvar,
    Eventcommand,
    EventcommandArgument,
    EventcommandCustomvar,
    EventcommandEnvvar,
    Notificationcommand,
    NotificationcommandArgument,
    NotificationcommandCustomvar,
    NotificationcommandEnvvar,
)
from icingadb.meta import EntityWithoutChecksum, parse_binary
from icingadb.objects import (
    ActionUrl,
    Comment,
    Downtime,
    Endpoint,
    IconImage,
    NotesUrl,
    Notification,
    NotificationCustomvar,
    NotificationRecipient,
    NotificationUser,
    NotificationUsergroup,
    Timeperiod,
    TimeperiodCustomvar,
    TimeperiodOverrideExclude,
    TimeperiodOverrideInclude,
    TimeperiodRange,
    User,
    UserCustomvar,
    Usergroup,
    UsergroupCustomvar,
    UsergroupMember,
    Zone,
)

STATE_FACTORIES = (HostState, ServiceState)

CONFIG_FACTORIES = (
    ActionUrl,
    Checkcommand,
    CheckcommandArgument,
    CheckcommandCustomvar,
    CheckcommandEnvvar,
    Comment,
    Downtime,
    Endpoint,
    Eventcommand,
    EventcommandArgument,
    EventcommandCustomvar,
    EventcommandEnvvar,
    Host,
    HostCustomvar,
    Hostgroup,
    HostgroupCustomvar,
    HostgroupMember,
    IconImage,
    NotesUrl,
    Notification,
    Notificationcommand,
    NotificationcommandArgument,
    NotificationcommandCustomvar,
    NotificationcommandEnvvar,
    NotificationCustomvar,
    NotificationRecipient,
    NotificationUser,
    NotificationUsergroup,
    Service,
    ServiceCustomvar,
    Servicegroup,
    ServicegroupCustomvar,
    ServicegroupMember,
    Timeperiod,
    TimeperiodCustomvar,
    TimeperiodOverrideExclude,
    TimeperiodOverrideInclude,
    TimeperiodRange,
    User,
    UserCustomvar,
    Usergroup,
    UsergroupCustomvar,
    UsergroupMember,
    Zone,
)


@dataclass(kw_only=True)
class OverdueHostState(EntityWithoutChecksum):
    """Whether a host's next check is overdue."""

    is_overdue: bool | None = None


@dataclass(kw_only=True)
class OverdueServiceState(EntityWithoutChecksum):
    """Whether a service's next check is overdue."""

    is_overdue: bool | None = None


def new_overdue_host_state(id: str, overdue: bool) -> OverdueHostState:
    """Build an overdue host state from a hex ID; raise ValueError if the ID is invalid."""
    return OverdueHostState(id=parse_binary(id), is_overdue=bool(overdue))


def new_overdue_service_state(id: str, overdue: bool) -> OverdueServiceState:
    """Build an overdue service state from a hex ID; raise ValueError if the ID is invalid."""
    return OverdueServiceState(id=parse_binary(id), is_overdue=bool(overdue))
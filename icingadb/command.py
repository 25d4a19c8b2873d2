"""Check, event and notification commands with their arguments and variables."""

from dataclasses import dataclass, field

from icingadb.meta import (
    CustomvarMeta,
    EntityWithChecksum,
    EnvironmentMeta,
    NameCiMeta,
)


@dataclass(kw_only=True)
class Command(EntityWithChecksum, EnvironmentMeta, NameCiMeta):
    """Configuration shared by all command kinds."""

    zone_id: bytes | None = None
    command: str = ""
    timeout: int = 0


@dataclass(kw_only=True)
class CommandArgument(EntityWithChecksum, EnvironmentMeta):
    """One argument of a command."""

    argument_key: str = ""
    argument_value: str | None = field(default=None, metadata={"json": "value"})
    argument_order: int | None = field(default=None, metadata={"json": "order"})
    description: str | None = None
    argument_key_override: str | None = field(default=None, metadata={"json": "key"})
    repeat_key: bool | None = True
    required: bool | None = False
    set_if: str | None = None
    separator: str | None = None
    skip_key: bool | None = False


@dataclass(kw_only=True)
class CommandEnvvar(EntityWithChecksum, EnvironmentMeta):
    """One environment variable of a command."""

    envvar_key: str = ""
    envvar_value: str = field(default="", metadata={"json": "value"})


@dataclass(kw_only=True)
class Checkcommand(Command):
    pass


@dataclass(kw_only=True)
class CheckcommandArgument(CommandArgument):
    checkcommand_id: bytes | None = None


@dataclass(kw_only=True)
class CheckcommandEnvvar(CommandEnvvar):
    checkcommand_id: bytes | None = None


@dataclass(kw_only=True)
class CheckcommandCustomvar(CustomvarMeta):
    checkcommand_id: bytes | None = None


@dataclass(kw_only=True)
class Eventcommand(Command):
    pass


@dataclass(kw_only=True)
class EventcommandArgument(CommandArgument):
    eventcommand_id: bytes | None = None


@dataclass(kw_only=True)
class EventcommandEnvvar(CommandEnvvar):
    eventcommand_id: bytes | None = None


@dataclass(kw_only=True)
class EventcommandCustomvar(CustomvarMeta):
    eventcommand_id: bytes | None = None


@dataclass(kw_only=True)
class Notificationcommand(Command):
    pass


@dataclass(kw_only=True)
class NotificationcommandArgument(CommandArgument):
    notificationcommand_id: bytes | None = None


@dataclass(kw_only=True)
class NotificationcommandEnvvar(CommandEnvvar):
    notificationcommand_id: bytes | None = None


@dataclass(kw_only=True)
class NotificationcommandCustomvar(CustomvarMeta):
    notificationcommand_id: bytes | None = None
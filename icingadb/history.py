"""History events and the SLA history derived from them."""

import dataclasses
from dataclasses import dataclass, field
from typing import Any, ClassVar

from icingadb.meta import Entity, EntityWithoutChecksum, EnvironmentMeta


@dataclass(kw_only=True)
class HistoryTableEntity(EntityWithoutChecksum):
    """Identity of a history type that has its own table."""

    def upsert(self) -> dict[str, Any]:
        """Columns to update on conflict: only the ID, i.e. effectively nothing."""
        return {"id": self.id}


@dataclass(kw_only=True)
class HistoryEntity(Entity):
    """Identity of an event in the history table."""

    id: bytes | None = field(default=None, metadata={"json": "event_id"})

    def upsert(self) -> dict[str, Any]:
        """Columns to update on conflict: only the ID, i.e. effectively nothing."""
        return {"id": self.id}


@dataclass(kw_only=True)
class HistoryTableMeta:
    """Fields of history types that have their own table."""

    environment_id: bytes | None = None
    endpoint_id: bytes | None = None
    object_type: str = ""
    host_id: bytes | None = None
    service_id: bytes | None = None


@dataclass(kw_only=True)
class HistoryMeta(HistoryEntity, HistoryTableMeta):
    """Fields of history types that belong to the history table."""

    event_type: str = ""


@dataclass(kw_only=True)
class _CommentHistoryEntity(Entity):
    comment_id: bytes | None = None

    @property
    def id(self) -> bytes | None:
        return self.comment_id

    @id.setter
    def id(self, value: bytes | None) -> None:
        self.comment_id = value


@dataclass(kw_only=True)
class _DowntimeHistoryEntity(Entity):
    downtime_id: bytes | None = None

    @property
    def id(self) -> bytes | None:
        return self.downtime_id

    @id.setter
    def id(self, value: bytes | None) -> None:
        self.downtime_id = value


@dataclass(kw_only=True)
class AcknowledgementHistory(EntityWithoutChecksum, HistoryTableMeta):
    """An acknowledgement from being set until it is cleared."""

    clear_time: int | None = None
    cleared_by: str | None = None
    set_time: int | None = None
    author: str | None = None
    comment: str | None = None
    expire_time: int | None = None
    is_persistent: bool | None = None
    is_sticky: bool | None = None

    def upsert(self) -> dict[str, Any]:
        """Columns to update when the acknowledgement already exists."""
        return {"clear_time": self.clear_time, "cleared_by": self.cleared_by}


@dataclass(kw_only=True)
class HistoryAck(HistoryMeta):
    """An acknowledgement event in the history table."""

    table_name: ClassVar[str] = "history"

    acknowledgement_history_id: bytes | None = field(default=None, metadata={"json": "id"})
    set_time: int | None = None
    clear_time: int | None = None

    def event_time(self) -> int | None:
        """The time of the event in milliseconds, or None."""
        if self.event_type == "ack_set":
            return self.set_time
        if self.event_type == "ack_clear":
            return self.clear_time
        return None


@dataclass(kw_only=True)
class CommentHistory(_CommentHistoryEntity, HistoryTableMeta):
    """A comment from being added until it is removed."""

    removed_by: str | None = None
    remove_time: int | None = None
    has_been_removed: bool | None = False
    entry_time: int | None = None
    author: str = ""
    comment: str = ""
    entry_type: Any = None
    is_persistent: bool | None = None
    is_sticky: bool | None = None
    expire_time: int | None = None

    def upsert(self) -> dict[str, Any]:
        """Columns to update when the comment already exists."""
        return {
            "removed_by": self.removed_by,
            "remove_time": self.remove_time,
            "has_been_removed": self.has_been_removed,
        }


@dataclass(kw_only=True)
class HistoryComment(HistoryMeta):
    """A comment event in the history table."""

    table_name: ClassVar[str] = "history"

    comment_history_id: bytes | None = field(default=None, metadata={"json": "comment_id"})
    entry_time: int | None = None
    remove_time: int | None = None
    expire_time: int | None = None

    def event_time(self) -> int | None:
        """The time of the event in milliseconds, or None."""
        if self.event_type == "comment_add":
            return self.entry_time
        if self.event_type == "comment_remove":
            return self.remove_time if self.remove_time is not None else self.expire_time
        return None


@dataclass(kw_only=True)
class DowntimeHistory(_DowntimeHistoryEntity, HistoryTableMeta):
    """A downtime from being scheduled until it ends or is cancelled."""

    cancelled_by: str | None = None
    has_been_cancelled: bool | None = None
    cancel_time: int | None = None
    triggered_by_id: bytes | None = None
    parent_id: bytes | None = None
    entry_time: int | None = None
    author: str = ""
    comment: str = ""
    is_flexible: bool | None = None
    flexible_duration: int = 0
    scheduled_start_time: int | None = None
    scheduled_end_time: int | None = None
    start_time: int | None = None
    end_time: int | None = None
    scheduled_by: str | None = None
    trigger_time: int | None = None

    def upsert(self) -> dict[str, Any]:
        """Columns to update when the downtime already exists."""
        return {
            "cancelled_by": self.cancelled_by,
            "has_been_cancelled": self.has_been_cancelled,
            "cancel_time": self.cancel_time,
        }


@dataclass(kw_only=True)
class HistoryDowntime(HistoryMeta):
    """A downtime event in the history table."""

    table_name: ClassVar[str] = "history"

    downtime_history_id: bytes | None = field(default=None, metadata={"json": "downtime_id"})
    start_time: int | None = None
    cancel_time: int | None = None
    end_time: int | None = None
    has_been_cancelled: bool | None = None

    def event_time(self) -> int | None:
        """The time of the event in milliseconds, or None."""
        if self.event_type == "downtime_start":
            return self.start_time
        if self.event_type == "downtime_end":
            if self.has_been_cancelled is None:
                return None
            return self.cancel_time if self.has_been_cancelled else self.end_time
        return None


@dataclass(kw_only=True)
class SlaHistoryDowntime(_DowntimeHistoryEntity, HistoryTableMeta):
    """The period a downtime was in effect, for SLA reporting."""

    downtime_start: int | None = field(default=None, metadata={"json": "start_time"})
    has_been_cancelled: bool | None = None
    cancel_time: int | None = None
    end_time: int | None = None

    def downtime_end(self) -> int | None:
        """The cancel time if the downtime was cancelled, its end time otherwise."""
        return self.cancel_time if self.has_been_cancelled else self.end_time

    def upsert(self) -> dict[str, Any]:
        """Columns to update when the downtime already exists."""
        return {"downtime_end": self.downtime_end()}


@dataclass(kw_only=True)
class FlappingHistory(EntityWithoutChecksum, HistoryTableMeta):
    """A flapping period from its start until its end."""

    end_time: int | None = None
    percent_state_change_end: float | None = None
    flapping_threshold_low: float = 0.0
    flapping_threshold_high: float = 0.0
    start_time: int | None = None
    percent_state_change_start: float | None = None

    def upsert(self) -> dict[str, Any]:
        """Columns to update when the flapping period already exists."""
        return {
            "end_time": self.end_time,
            "percent_state_change_end": self.percent_state_change_end,
            "flapping_threshold_low": self.flapping_threshold_low,
            "flapping_threshold_high": self.flapping_threshold_high,
        }


@dataclass(kw_only=True)
class HistoryFlapping(HistoryMeta):
    """A flapping event in the history table."""

    table_name: ClassVar[str] = "history"

    flapping_history_id: bytes | None = field(default=None, metadata={"json": "id"})
    start_time: int | None = None
    end_time: int | None = None

    def event_time(self) -> int | None:
        """The time of the event in milliseconds, or None."""
        if self.event_type == "flapping_start":
            return self.start_time
        if self.event_type == "flapping_end":
            return self.end_time
        return None


@dataclass(kw_only=True)
class NotificationHistory(HistoryTableEntity, HistoryTableMeta):
    """A sent notification."""

    notification_id: bytes | None = None
    type: Any = None
    send_time: int | None = None
    state: int = 0
    previous_hard_state: int = 0
    author: str = ""
    text: str | None = None
    users_notified: int = 0


@dataclass(kw_only=True)
class UserNotificationHistory(EntityWithoutChecksum, EnvironmentMeta):
    """A user that received a sent notification."""

    notification_history_id: bytes | None = None
    user_id: bytes | None = None

    def upsert(self) -> dict[str, Any]:
        """Columns to update on conflict: all of them."""
        return {f.name: getattr(self, f.name) for f in dataclasses.fields(self)}


@dataclass(kw_only=True)
class HistoryNotification(HistoryMeta):
    """A notification event in the history table."""

    table_name: ClassVar[str] = "history"

    notification_history_id: bytes | None = field(default=None, metadata={"json": "id"})
    event_time: int | None = field(default=None, metadata={"json": "send_time"})


@dataclass(kw_only=True)
class StateHistory(HistoryTableEntity, HistoryTableMeta):
    """A state change of a host or service."""

    event_time: int | None = None
    state_type: Any = None
    soft_state: int = 0
    hard_state: int = 0
    previous_soft_state: int = 0
    previous_hard_state: int = 0
    check_attempt: int = 0
    output: str | None = None
    long_output: str | None = None
    max_check_attempts: int = 0
    check_source: str | None = None
    scheduling_source: str | None = None


@dataclass(kw_only=True)
class HistoryState(HistoryMeta):
    """A state change event in the history table."""

    table_name: ClassVar[str] = "history"

    state_history_id: bytes | None = field(default=None, metadata={"json": "id"})
    event_time: int | None = None


@dataclass(kw_only=True)
class SlaHistoryState(HistoryTableEntity, HistoryTableMeta):
    """A hard state change, for SLA reporting."""

    event_time: int | None = None
    state_type: Any = None
    hard_state: int = 0
    previous_hard_state: int = 0
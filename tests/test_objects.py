import json

import pytest

from icingadb.meta import Entity
from icingadb.objects import (
    ActionUrl,
    Comment,
    Downtime,
    IcingadbInstance,
    Notification,
    TimeperiodOverrideExclude,
    TimeperiodOverrideInclude,
    User,
    Usergroup,
    Zone,
)


def test_comment_load_from_json_text():
    data = {
        "id": "172a",
        "environment_id": "17",
        "name": "c1",
        "author": "admin",
        "text": "hello",
        "entry_time": 1700000000000,
        "is_sticky": True,
        "zone_id": None,
    }
    comment = Comment().load(json.dumps(data))
    assert comment.id == bytes.fromhex("172a")
    assert comment.environment_id == bytes.fromhex("17")
    assert comment.name == "c1"
    assert comment.author == "admin"
    assert comment.text == "hello"
    assert comment.entry_time == 1700000000000
    assert comment.is_sticky is True
    assert comment.zone_id is None


def test_unknown_keys_are_ignored():
    url = ActionUrl().load({"action_url": "https://example.com/a", "unknown": 1})
    assert url.action_url == "https://example.com/a"


def test_invalid_hex_raises():
    with pytest.raises(ValueError):
        Zone().load({"parent_id": "zz"})


def test_wrong_type_raises():
    with pytest.raises(ValueError):
        Downtime().load({"author": 5})


def test_zone_name_ci_follows_name():
    zone = Zone().load({"name": "master", "depth": 2, "is_global": False})
    assert zone.name_ci == "master"
    assert zone.depth == 2
    assert zone.is_global is False
    zone.name = "other"
    assert zone.name_ci == "other"


def test_timeperiod_override_keys():
    include = TimeperiodOverrideInclude().load({"include_id": "2a", "exclude_id": "17"})
    exclude = TimeperiodOverrideExclude().load({"include_id": "2a", "exclude_id": "17"})
    assert include.override_id == bytes.fromhex("2a")
    assert exclude.override_id == bytes.fromhex("17")


def test_user_and_group():
    user = User().load({"name": "jdoe", "email": "jdoe@example.com", "checksum": "2a"})
    assert user.email == "jdoe@example.com"
    assert user.checksum == bytes.fromhex("2a")
    group = Usergroup().load({"name": "ops", "display_name": "Operations"})
    assert group.name_ci == "ops"
    assert group.display_name == "Operations"


def test_notification_nullable_ints():
    n = Notification().load({"times_begin": 10, "times_end": None, "notification_interval": 30})
    assert n.times_begin == 10
    assert n.times_end is None
    assert n.notification_interval == 30


def test_instance_fields():
    instance = IcingadbInstance().load(
        {"icinga2_version": "2.14.0", "responsible": True, "heartbeat": 1234}
    )
    assert instance.icinga2_version == "2.14.0"
    assert instance.responsible is True
    assert instance.heartbeat == 1234
    assert isinstance(instance, Entity)
    assert instance.fingerprint() is instance
import json

import pytest

from icingadb.stats import IcingaStatus, StatsMessage


def _application(app):
    return json.dumps({"status": {"icingaapplication": {"app": app}}})


def test_icinga_status_parses():
    app = {
        "environment": "prod",
        "node_name": "master1",
        "version": "v2.14.0",
        "program_start": 1700000000000,
        "endpoint_id": "172a",
        "enable_notifications": True,
        "enable_service_checks": False,
        "enable_perfdata": True,
    }
    status = StatsMessage(IcingaApplication=_application(app)).icinga_status()
    assert isinstance(status, IcingaStatus)
    assert status.icinga2_environment == "prod"
    assert status.node_name == "master1"
    assert status.version == "v2.14.0"
    assert status.program_start == 1700000000000
    assert status.endpoint_id == bytes([23, 42])
    assert status.notifications_enabled is True
    assert status.active_service_checks_enabled is False
    assert status.performance_data_enabled is True
    assert status.flap_detection_enabled is None


def test_icinga_status_empty_envelope_gives_defaults():
    status = StatsMessage(IcingaApplication="{}").icinga_status()
    assert status == IcingaStatus()


def test_icinga_status_missing():
    with pytest.raises(ValueError, match="IcingaApplication"):
        StatsMessage(timestamp="1").icinga_status()


def test_icinga_status_not_string():
    with pytest.raises(ValueError):
        StatsMessage(IcingaApplication=5).icinga_status()


def test_icinga_status_invalid_json():
    with pytest.raises(ValueError):
        StatsMessage(IcingaApplication="{").icinga_status()


def test_icinga_status_bad_structure():
    with pytest.raises(ValueError):
        StatsMessage(IcingaApplication=json.dumps({"status": []})).icinga_status()


def test_time_parses():
    assert StatsMessage(timestamp="1700000000123").time() == 1700000000123


def test_time_null():
    assert StatsMessage(timestamp="null").time() is None


def test_time_missing():
    with pytest.raises(ValueError, match="timestamp"):
        StatsMessage().time()


@pytest.mark.parametrize("raw", ["abc", '"text"', "true"])
def test_time_invalid(raw):
    with pytest.raises(ValueError):
        StatsMessage(timestamp=raw).time()


def test_stats_message_is_mapping():
    message = StatsMessage({"timestamp": "42", "other": "x"})
    assert message["other"] == "x"
    assert message.time() == 42
import pytest

from icingadb.checkable import (
    Checkable,
    Host,
    HostgroupMember,
    Hostgroup,
    HostState,
    Service,
    ServiceState,
    Servicegroup,
    State,
)

FFFF192020 = bytes([0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 255, 255, 192, 0, 2, 0])


@pytest.mark.parametrize(
    "host, expected",
    [
        (Host(), None),
        (Host(address="invalid"), None),
        (Host(address="2001:db8::"), None),
        (Host(address="192.0.2.0"), bytes([192, 0, 2, 0])),
        (Host(address="::ffff:192.0.2.0"), bytes([192, 0, 2, 0])),
    ],
    ids=["empty", "invalid-address", "IPv6", "IPv4", "ffff-IPv4"],
)
def test_address_bin(host, expected):
    assert host.address_bin() == expected


@pytest.mark.parametrize(
    "host, expected",
    [
        (Host(), None),
        (Host(address="invalid"), None),
        (Host(address6="2001:db8::"), bytes([32, 1, 13, 184] + [0] * 12)),
        (Host(address6="192.0.2.0"), FFFF192020),
        (Host(address6="::ffff:192.0.2.0"), FFFF192020),
    ],
    ids=["empty", "invalid-address", "IPv6", "IPv4", "ffff-IPv4"],
)
def test_address6_bin(host, expected):
    assert host.address6_bin() == expected


def test_address_with_zone_is_rejected():
    assert Host(address6="fe80::1%eth0").address6_bin() is None


def test_address_bin_follows_updates():
    host = Host(address="invalid")
    host.address = "192.0.2.0"
    assert host.address_bin() == bytes([192, 0, 2, 0])


def test_host_load():
    host = Host().load(
        {
            "id": "172a",
            "checksum": "2a",
            "name": "web1",
            "address": "192.0.2.0",
            "check_interval": 60,
            "active_checks_enabled": True,
            "max_check_attempts": 3,
        }
    )
    assert host.id == bytes([23, 42])
    assert host.checksum == bytes([42])
    assert host.name_ci == "web1"
    assert host.check_interval == 60.0
    assert host.active_checks_enabled is True
    assert host.max_check_attempts == 3
    assert host.address_bin() == bytes([192, 0, 2, 0])


def test_host_load_rejects_bad_types():
    with pytest.raises(ValueError):
        Host().load({"max_check_attempts": "three"})


def test_service_load():
    service = Service().load({"host_id": "17", "name": "ping", "is_volatile": False})
    assert service.host_id == bytes([23])
    assert service.is_volatile is False
    assert isinstance(service, Checkable)


def test_state_load():
    state = ServiceState().load(
        {
            "service_id": "2a",
            "host_id": "17",
            "hard_state": 2,
            "output": "CRITICAL",
            "is_problem": True,
            "execution_time": 1,
            "last_update": 1700000000000,
            "long_output": None,
        }
    )
    assert state.service_id == bytes([42])
    assert state.host_id == bytes([23])
    assert state.hard_state == 2
    assert state.output == "CRITICAL"
    assert state.is_problem is True
    assert state.execution_time == 1.0
    assert state.last_update == 1700000000000
    assert state.long_output is None
    assert isinstance(state, State)


def test_host_state_distinct_from_service_state():
    assert HostState() != ServiceState()
    assert HostState(host_id=b"\x01") == HostState(host_id=b"\x01")


def test_groups():
    group = Hostgroup().load({"name": "linux", "display_name": "Linux", "zone_id": "2a"})
    assert group.name_ci == "linux"
    assert group.zone_id == bytes([42])
    assert Servicegroup(name="linux") != Hostgroup(name="linux")


def test_group_member():
    member = HostgroupMember().load({"host_id": "17", "hostgroup_id": "2a", "environment_id": "17"})
    assert member == HostgroupMember(
        host_id=bytes([23]), hostgroup_id=bytes([42]), environment_id=bytes([23])
    )
import pytest

from icingadb.customvar import Customvar, CustomvarFlat, expand_customvars, flatten
from icingadb.meta import checksum


def test_flatten_nested():
    assert flatten({"a": [1, "s"]}, "v") == {"v.a[0]": "1", "v.a[1]": "s"}


def test_flatten_empty_containers():
    assert flatten({"m": {}, "l": []}, "v") == {"v.m": "{}", "v.l": "[]"}


def test_flatten_null_is_none():
    assert flatten(None, "v") == {"v": None}


def test_flatten_string_is_kept():
    assert flatten("text", "v") == {"v": "text"}


def test_flatten_large_number():
    assert flatten(1000000, "n") == {"n": "1e+06"}


def test_flatten_integral_float_matches_int():
    assert flatten(5.0, "n") == flatten(5, "n")


def test_flatten_keys_start_with_prefix():
    result = flatten({"a": {"b": [None, True, 2.5]}, "c": "x"}, "pre")
    assert len(result) == 4
    assert all(key.startswith("pre.") for key in result)


def _customvar(value):
    return Customvar(id=b"\x01", environment_id=b"\x02", name="cv", value=value)


def test_expand_customvars():
    cv = _customvar('{"a": [1, "s"], "b": null}')
    [(original, flats)] = list(expand_customvars([cv]))
    assert original is cv
    expected = flatten({"a": [1, "s"], "b": None}, "cv")
    assert {f.flatname: f.flatvalue for f in flats} == expected
    for flat in flats:
        assert flat.flatname_checksum == checksum(flat.flatname)
        assert flat.environment_id == b"\x02"
        assert flat.customvar_id == b"\x01"
    assert len({flat.id for flat in flats}) == len(flats)


def test_expand_customvars_is_deterministic():
    first = [flats for _, flats in expand_customvars([_customvar('{"k": "v"}')])]
    second = [flats for _, flats in expand_customvars([_customvar('{"k": "v"}')])]
    assert first == second


def test_expand_customvars_ids_depend_on_customvar():
    one = Customvar(id=b"\x01", name="cv", value='"v"')
    two = Customvar(id=b"\x03", name="cv", value='"v"')
    [(_, flats_one), (_, flats_two)] = list(expand_customvars([one, two]))
    assert flats_one[0].id != flats_two[0].id
    assert flats_one[0].flatname == flats_two[0].flatname


def test_expand_customvars_invalid_json():
    with pytest.raises(ValueError):
        list(expand_customvars([_customvar("{")]))


def test_expand_customvars_wrong_type():
    with pytest.raises(TypeError):
        list(expand_customvars([CustomvarFlat()]))


def test_customvar_load():
    cv = Customvar().load({"id": "17", "environment_id": "2a", "name": "os", "value": '"Linux"'})
    assert cv == Customvar(id=bytes([23]), environment_id=bytes([42]), name="os", value='"Linux"')
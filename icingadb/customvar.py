"""Custom variables and their flattened representation."""

import json
import math
import struct
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from icingadb.meta import (
    CustomvarMeta,
    EntityWithoutChecksum,
    EnvironmentMeta,
    NameMeta,
    checksum,
)


@dataclass(kw_only=True)
class Customvar(EntityWithoutChecksum, EnvironmentMeta, NameMeta):
    """A custom variable with its JSON encoded value."""

    value: str = ""


@dataclass(kw_only=True)
class CustomvarFlat(CustomvarMeta):
    """One leaf of a flattened custom variable."""

    flatname: str = ""
    flatname_checksum: bytes | None = None
    flatvalue: str | None = None


def _format_float(x: float) -> str:
    if math.isnan(x):
        return "NaN"
    if math.isinf(x):
        return "+Inf" if x > 0 else "-Inf"
    if x == 0:
        return "-0" if math.copysign(1.0, x) < 0 else "0"
    sign, digit_tuple, exponent = Decimal(repr(x)).as_tuple()
    raw = "".join(map(str, digit_tuple))
    digits = raw.rstrip("0")
    exponent += len(raw) - len(digits)
    nd = len(digits)
    dp = nd + exponent
    prefix = "-" if sign else ""
    exp = dp - 1
    if exp < -4 or exp >= 6:
        mantissa = digits[0] + ("." + digits[1:] if nd > 1 else "")
        return f"{prefix}{mantissa}e{'+' if exp >= 0 else '-'}{abs(exp):02d}"
    if dp <= 0:
        return f"{prefix}0.{'0' * -dp}{digits}"
    if dp >= nd:
        return f"{prefix}{digits}{'0' * (dp - nd)}"
    return f"{prefix}{digits[:dp]}.{digits[dp:]}"


def _format_scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        try:
            return _format_float(float(value))
        except OverflowError:
            return "+Inf" if value > 0 else "-Inf"
    return str(value)


def flatten(value: Any, prefix: str) -> dict[str, str | None]:
    """Flatten a decoded JSON value into dotted/indexed names and string leaves."""
    flattened: dict[str, str | None] = {}

    def visit(key: str, item: Any) -> None:
        if isinstance(item, Mapping):
            if not item:
                flattened[key] = "{}"
            for name, child in item.items():
                visit(f"{key}.{name}", child)
        elif isinstance(item, (list, tuple)):
            if not item:
                flattened[key] = "[]"
            for index, child in enumerate(item):
                visit(f"{key}[{index}]", child)
        elif item is None:
            flattened[key] = None
        else:
            flattened[key] = _format_scalar(item)

    visit(prefix, value)
    return flattened


def _pack_into(out: bytearray, value: Any) -> None:
    if value is None:
        out.append(0)
    elif isinstance(value, bool):
        out.append(2 if value else 1)
    elif isinstance(value, (int, float)):
        out.append(3)
        out += struct.pack(">d", float(value))
    elif isinstance(value, (str, bytes, bytearray)):
        data = value.encode() if isinstance(value, str) else bytes(value)
        out.append(4)
        out += len(data).to_bytes(8, "big")
        out += data
    elif isinstance(value, (list, tuple)):
        out.append(5)
        out += len(value).to_bytes(8, "big")
        for item in value:
            _pack_into(out, item)
    else:
        raise TypeError(f"can't pack value of type {type(value).__name__}")


def _pack(*values: Any) -> bytes:
    out = bytearray()
    _pack_into(out, list(values))
    return bytes(out)


def expand_customvars(
    customvars: Iterable[Customvar],
) -> Iterator[tuple[Customvar, list[CustomvarFlat]]]:
    """Yield each custom variable together with its flat custom variables."""
    for customvar in customvars:
        if not isinstance(customvar, Customvar):
            raise TypeError(f"expected Customvar, got {type(customvar).__name__}")
        try:
            value = json.loads(customvar.value)
        except ValueError as exc:
            raise ValueError(f"can't decode custom variable {customvar.name!r}: {exc}") from exc

        flats = [
            CustomvarFlat(
                id=checksum(_pack(customvar.environment_id, customvar.id, flatname, flatvalue)),
                environment_id=customvar.environment_id,
                customvar_id=customvar.id,
                flatname=flatname,
                flatname_checksum=checksum(flatname),
                flatvalue=flatvalue,
            )
            for flatname, flatvalue in flatten(value, customvar.name).items()
        ]
        yield customvar, flats
"""Base entity types shared by all synchronised Icinga DB objects."""

import dataclasses
import functools
import hashlib
import json
import re
import types
import typing
from collections import ChainMap
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

_HEX = re.compile(r"(?:[0-9a-fA-F]{2})*")
_ENVIRONMENT_KEY = object()
_NAMED_TYPES = {"bytes": bytes, "str": str, "int": int, "float": float, "bool": bool}


def parse_binary(text: str) -> bytes:
    """Decode a hex encoded identifier or checksum."""
    if not isinstance(text, str) or _HEX.fullmatch(text) is None:
        raise ValueError(f"can't create ID from value {text!r}")
    return bytes.fromhex(text)


def checksum(value: str | bytes) -> bytes:
    """Return the SHA-1 digest of a string or of raw bytes."""
    if isinstance(value, str):
        value = value.encode()
    elif not isinstance(value, (bytes, bytearray)):
        raise TypeError(f"can't checksum value of type {type(value).__name__}")
    return hashlib.sha1(value).digest()


def _unwrap_text(hint: str) -> tuple[Any, bool]:
    hint = hint.strip()
    match = re.fullmatch(r"(?:typing\.)?Optional\[(.*)\]", hint)
    if match:
        base, _ = _unwrap_text(match.group(1))
        return base, True
    parts = [part.strip() for part in hint.split("|")]
    nullable = "None" in parts
    rest = [part for part in parts if part != "None"]
    if len(rest) == 1:
        return _NAMED_TYPES.get(rest[0], Any), nullable
    return Any, nullable


def _unwrap(hint: Any) -> tuple[Any, bool]:
    if isinstance(hint, str):
        return _unwrap_text(hint)
    origin = typing.get_origin(hint)
    if origin is typing.Union or origin is types.UnionType:
        args = [arg for arg in typing.get_args(hint) if arg is not type(None)]
        nullable = len(args) != len(typing.get_args(hint))
        return (args[0] if len(args) == 1 else Any), nullable
    if hint in (bytes, str, int, float, bool):
        return hint, False
    return Any, False


def _convert(base: Any, value: Any) -> Any:
    if base is Any:
        return value
    if base is bytes:
        if isinstance(value, str):
            return parse_binary(value)
    elif base is bool:
        if isinstance(value, bool):
            return value
    elif base is int:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    elif base is float:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
    elif base is str:
        if isinstance(value, str):
            return value
    raise ValueError(f"expected {base.__name__}, got {value!r}")


@functools.cache
def _schema(cls: type) -> dict[str, tuple[str, Any, bool]]:
    schema = {}
    for f in dataclasses.fields(cls):
        base, nullable = _unwrap(f.type)
        schema[f.metadata.get("json", f.name)] = (f.name, base, nullable)
    return schema


@dataclass(kw_only=True)
class Entity:
    """An object that is decoded from its JSON representation."""

    def fingerprint(self) -> "Entity":
        """Return the part of the entity that identifies it."""
        return self

    def load(self, data: Mapping[str, Any] | str | bytes) -> "Entity":
        """Fill the entity from a JSON object (text or decoded mapping) and return it."""
        if isinstance(data, (str, bytes, bytearray)):
            data = json.loads(data)
        if not isinstance(data, Mapping):
            raise ValueError(f"expected a JSON object, got {data!r}")
        schema = _schema(type(self))
        for key, value in data.items():
            spec = schema.get(key)
            if spec is None:
                continue
            attr, base, nullable = spec
            if value is None:
                if nullable:
                    setattr(self, attr, None)
                continue
            try:
                setattr(self, attr, _convert(base, value))
            except ValueError as exc:
                raise ValueError(f"can't decode {key!r}: {exc}") from exc
        return self


@dataclass(kw_only=True)
class EntityWithoutChecksum(Entity):
    """An entity identified by an ID only."""

    id: bytes | None = None


@dataclass(kw_only=True)
class EntityWithChecksum(EntityWithoutChecksum):
    """An entity carrying a checksum of its properties."""

    checksum: bytes | None = None


@dataclass(kw_only=True)
class EnvironmentMeta:
    """Fields of objects that belong to an environment."""

    environment_id: bytes | None = None


@dataclass(kw_only=True)
class NameMeta:
    """Fields of objects with a name."""

    name: str = ""
    name_checksum: bytes | None = None


@dataclass(kw_only=True)
class NameCiMeta(NameMeta):
    """Fields of objects with a case insensitive name."""

    @property
    def name_ci(self) -> str:
        """The name, stored in a case insensitive column."""
        return self.name


@dataclass(kw_only=True)
class CustomvarMeta(EntityWithoutChecksum, EnvironmentMeta):
    """Link between an object and one of its custom variables."""

    customvar_id: bytes | None = None


@dataclass(kw_only=True)
class GroupMeta(EntityWithChecksum, EnvironmentMeta, NameCiMeta):
    """Fields of objects that represent a group."""

    display_name: str = ""
    zone_id: bytes | None = None


@dataclass(kw_only=True)
class MemberMeta(EntityWithoutChecksum, EnvironmentMeta):
    """Fields of objects that represent a group membership."""


@dataclass(kw_only=True)
class Environment(EntityWithoutChecksum):
    """An Icinga DB environment."""

    name: str | None = None

    def new_context(self, parent: Mapping[Any, Any]) -> ChainMap:
        """Return a context that carries this environment on top of parent."""
        return ChainMap({_ENVIRONMENT_KEY: self}, parent)

    def meta(self) -> EnvironmentMeta:
        """Return the environment fields that refer to this environment."""
        return EnvironmentMeta(environment_id=self.id)


def environment_from_context(ctx: Mapping[Any, Any]) -> Environment | None:
    """Return the environment stored in ctx; raise LookupError if there is none."""
    try:
        return ctx[_ENVIRONMENT_KEY]
    except KeyError:
        raise LookupError("context carries no environment") from None
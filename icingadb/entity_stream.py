"""Creating entities from Redis hash pairs and attaching their checksums."""

from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import Any

from icingadb.meta import Entity, parse_binary


def _text(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode()
    return value


def create_entities(
    factory: Callable[[], Entity], pairs: Iterable[tuple[Any, Any]]
) -> Iterator[Entity]:
    """Yield an entity for each (hex ID, JSON value) pair; raise ValueError on bad input."""
    for field, value in pairs:
        field = _text(field)
        try:
            entity_id = parse_binary(field)
        except ValueError as exc:
            raise ValueError(f"can't create ID from value {field!r}") from exc

        entity = factory()
        entity.load(_text(value))
        entity.id = entity_id
        yield entity


def set_checksums(
    entities: Iterable[Entity], checksums: Mapping[str, Any]
) -> Iterator[Entity]:
    """Yield each entity with the checksum of its counterpart keyed by hex ID."""
    for entity in entities:
        source = checksums.get(entity.id.hex() if entity.id is not None else "")
        if source is None:
            raise ValueError(f"no checksum for {entity!r}")
        entity.checksum = source.checksum
        yield entity
"""Dotted/wildcarded field paths and their insertion into a property tree.

``items.*.sku`` parses to ``[Literal("items"), ARRAY, Literal("sku")]`` and
lands as ``items: Array{items: Object{properties: {sku: ...}}}``. Fields
sharing an array prefix become siblings in one item object.
"""

import logging
from dataclasses import dataclass

from .nodes import ArrayNode, ObjectNode, Primitive, SchemaNode, array_of_objects

logger = logging.getLogger(__name__)

WILDCARD_SEPARATOR = ".*."


@dataclass(frozen=True)
class Literal:
    name: str


@dataclass(frozen=True)
class ArraySegment:
    pass


ARRAY = ArraySegment()

Segment = Literal | ArraySegment


def parse_field_path(field: str) -> list[Segment]:
    """Split a field path on the wildcard separator into typed segments."""
    segments: list[Segment] = []
    for i, name in enumerate(field.split(WILDCARD_SEPARATOR)):
        if i:
            segments.append(ARRAY)
        segments.append(Literal(name))
    return segments


def _item_object(existing: SchemaNode | None) -> ObjectNode | None:
    """Return the item object to descend into, or None if the node is incompatible."""
    if isinstance(existing, ArrayNode) and isinstance(existing.items, ObjectNode):
        return existing.items
    return None


def insert_field(properties: dict[str, SchemaNode], segments: list[Segment], leaf: Primitive, field: str = "") -> bool:
    """Merge ``leaf`` into ``properties`` at the position named by ``segments``.

    Returns False when the path collides with an incompatible existing node;
    the first structure seen wins and the insertion is dropped.
    """
    head, rest = segments[0], segments[1:]
    name = head.name

    if not rest:
        existing = properties.get(name)
        if isinstance(existing, (ArrayNode, ObjectNode)):
            logger.debug("Field %r: keeping nested schema over leaf of type %s", field or name, leaf.type)
            return False
        properties[name] = leaf
        return True

    existing = properties.get(name)
    if existing is None or (isinstance(existing, Primitive) and existing.type == "array"):
        # A bare `array` leaf and its `.*.` children describe the same list
        properties[name] = array_of_objects()
    item = _item_object(properties[name])
    if item is None:
        logger.debug("Field %r: %r is not an array of objects, skipping", field or name, name)
        return False

    # rest[0] is the ARRAY marker
    return insert_field(item.properties, rest[1:], leaf, field)


def resolve_field(properties: dict[str, SchemaNode], field: str, leaf: Primitive) -> bool:
    return insert_field(properties, parse_field_path(field), leaf, field)

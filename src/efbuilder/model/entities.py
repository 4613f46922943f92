# Copyright 2026 EFBuilder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entity and property definitions produced by the parser and consumed by the generator."""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############


class PropertyDefinition(BaseModel):
    """A single property line of an entity definition.

    A property is either a scalar (``referenced_entity`` is None) or a
    reference to another entity, lowered to a key column of ``clr_type``
    plus a navigation property. Lines that cannot be classified are kept
    with ``parse_error`` set so their position is not lost.
    """

    name: str = ""
    clr_type: str | None = None
    referenced_entity: str | None = None
    referenced_column: str | None = None
    max_length: int | None = None
    is_nullable: bool = False
    default_value: str | None = None
    is_unique: bool = False
    is_auto_increment: bool = False
    child_collection: str | None = None
    parse_error: bool = False
    parse_exception: str | None = None
    line: int | None = None

    @property
    def is_reference(self) -> bool:
        """Return True if the property points at another entity."""
        return bool(self.referenced_entity)


class EntityDefinition(BaseModel):
    """One entity parsed from a single entity source."""

    name: str
    base_class: str | None = None
    properties: list[PropertyDefinition] = _Field(default_factory=list)
    comments: str | None = None

    @property
    def references(self) -> list[PropertyDefinition]:
        """Reference properties in declaration order."""
        return [p for p in self.properties if p.is_reference]


def index_by_name(entities: Iterable[EntityDefinition]) -> dict[str, EntityDefinition]:
    """Map lower-cased entity names to their definitions.

    The first definition wins when two entities share a name.
    """
    index: dict[str, EntityDefinition] = {}
    for entity in entities:
        index.setdefault(entity.name.lower(), entity)
    return index

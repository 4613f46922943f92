# Copyright 2026 EFBuilder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Line-oriented parser for entity definition sources.

An entity source is a header line ``Name [: BaseClass]`` followed by one
property per line. Property lines are classified independently: prefix and
suffix markers are stripped first, then the remaining text is matched
against the supported property shapes::

    line := ["#"] core ["=" default]
    core := Name                               text scalar, or FK when Name ends in "Id"
          | Name Type[(Length)]                typed scalar
          | Name Entity <Collection            reference with explicit collection
          | NameId <Collection                 inferred reference with explicit collection
          | Name Entity.Column [<Collection]   reference to a non-default key column

with ``?`` (nullable) and ``++`` (auto-increment) allowed at the end of
``core`` or before the ``<Collection`` hint.
"""

from __future__ import annotations

import logging
import re

from efbuilder.model.entities import EntityDefinition, PropertyDefinition
from efbuilder.model.naming import ID_SUFFIX, is_implicit_key
from efbuilder.model.types import KEY_TYPE, TEXT_TYPE, map_type_name

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class ParseError(Exception):
    """Raised when an entity source cannot be parsed at all.

    Attributes:
        line: 1-based line number of the error, if known.
    """

    def __init__(self, message: str, line: int | None = None) -> None:
        super().__init__(f"Line {line}: {message}" if line is not None else message)
        self.line = line


class EmptyDefinitionError(ParseError):
    """Raised when a source contains no non-blank lines."""

    def __init__(self) -> None:
        super().__init__("No entity definition found")


class InvalidHeaderError(ParseError):
    """Raised when the first line is not of the form ``Name [: BaseClass]``.

    Attributes:
        header: The offending header text.
    """

    def __init__(self, header: str, line: int) -> None:
        super().__init__(f"Invalid entity header: {header}", line)
        self.header = header


def parse(source: str) -> EntityDefinition:
    """Parse one entity source into an EntityDefinition.

    Unclassifiable property lines do not abort parsing; they are kept as
    properties with ``parse_error`` set.

    Args:
        source: The full text of a single entity source.

    Returns:
        The entity with its properties in declaration order.

    Raises:
        EmptyDefinitionError: If the source has no non-blank lines.
        InvalidHeaderError: If the header line is malformed.
    """
    lines = _significant_lines(source)
    if not lines:
        raise EmptyDefinitionError()

    header_line, header = lines[0]
    match = _HEADER.match(header)
    if match is None:
        raise InvalidHeaderError(header, header_line)

    entity = EntityDefinition(name=match.group(1), base_class=match.group(2))
    for line_number, text in lines[1:]:
        entity.properties.append(parse_property(text, line=line_number))

    logger.debug("Parsed entity %s with %d properties", entity.name, len(entity.properties))
    return entity


def parse_property(text: str, line: int | None = None) -> PropertyDefinition:
    """Classify a single property line.

    Args:
        text: The property line, with or without surrounding whitespace.
        line: Optional 1-based line number recorded on the result.

    Returns:
        A PropertyDefinition. If no shape matches, ``parse_error`` is set and
        ``parse_exception`` explains why.
    """
    prop = PropertyDefinition(line=line)
    core = text.strip()

    if core.startswith("#"):
        prop.is_unique = True
        core = core[1:].strip()

    core, separator, default = core.partition("=")
    if separator:
        prop.default_value = default.strip() or None
        core = core.strip()

    core = _strip_markers(core, prop)

    collection: str | None = None
    hint = _COLLECTION_HINT.match(core)
    if hint is not None:
        core, collection = hint.group(1), hint.group(2)
        core = _strip_markers(core, prop)

    error = _classify(core, collection, prop)
    if error is not None:
        prop.parse_error = True
        prop.parse_exception = f"{error}: {text.strip()}"
        logger.debug("Line %s: %s", line, prop.parse_exception)
    return prop


# ################
# Implementation
# ################

_HEADER = re.compile(r"^(\w+)\s*(?::\s*(\w+))?$")
_COLLECTION_HINT = re.compile(r"^(.*?)\s*<\s*(\w+)$")
_BARE = re.compile(r"^(\w+)$")
_CUSTOM_REFERENCE = re.compile(r"^(\w+)\s+(\w+)\.(\w+)$")
_ENTITY_REFERENCE = re.compile(r"^(\w+)\s+(\w+)$")
_TYPED_SCALAR = re.compile(r"^(\w+)\s+(\w+(?:\[\])?)(?:\(\s*(\d+)\s*\))?$")

_UNPARSEABLE = "Could not parse property line"
_MAX_LENGTH_DIGITS = 9


def _significant_lines(source: str) -> list[tuple[int, str]]:
    """Return ``(line_number, text)`` for every non-blank line, trimmed."""
    return [(number, text.strip()) for number, text in enumerate(source.splitlines(), start=1) if text.strip()]


def _strip_markers(core: str, prop: PropertyDefinition) -> str:
    """Strip trailing ``++`` and ``?`` markers in any order, flagging *prop*."""
    while True:
        if core.endswith("++"):
            prop.is_auto_increment = True
            core = core[:-2].rstrip()
        elif core.endswith("?"):
            prop.is_nullable = True
            core = core[:-1].rstrip()
        else:
            return core


def _make_reference(prop: PropertyDefinition, entity: str, collection: str | None) -> str | None:
    if prop.name == ID_SUFFIX:
        return f"Property '{ID_SUFFIX}' cannot be a reference"
    prop.referenced_entity = entity
    prop.clr_type = KEY_TYPE
    prop.child_collection = collection
    return None


def _classify(core: str, collection: str | None, prop: PropertyDefinition) -> str | None:
    """Match *core* against the property shapes, filling in *prop*.

    Returns None on success, otherwise a short error description.
    """
    bare = _BARE.match(core)
    if bare is not None:
        prop.name = bare.group(1)
        if is_implicit_key(prop.name):
            return _make_reference(prop, prop.name[: -len(ID_SUFFIX)], collection)
        if collection is not None:
            return f"Cannot infer the referenced entity of '{prop.name}'"
        prop.clr_type = TEXT_TYPE
        return None

    custom = _CUSTOM_REFERENCE.match(core)
    if custom is not None:
        prop.name = custom.group(1)
        prop.referenced_column = custom.group(3)
        return _make_reference(prop, custom.group(2), collection)

    if collection is not None:
        reference = _ENTITY_REFERENCE.match(core)
        if reference is None:
            return _UNPARSEABLE
        prop.name = reference.group(1)
        return _make_reference(prop, reference.group(2), collection)

    typed = _TYPED_SCALAR.match(core)
    if typed is None:
        return _UNPARSEABLE
    prop.name = typed.group(1)
    prop.clr_type = map_type_name(typed.group(2))
    if typed.group(3) is not None:
        digits = typed.group(3).lstrip("0")
        if len(digits) > _MAX_LENGTH_DIGITS:
            return "Max length is out of range"
        length = int(digits or "0")
        if length <= 0:
            return "Max length must be a positive integer"
        prop.max_length = length
    return None

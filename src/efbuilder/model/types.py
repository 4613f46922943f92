# Copyright 2026 EFBuilder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Primitive type table for property declarations."""

# ###############
# Public Interface
# ###############

# Type used for text properties; drives required/max-length handling.
TEXT_TYPE = "string"

# Type of the stored key column behind a reference property.
KEY_TYPE = "int"

# Lower-cased DSL spelling -> emitted CLR type name.
PRIMITIVE_TYPES: dict[str, str] = {
    "string": "string",
    "int": "int",
    "long": "long",
    "short": "short",
    "byte": "byte",
    "bool": "bool",
    "decimal": "decimal",
    "float": "float",
    "double": "double",
    "char": "char",
    "guid": "Guid",
    "datetime": "DateTime",
    "datetimeoffset": "DateTimeOffset",
    "dateonly": "DateOnly",
    "timeonly": "TimeOnly",
    "byte[]": "byte[]",
}


def map_type_name(type_name: str) -> str:
    """Return the CLR type for a DSL type name.

    Lookup is case-insensitive. Names missing from the table are returned
    unchanged so callers can use their own types (enums, value objects).
    """
    return PRIMITIVE_TYPES.get(type_name.lower(), type_name)


def is_text_type(clr_type: str | None) -> bool:
    """Return True if *clr_type* is the text type."""
    return clr_type == TEXT_TYPE

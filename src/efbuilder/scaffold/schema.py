# Copyright 2026 EFBuilder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Translation of relational table metadata into entity sources.

The input is table metadata that has already been read from a database
catalog (``INFORMATION_SCHEMA`` on SQL Server). Each table becomes one entity
source in the same notation a user would write by hand, so scaffolded
sources go through the regular compiler unchanged.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field

from efbuilder.model.naming import ID_SUFFIX, pluralize, strip_id_suffix
from efbuilder.model.types import TEXT_TYPE
from efbuilder.sources.providers import EntitySource

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

DEFAULT_BASE_CLASS = "BaseTable"

# CLR type used for columns whose SQL type has no mapping.
FALLBACK_TYPE = "object"

# Lower-cased SQL Server data type -> CLR type.
SQL_SERVER_TYPES: dict[str, str] = {
    "varchar": "string",
    "nvarchar": "string",
    "char": "string",
    "nchar": "string",
    "text": "string",
    "ntext": "string",
    "int": "int",
    "bigint": "long",
    "smallint": "short",
    "tinyint": "byte",
    "decimal": "decimal",
    "numeric": "decimal",
    "money": "decimal",
    "smallmoney": "decimal",
    "float": "double",
    "real": "float",
    "bit": "bool",
    "datetime": "DateTime",
    "datetime2": "DateTime",
    "smalldatetime": "DateTime",
    "date": "DateOnly",
    "time": "TimeOnly",
    "datetimeoffset": "DateTimeOffset",
    "uniqueidentifier": "Guid",
    "binary": "byte[]",
    "varbinary": "byte[]",
    "image": "byte[]",
    "timestamp": "byte[]",
    "rowversion": "byte[]",
}


@dataclass(frozen=True)
class ColumnInfo:
    """One column of a table.

    Attributes:
        name: Column name.
        data_type: SQL data type name, e.g. ``nvarchar``.
        is_nullable: Whether the column accepts NULL.
        max_length: Character length for text columns; None, 0 or -1 mean unbounded.
        default_value: Raw default expression as stored in the catalog, e.g. ``((1))``.
        is_identity: Whether the database generates the value.
    """

    name: str
    data_type: str
    is_nullable: bool = False
    max_length: int | None = None
    default_value: str | None = None
    is_identity: bool = False


@dataclass(frozen=True)
class ForeignKeyInfo:
    """A single-column foreign key."""

    column_name: str
    referenced_table: str


@dataclass(frozen=True)
class TableSchema:
    """Metadata of one table, columns in ordinal order."""

    name: str
    columns: list[ColumnInfo] = field(default_factory=list)
    foreign_keys: list[ForeignKeyInfo] = field(default_factory=list)
    primary_keys: list[str] = field(default_factory=list)
    unique_columns: list[str] = field(default_factory=list)


def map_sql_type(data_type: str) -> str:
    """Return the CLR type for a SQL Server data type, or :data:`FALLBACK_TYPE`."""
    return SQL_SERVER_TYPES.get(data_type.lower(), FALLBACK_TYPE)


def parse_default_value(default_value: str | None, data_type: str) -> str | None:
    """Normalise a catalog default expression into a property default.

    Surrounding parentheses and quotes are removed. Bit defaults become
    ``true``/``false``, numeric defaults are kept verbatim and text defaults
    are double-quoted. Date functions and defaults of other types are
    dropped (None).
    """
    if default_value is None or not default_value.strip():
        return None

    value = default_value.strip().strip("()'\"")
    if value[:2].upper() == "N'":
        value = value[2:]
    if value.lower() in _DATE_FUNCTIONS:
        return None

    data_type = data_type.lower()
    if data_type == "bit":
        return "true" if value == "1" else "false"
    if data_type in _NUMERIC_TYPES:
        return value
    if data_type in _TEXT_TYPES:
        return f'"{value}"'
    return None


def render_table_source(table: TableSchema, base_class: str | None = DEFAULT_BASE_CLASS) -> str:
    """Render the entity source for one table.

    A single primary key column named ``Id`` is omitted, since the generated
    class gets it from its base class or adds it itself.

    Args:
        table: The table metadata.
        base_class: Base class written into the header; None for no base class.

    Returns:
        The entity source, one line per property, newline terminated.
    """
    header = f"{table.name} : {base_class}" if base_class else table.name
    lines = [header]

    foreign_keys = {fk.column_name.lower(): fk for fk in table.foreign_keys}
    target_counts = Counter(fk.referenced_table.lower() for fk in table.foreign_keys)
    primary_keys = {name.lower() for name in table.primary_keys}
    unique_columns = {name.lower() for name in table.unique_columns}

    for column in table.columns:
        key = column.name.lower()
        if primary_keys == {key} and column.name == ID_SUFFIX:
            continue

        unique = "#" if key in unique_columns and key not in primary_keys else ""
        fk = foreign_keys.get(key)
        if fk is not None:
            collection = _collection_name(table, column, fk, target_counts[fk.referenced_table.lower()] > 1)
            core = f"{column.name} {fk.referenced_table}{_markers(column)} <{collection}"
        else:
            core = f"{column.name} {_type_declaration(column)}{_markers(column)}"

        default = parse_default_value(column.default_value, column.data_type) if fk is None else None
        lines.append(f"{unique}{core}" + (f" = {default}" if default is not None else ""))

    logger.debug("Scaffolded table %s with %d columns", table.name, len(table.columns))
    return "\n".join(lines) + "\n"


class SchemaSourceProvider:
    """Serves one entity source per table, ordered by table name."""

    def __init__(self, tables: Iterable[TableSchema], base_class: str | None = DEFAULT_BASE_CLASS) -> None:
        self.tables = sorted(tables, key=lambda t: t.name)
        self.base_class = base_class

    def get_sources(self) -> list[EntitySource]:
        return [EntitySource(table.name, render_table_source(table, self.base_class)) for table in self.tables]


# ################
# Implementation
# ################

_DATE_FUNCTIONS = frozenset({"getdate", "getutcdate", "sysdatetime", "sysutcdatetime"})
_NUMERIC_TYPES = frozenset(
    {"int", "bigint", "smallint", "tinyint", "decimal", "numeric", "money", "smallmoney", "float", "real"}
)
_TEXT_TYPES = frozenset({"varchar", "nvarchar", "char", "nchar", "text", "ntext"})


def _type_declaration(column: ColumnInfo) -> str:
    clr_type = map_sql_type(column.data_type)
    if clr_type == TEXT_TYPE and column.max_length is not None and column.max_length > 0:
        return f"{clr_type}({column.max_length})"
    return clr_type


def _markers(column: ColumnInfo) -> str:
    return ("?" if column.is_nullable else "") + ("++" if column.is_identity else "")


def _collection_name(table: TableSchema, column: ColumnInfo, fk: ForeignKeyInfo, shared_target: bool) -> str:
    """Name of the collection the referenced table exposes for this key.

    When a table references the same target through several columns, the
    column name (minus ``Id`` and the target name) prefixes the collection.
    """
    collection = pluralize(table.name)
    if not shared_target:
        return collection
    prefix = strip_id_suffix(column.name)
    if prefix.lower().endswith(fk.referenced_table.lower()) and len(prefix) > len(fk.referenced_table):
        prefix = prefix[: -len(fk.referenced_table)]
    return f"{prefix}{collection}"

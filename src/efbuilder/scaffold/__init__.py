# Copyright 2026 EFBuilder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Scaffolding of entity sources from database table metadata."""

from efbuilder.scaffold.schema import (
    DEFAULT_BASE_CLASS,
    SQL_SERVER_TYPES,
    ColumnInfo,
    ForeignKeyInfo,
    SchemaSourceProvider,
    TableSchema,
    map_sql_type,
    parse_default_value,
    render_table_source,
)

__all__ = [
    "DEFAULT_BASE_CLASS",
    "SQL_SERVER_TYPES",
    "ColumnInfo",
    "ForeignKeyInfo",
    "SchemaSourceProvider",
    "TableSchema",
    "map_sql_type",
    "parse_default_value",
    "render_table_source",
]

# Copyright 2026 EFBuilder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entity model shared by the parser, resolver and generator."""

from efbuilder.model.entities import EntityDefinition, PropertyDefinition, index_by_name
from efbuilder.model.naming import is_implicit_key, pluralize, strip_id_suffix
from efbuilder.model.types import KEY_TYPE, PRIMITIVE_TYPES, TEXT_TYPE, is_text_type, map_type_name

__all__ = [
    # Entities
    "EntityDefinition",
    "PropertyDefinition",
    "index_by_name",
    # Types
    "KEY_TYPE",
    "PRIMITIVE_TYPES",
    "TEXT_TYPE",
    "is_text_type",
    "map_type_name",
    # Naming
    "is_implicit_key",
    "pluralize",
    "strip_id_suffix",
]

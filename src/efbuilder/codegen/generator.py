# Copyright 2026 EFBuilder Contributors
# SPDX-License-Identifier: Apache-2.0

"""C# code generation for resolved entity batches.

Each entity becomes one ``.cs`` file holding the entity class and its
``IEntityTypeConfiguration<T>`` mapping class. Output is assembled as an
ordered list of lines and joined once, so identical input always yields
byte-identical text.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import NamedTuple

from pydantic import BaseModel

from efbuilder.model.entities import EntityDefinition, PropertyDefinition
from efbuilder.model.naming import ID_SUFFIX, strip_id_suffix
from efbuilder.model.types import is_text_type

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

FILE_EXTENSION = ".cs"

CORE_USINGS: tuple[str, ...] = (
    "Microsoft.EntityFrameworkCore",
    "Microsoft.EntityFrameworkCore.Metadata.Builders",
)


class GeneratorSettings(BaseModel):
    """Options that shape the generated code.

    Attributes:
        identity_type: Type of the ``Id`` property added to entities without
            a base class.
        default_namespace: Namespace stamped into every generated file.
        base_class_namespace: Namespace imported by entities that have a
            base class, e.g. ``MyApp.Data.Conventions``.
    """

    identity_type: str = "int"
    default_namespace: str = "Generated"
    base_class_namespace: str | None = None


class GeneratedFile(NamedTuple):
    """A rendered entity: target file name and its content."""

    filename: str
    content: str


def render_all(settings: GeneratorSettings, entities: list[EntityDefinition]) -> list[GeneratedFile]:
    """Render every entity of a resolved batch, in batch order."""
    return [
        GeneratedFile(f"{entity.name}{FILE_EXTENSION}", render_entity(settings, entity, entities))
        for entity in entities
    ]


def render_entity(
    settings: GeneratorSettings,
    entity: EntityDefinition,
    all_entities: list[EntityDefinition],
) -> str:
    """Render the entity class and mapping class for one entity.

    Args:
        settings: Generator options.
        entity: The entity to render; must come from a resolved batch.
        all_entities: The whole batch, scanned for references to *entity*
            to emit its child collections.

    Returns:
        The C# source text, terminated by a newline.
    """
    lines: list[str] = []
    lines.extend(f"using {namespace};" for namespace in _usings(settings, entity))
    lines.append("")
    lines.append(f"namespace {settings.default_namespace};")
    lines.append("")

    lines.extend(_entity_class(settings, entity, all_entities))
    lines.append("")
    lines.extend(_configuration_class(entity))
    return "\n".join(lines) + "\n"


def write_files(files: list[GeneratedFile], output_dir: Path, *, overwrite: bool = False) -> list[Path]:
    """Write rendered files into *output_dir*.

    Existing files are left untouched unless *overwrite* is set.

    Returns:
        The paths that were written.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for generated in files:
        path = output_dir / generated.filename
        if path.exists() and not overwrite:
            logger.warning("'%s' already exists, skipping", path)
            continue
        path.write_text(generated.content, encoding="utf-8")
        logger.debug("Wrote %s", path)
        written.append(path)
    return written


# ################
# Implementation
# ################

_INDENT = "\t"


def _usings(settings: GeneratorSettings, entity: EntityDefinition) -> list[str]:
    namespaces = list(CORE_USINGS)
    if entity.base_class and settings.base_class_namespace:
        namespaces.append(settings.base_class_namespace)
    return namespaces


def _renderable(entity: EntityDefinition) -> list[PropertyDefinition]:
    return [p for p in entity.properties if not p.parse_error]


def _entity_class(
    settings: GeneratorSettings,
    entity: EntityDefinition,
    all_entities: list[EntityDefinition],
) -> list[str]:
    declaration = f"public class {entity.name}"
    if entity.base_class:
        declaration += f" : {entity.base_class}"

    lines = [declaration, "{"]
    lines.extend(_scalar_properties(settings, entity))
    navigation = _parent_navigations(entity) + _child_collections(entity, all_entities)
    if navigation:
        lines.append("")
        lines.extend(navigation)
    lines.append("}")
    return lines


def _scalar_properties(settings: GeneratorSettings, entity: EntityDefinition) -> list[str]:
    properties = _renderable(entity)
    lines: list[str] = []
    if not entity.base_class and all(p.name.lower() != ID_SUFFIX.lower() for p in properties):
        lines.append(f"{_INDENT}public {settings.identity_type} {ID_SUFFIX} {{ get; set; }}")
    for prop in properties:
        nullable = "?" if prop.is_nullable else ""
        lines.append(f"{_INDENT}public {prop.clr_type}{nullable} {prop.name} {{ get; set; }}{_initializer(prop)}")
    return lines


def _initializer(prop: PropertyDefinition) -> str:
    if prop.default_value:
        return f" = {prop.default_value};"
    if is_text_type(prop.clr_type) and not prop.is_nullable:
        return " = default!;"
    return ""


def _parent_navigations(entity: EntityDefinition) -> list[str]:
    return [
        f"{_INDENT}public {prop.referenced_entity}? {strip_id_suffix(prop.name)} {{ get; set; }}"
        for prop in _renderable(entity)
        if prop.is_reference
    ]


def _child_collections(entity: EntityDefinition, all_entities: list[EntityDefinition]) -> list[str]:
    target = entity.name.lower()
    seen: set[str] = set()
    lines: list[str] = []
    for owner in all_entities:
        for prop in _renderable(owner):
            if not prop.is_reference or not prop.child_collection:
                continue
            assert prop.referenced_entity is not None
            if prop.referenced_entity.lower() != target or prop.child_collection in seen:
                continue
            seen.add(prop.child_collection)
            lines.append(f"{_INDENT}public ICollection<{owner.name}> {prop.child_collection} {{ get; set; }} = [];")
    return lines


def _configuration_class(entity: EntityDefinition) -> list[str]:
    name = entity.name
    lines = [
        f"public class {name}Configuration : IEntityTypeConfiguration<{name}>",
        "{",
        f"{_INDENT}public void Configure(EntityTypeBuilder<{name}> builder)",
        f"{_INDENT}{{",
    ]
    groups = [
        _property_constraints(entity),
        _unique_index(entity),
        _relationships(entity),
    ]
    body: list[str] = []
    for group in groups:
        if not group:
            continue
        if body:
            body.append("")
        body.extend(f"{_INDENT * 2}{statement}" for statement in group)
    lines.extend(body)
    lines.append(f"{_INDENT}}}")
    lines.append("}")
    return lines


def _property_constraints(entity: EntityDefinition) -> list[str]:
    properties = _renderable(entity)
    statements: list[str] = []
    for prop in properties:
        if is_text_type(prop.clr_type) and not prop.is_nullable:
            max_length = f".HasMaxLength({prop.max_length})" if prop.max_length is not None else ""
            statements.append(f"builder.Property(x => x.{prop.name}).IsRequired(){max_length};")
    for prop in properties:
        if is_text_type(prop.clr_type) and prop.is_nullable and prop.max_length is not None:
            statements.append(f"builder.Property(e => e.{prop.name}).HasMaxLength({prop.max_length});")
    for prop in properties:
        if prop.is_auto_increment:
            statements.append(f"builder.Property(e => e.{prop.name}).ValueGeneratedOnAdd();")
    return statements


def _unique_index(entity: EntityDefinition) -> list[str]:
    unique = [p for p in _renderable(entity) if p.is_unique]
    if not unique:
        return []
    if len(unique) == 1:
        return [f"builder.HasIndex(e => e.{unique[0].name}).IsUnique();"]
    members = ", ".join(f"e.{p.name}" for p in unique)
    return [f"builder.HasIndex(e => new {{ {members} }}).IsUnique();"]


def _relationships(entity: EntityDefinition) -> list[str]:
    statements: list[str] = []
    for prop in _renderable(entity):
        if not prop.is_reference:
            continue
        principal_key = f".HasPrincipalKey(e => e.{prop.referenced_column})" if prop.referenced_column else ""
        statements.append(
            f"builder.HasOne(e => e.{strip_id_suffix(prop.name)})"
            f".WithMany(e => e.{prop.child_collection})"
            f".HasForeignKey(x => x.{prop.name})"
            f"{principal_key}"
            ".OnDelete(DeleteBehavior.Restrict);"
        )
    return statements

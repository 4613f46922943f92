# Copyright 2026 EFBuilder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Cross-entity resolution and semantic checks for a parsed batch.

Resolution wires each reference to the entity it targets: the target name is
normalised to its declared spelling and the reference is given the name of
the collection the target exposes back. Analysis then reports problems in
the resolved batch without changing it.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from efbuilder.model.entities import EntityDefinition, index_by_name
from efbuilder.model.naming import ID_SUFFIX, pluralize, strip_id_suffix

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class SemanticError:
    """A problem that makes the batch unfit for code generation.

    Attributes:
        message: Human-readable description of the error.
    """

    message: str


@dataclass(frozen=True)
class SemanticWarning:
    """A suspicious construct that still generates code.

    Attributes:
        message: Human-readable description of the warning.
    """

    message: str


@dataclass
class AnalysisResult:
    """Result of analysing a resolved batch.

    Attributes:
        errors: Problems that should block generation.
        warnings: Non-fatal findings.
    """

    errors: list[SemanticError] = field(default_factory=list)
    warnings: list[SemanticWarning] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Return True if any errors were found."""
        return len(self.errors) > 0


def resolve_references(
    entities: list[EntityDefinition],
    index: dict[str, EntityDefinition] | None = None,
) -> None:
    """Resolve every reference property of a batch in place.

    Must run once, after every entity of the batch has been parsed.

    - A reference whose target matches a batch entity (case-insensitively)
      is rewritten to the entity's declared name.
    - A reference without an explicit collection gets the pluralised name of
      its owning entity as ``child_collection``.

    References to entities outside the batch are left as they are.

    Args:
        entities: The parsed batch.
        index: Optional lower-cased name index of *entities*; built when omitted.
    """
    if index is None:
        index = index_by_name(entities)
    for entity in entities:
        for prop in entity.references:
            assert prop.referenced_entity is not None
            target = index.get(prop.referenced_entity.lower())
            if target is not None:
                prop.referenced_entity = target.name
            if not prop.child_collection:
                prop.child_collection = pluralize(entity.name)


def analyze(
    entities: list[EntityDefinition],
    index: dict[str, EntityDefinition] | None = None,
) -> AnalysisResult:
    """Check a resolved batch.

    Errors:
    - Property lines that could not be parsed.
    - Duplicate property names within an entity (case-insensitive).
    - Navigation names that collide with a property or with the entity
      name itself.

    Warnings:
    - References to entities that are not part of the batch.
    - References to a key column the target entity does not declare.
    - One collection name claimed on the same target by two different
      owning entities, or by two properties of the same entity.

    Args:
        entities: The resolved batch.
        index: Optional lower-cased name index of *entities*.

    Returns:
        An :class:`AnalysisResult`; empty when the batch is clean.
    """
    if index is None:
        index = index_by_name(entities)
    result = AnalysisResult()
    for entity in entities:
        result.errors.extend(_check_parse_errors(entity))
        result.errors.extend(_check_duplicate_properties(entity))
        result.errors.extend(_check_navigation_names(entity))
        result.warnings.extend(_check_references(entity, index))
    result.warnings.extend(_check_collection_clashes(entities))
    return result


# ################
# Implementation
# ################


def _check_parse_errors(entity: EntityDefinition) -> list[SemanticError]:
    errors: list[SemanticError] = []
    for prop in entity.properties:
        if prop.parse_error:
            location = f"line {prop.line}" if prop.line is not None else "unknown line"
            errors.append(SemanticError(f"Entity '{entity.name}', {location}: {prop.parse_exception}"))
    return errors


def _check_duplicate_properties(entity: EntityDefinition) -> list[SemanticError]:
    errors: list[SemanticError] = []
    seen: set[str] = set()
    for prop in entity.properties:
        if prop.parse_error:
            continue
        key = prop.name.lower()
        if key in seen:
            errors.append(SemanticError(f"Duplicate property name '{prop.name}' in entity '{entity.name}'"))
        seen.add(key)
    return errors


def _check_navigation_names(entity: EntityDefinition) -> list[SemanticError]:
    errors: list[SemanticError] = []
    names = {p.name.lower() for p in entity.properties if not p.parse_error}
    for prop in entity.references:
        if prop.parse_error:
            continue
        navigation = strip_id_suffix(prop.name)
        if navigation.lower() == entity.name.lower():
            errors.append(
                SemanticError(
                    f"Entity '{entity.name}': navigation '{navigation}' of property '{prop.name}' "
                    f"has the same name as its entity"
                )
            )
        elif navigation.lower() in names:
            errors.append(
                SemanticError(
                    f"Entity '{entity.name}': navigation '{navigation}' of property '{prop.name}' "
                    f"collides with a property of the same name"
                )
            )
    return errors


def _check_references(entity: EntityDefinition, index: dict[str, EntityDefinition]) -> list[SemanticWarning]:
    warnings: list[SemanticWarning] = []
    for prop in entity.references:
        assert prop.referenced_entity is not None
        target = index.get(prop.referenced_entity.lower())
        if target is None:
            warnings.append(
                SemanticWarning(
                    f"Entity '{entity.name}': property '{prop.name}' references unknown entity "
                    f"'{prop.referenced_entity}'"
                )
            )
            continue
        if prop.referenced_column is None:
            continue
        columns = {p.name.lower() for p in target.properties if not p.parse_error}
        if prop.referenced_column.lower() not in columns and prop.referenced_column != ID_SUFFIX:
            warnings.append(
                SemanticWarning(
                    f"Entity '{entity.name}': property '{prop.name}' references column "
                    f"'{prop.referenced_column}' which entity '{target.name}' does not declare"
                )
            )
    return warnings


def _check_collection_clashes(entities: list[EntityDefinition]) -> list[SemanticWarning]:
    warnings: list[SemanticWarning] = []
    owners: dict[tuple[str, str], tuple[str, str]] = {}
    for entity in entities:
        for prop in entity.references:
            assert prop.referenced_entity is not None
            if not prop.child_collection:
                continue
            key = (prop.referenced_entity.lower(), prop.child_collection)
            owner, owner_prop = owners.setdefault(key, (entity.name, prop.name))
            if owner != entity.name:
                claimants = f"both '{owner}' and '{entity.name}'"
            elif owner_prop != prop.name:
                claimants = f"both '{owner}.{owner_prop}' and '{entity.name}.{prop.name}'"
            else:
                continue
            warnings.append(
                SemanticWarning(
                    f"Collection '{prop.child_collection}' on entity '{prop.referenced_entity}' is claimed by "
                    f"{claimants}"
                )
            )
    return warnings

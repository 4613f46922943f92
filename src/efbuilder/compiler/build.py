# Copyright 2026 EFBuilder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Batch compilation of entity sources.

Compilation runs in two explicit passes: every source of the batch is
parsed first, then references are resolved across the whole batch. Entities
refer to each other by name only, so mutually referencing entities need no
special handling.

Failures in the DSL never escape :func:`parse_entities` as exceptions: a
source with a broken header is reported in the returned error list, and an
unclassifiable property line is kept on its entity with ``parse_error`` set.
:func:`compile_sources` turns both kinds into a single :class:`CompilerError`
before anything is rendered.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from efbuilder.codegen.generator import GeneratedFile, GeneratorSettings, render_all
from efbuilder.compiler.parser import ParseError, parse
from efbuilder.compiler.semantic_analysis import AnalysisResult, analyze, resolve_references
from efbuilder.model.entities import EntityDefinition, index_by_name

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class CompilerError(Exception):
    """Raised when a batch cannot be turned into code.

    Attributes:
        errors: The individual error messages.
    """

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


def parse_entities(sources: Iterable[tuple[str, str]]) -> tuple[list[EntityDefinition], list[str]]:
    """Parse and resolve a batch of entity sources.

    Args:
        sources: ``(name, content)`` pairs, one per entity. The name is only
            used to attribute errors.

    Returns:
        The resolved entities in source order, and one ``"{name}: {message}"``
        error per source that was rejected (missing or malformed header, or an
        entity name already defined earlier in the batch).
    """
    entities: list[EntityDefinition] = []
    errors: list[str] = []
    defined_in: dict[str, str] = {}

    for name, content in sources:
        try:
            entity = parse(content)
        except ParseError as exc:
            logger.debug("Rejected entity source %s: %s", name, exc)
            errors.append(f"{name}: {exc}")
            continue

        key = entity.name.lower()
        if key in defined_in:
            errors.append(f"{name}: Duplicate entity name '{entity.name}' (already defined in '{defined_in[key]}')")
            continue
        defined_in[key] = name
        entities.append(entity)

    resolve_references(entities, index_by_name(entities))
    logger.debug("Parsed %d entities, %d errors", len(entities), len(errors))
    return entities, errors


def check_sources(sources: Iterable[tuple[str, str]]) -> tuple[list[EntityDefinition], list[str], AnalysisResult]:
    """Parse a batch and analyse the result without rendering it.

    Returns:
        The resolved entities, the batch errors of :func:`parse_entities`,
        and the :class:`AnalysisResult` for the entities that did parse.
    """
    entities, errors = parse_entities(sources)
    return entities, errors, analyze(entities)


def compile_sources(sources: Iterable[tuple[str, str]], settings: GeneratorSettings) -> list[GeneratedFile]:
    """Parse, resolve, check and render a batch of entity sources.

    Args:
        sources: ``(name, content)`` pairs, one per entity.
        settings: Generator options.

    Returns:
        One generated file per entity, in source order.

    Raises:
        CompilerError: If any source was rejected or any property line could
            not be parsed. Nothing is rendered in that case.
    """
    entities, errors, result = check_sources(sources)
    for warning in result.warnings:
        logger.warning(warning.message)

    errors = errors + [error.message for error in result.errors]
    if errors:
        error_lines = "\n".join(f"  {error}" for error in errors)
        raise CompilerError(f"Cannot generate code, {len(errors)} error(s):\n{error_lines}", errors)

    return render_all(settings, entities)

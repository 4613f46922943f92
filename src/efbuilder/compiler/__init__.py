# Copyright 2026 EFBuilder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Compiler pipeline for entity sources: parsing, resolution, and analysis."""

from efbuilder.compiler.artifact import ARTIFACT_SUFFIX, deserialize, read_artifact, serialize, write_artifact
from efbuilder.compiler.build import CompilerError, check_sources, compile_sources, parse_entities
from efbuilder.compiler.parser import EmptyDefinitionError, InvalidHeaderError, ParseError, parse, parse_property
from efbuilder.compiler.semantic_analysis import (
    AnalysisResult,
    SemanticError,
    SemanticWarning,
    analyze,
    resolve_references,
)

__all__ = [
    "parse",
    "parse_property",
    "ParseError",
    "EmptyDefinitionError",
    "InvalidHeaderError",
    "resolve_references",
    "analyze",
    "AnalysisResult",
    "SemanticError",
    "SemanticWarning",
    "parse_entities",
    "check_sources",
    "compile_sources",
    "CompilerError",
    "serialize",
    "deserialize",
    "write_artifact",
    "read_artifact",
    "ARTIFACT_SUFFIX",
]

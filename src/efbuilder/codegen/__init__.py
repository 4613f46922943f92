# Copyright 2026 EFBuilder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Code generation for resolved entity batches."""

from efbuilder.codegen.generator import (
    CORE_USINGS,
    FILE_EXTENSION,
    GeneratedFile,
    GeneratorSettings,
    render_all,
    render_entity,
    write_files,
)

__all__ = [
    "CORE_USINGS",
    "FILE_EXTENSION",
    "GeneratedFile",
    "GeneratorSettings",
    "render_all",
    "render_entity",
    "write_files",
]

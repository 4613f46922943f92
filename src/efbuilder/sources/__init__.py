# Copyright 2026 EFBuilder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entity source providers."""

from efbuilder.sources.providers import (
    DEFAULT_SOURCE_PATTERN,
    DirectorySourceProvider,
    EntitySource,
    InMemorySourceProvider,
    SourceProvider,
)

__all__ = [
    "DEFAULT_SOURCE_PATTERN",
    "DirectorySourceProvider",
    "EntitySource",
    "InMemorySourceProvider",
    "SourceProvider",
]

# Copyright 2026 EFBuilder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Providers that supply entity sources to the compiler.

A provider returns one ``(name, content)`` pair per entity. The name is a
label used for error attribution only; it is never parsed.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import NamedTuple, Protocol

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

DEFAULT_SOURCE_PATTERN = "*.md"


class EntitySource(NamedTuple):
    """The raw text of one entity definition and the label it came from."""

    name: str
    content: str


class SourceProvider(Protocol):
    """Anything that can enumerate entity sources."""

    def get_sources(self) -> list[EntitySource]:
        """Return the entity sources in a stable order."""
        ...


class InMemorySourceProvider:
    """Serves a fixed list of ``(name, content)`` pairs."""

    def __init__(self, sources: Iterable[tuple[str, str]]) -> None:
        self._sources = [EntitySource(name, content) for name, content in sources]

    def get_sources(self) -> list[EntitySource]:
        return list(self._sources)


class DirectorySourceProvider:
    """Reads one entity per file from a directory.

    Files matching *pattern* are returned sorted by file name, labelled with
    their stem. A missing directory yields no sources; files that cannot be
    read are logged and skipped.
    """

    def __init__(self, directory: Path, pattern: str = DEFAULT_SOURCE_PATTERN) -> None:
        self.directory = directory
        self.pattern = pattern

    def get_sources(self) -> list[EntitySource]:
        if not self.directory.is_dir():
            logger.debug("Source directory '%s' does not exist", self.directory)
            return []

        sources: list[EntitySource] = []
        for path in sorted(self.directory.glob(self.pattern), key=lambda p: p.name):
            if not path.is_file():
                continue
            try:
                content = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                logger.warning("Could not read entity source '%s': %s", path, exc)
                continue
            sources.append(EntitySource(path.stem, content))

        logger.debug("Found %d entity sources in '%s'", len(sources), self.directory)
        return sources

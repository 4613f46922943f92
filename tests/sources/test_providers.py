# Copyright 2026 EFBuilder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for entity source providers."""

import logging
from pathlib import Path

import pytest

from efbuilder.sources.providers import DirectorySourceProvider, EntitySource, InMemorySourceProvider

# ###############
# In-memory provider
# ###############


def test_in_memory_provider_keeps_order() -> None:
    provider = InMemorySourceProvider([("B", "B\nName"), ("A", "A\nName")])
    assert provider.get_sources() == [EntitySource("B", "B\nName"), EntitySource("A", "A\nName")]


def test_in_memory_provider_returns_a_copy() -> None:
    provider = InMemorySourceProvider([("A", "A")])
    provider.get_sources().clear()
    assert len(provider.get_sources()) == 1


# ###############
# Directory provider
# ###############


def test_directory_provider_reads_sorted_markdown_files(tmp_path: Path) -> None:
    (tmp_path / "Species.md").write_text("Species\nName", encoding="utf-8")
    (tmp_path / "Breed.md").write_text("Breed\nAppSpeciesId", encoding="utf-8")
    (tmp_path / "notes.txt").write_text("ignored", encoding="utf-8")

    sources = DirectorySourceProvider(tmp_path).get_sources()

    assert sources == [
        EntitySource("Breed", "Breed\nAppSpeciesId"),
        EntitySource("Species", "Species\nName"),
    ]


def test_directory_provider_custom_pattern(tmp_path: Path) -> None:
    (tmp_path / "Clinic.entity").write_text("Clinic", encoding="utf-8")
    (tmp_path / "Clinic.md").write_text("Other", encoding="utf-8")

    sources = DirectorySourceProvider(tmp_path, "*.entity").get_sources()

    assert sources == [EntitySource("Clinic", "Clinic")]


def test_directory_provider_ignores_directories(tmp_path: Path) -> None:
    (tmp_path / "folder.md").mkdir()
    assert DirectorySourceProvider(tmp_path).get_sources() == []


def test_directory_provider_missing_directory(tmp_path: Path) -> None:
    assert DirectorySourceProvider(tmp_path / "missing").get_sources() == []


def test_directory_provider_skips_unreadable_files(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    (tmp_path / "Bad.md").write_bytes(b"\xff\xfe\xfa invalid utf-8")
    (tmp_path / "Good.md").write_text("Good", encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="efbuilder"):
        sources = DirectorySourceProvider(tmp_path).get_sources()

    assert [s.name for s in sources] == ["Good"]
    assert "Bad.md" in caplog.text

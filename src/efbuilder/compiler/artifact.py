# Copyright 2026 EFBuilder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Serialization of resolved entity batches.

Artifacts are JSON documents holding the full entity model after
resolution, for inspection or for feeding other tools. The format is
versioned so future schema changes can be detected.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from efbuilder.model.entities import EntityDefinition

# ###############
# Public Interface
# ###############

ARTIFACT_FORMAT_VERSION = "1"
ARTIFACT_SUFFIX = ".efmodel.json"


def serialize(entities: list[EntityDefinition]) -> str:
    """Serialize a batch to an indented JSON string.

    Unset optional attributes and ``False`` flags are omitted.
    """
    document = {
        "v": ARTIFACT_FORMAT_VERSION,
        "entities": [_entity_to_dict(entity) for entity in entities],
    }
    return json.dumps(document, indent=2) + "\n"


def deserialize(data: str) -> list[EntityDefinition]:
    """Deserialize a batch from a JSON string produced by :func:`serialize`.

    Raises:
        ValueError: If the document is not valid JSON, has an unknown format
            version, or does not describe entities.
    """
    try:
        document = json.loads(data)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid artifact: {exc}") from exc

    version = document.get("v") if isinstance(document, dict) else None
    if version != ARTIFACT_FORMAT_VERSION:
        raise ValueError(f"Unsupported artifact format version: {version!r}")

    try:
        return [EntityDefinition.model_validate(entity) for entity in document.get("entities", [])]
    except ValidationError as exc:
        raise ValueError(f"Invalid artifact: {exc}") from exc


def write_artifact(entities: list[EntityDefinition], path: Path) -> None:
    """Write an artifact to *path*, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(serialize(entities), encoding="utf-8")


def read_artifact(path: Path) -> list[EntityDefinition]:
    """Read and deserialize an artifact from *path*."""
    return deserialize(path.read_text(encoding="utf-8"))


# ################
# Implementation
# ################


def _entity_to_dict(entity: EntityDefinition) -> dict[str, Any]:
    d: dict[str, Any] = entity.model_dump(exclude={"properties"}, exclude_none=True)
    d["properties"] = [
        {key: value for key, value in prop.model_dump(exclude_none=True).items() if value is not False}
        for prop in entity.properties
    ]
    return d

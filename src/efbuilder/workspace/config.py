# Copyright 2026 EFBuilder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML persistence for the EFBuilder workspace configuration file."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from efbuilder.codegen.generator import GeneratorSettings
from efbuilder.sources.providers import DEFAULT_SOURCE_PATTERN

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = ".efbuilder.yaml"


class WorkspaceConfigError(Exception):
    """Raised when a workspace configuration file cannot be read, written, or is invalid."""


class WorkspaceConfig(BaseModel):
    """The settings stored alongside a directory of entity sources.

    Attributes:
        default_namespace: Namespace of the generated classes.
        base_class_namespace: Namespace imported by entities with a base class.
        identity_type: Type of the implicit ``Id`` property.
        output_directory: Where generated files go, relative to the workspace root.
        source_pattern: Glob selecting entity source files.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    default_namespace: str = Field(alias="default-namespace", default="Generated")
    base_class_namespace: str | None = Field(alias="base-class-namespace", default=None)
    identity_type: str = Field(alias="identity-type", default="int")
    output_directory: str = Field(alias="output-directory", default="Generated")
    source_pattern: str = Field(alias="source-pattern", default=DEFAULT_SOURCE_PATTERN)

    def to_generator_settings(self) -> GeneratorSettings:
        """Return the generator options carried by this configuration."""
        return GeneratorSettings(
            identity_type=self.identity_type,
            default_namespace=self.default_namespace,
            base_class_namespace=self.base_class_namespace,
        )


def load_workspace_config(path: Path) -> WorkspaceConfig:
    """Load and validate a workspace configuration file.

    A missing or empty file yields the default configuration.

    Args:
        path: Path to the ``.efbuilder.yaml`` file.

    Returns:
        A validated WorkspaceConfig instance.

    Raises:
        WorkspaceConfigError: If the file cannot be read, contains invalid
            YAML, or does not conform to the expected schema.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return WorkspaceConfig()
    except OSError as exc:
        raise WorkspaceConfigError(f"Cannot read workspace config '{path}': {exc}") from exc

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise WorkspaceConfigError(f"Invalid YAML in workspace config '{path}': {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise WorkspaceConfigError(f"{path}: workspace config must be a YAML mapping")

    try:
        return WorkspaceConfig.model_validate(data)
    except ValidationError as exc:
        raise WorkspaceConfigError(f"Invalid workspace config '{path}': {exc}") from exc


def save_workspace_config(config: WorkspaceConfig, path: Path) -> None:
    """Write a workspace configuration file.

    Unset optional keys are omitted.

    Raises:
        WorkspaceConfigError: If the file cannot be written.
    """
    data = config.model_dump(by_alias=True, exclude_none=True)
    try:
        path.write_text(yaml.dump(data, default_flow_style=False, sort_keys=True), encoding="utf-8")
    except OSError as exc:
        raise WorkspaceConfigError(f"Cannot write workspace config '{path}': {exc}") from exc

# Copyright 2026 EFBuilder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Naming heuristics shared by the resolver, the generator and the scaffolder."""

# ###############
# Public Interface
# ###############

ID_SUFFIX = "Id"


def pluralize(name: str) -> str:
    """Return the collection name for *name*.

    Appends ``s`` unless the name already ends in ``s`` (any case). This is
    a fixed heuristic, not an English pluraliser: ``Species`` stays
    ``Species`` and ``Category`` becomes ``Categorys``.
    """
    if name.lower().endswith("s"):
        return name
    return name + "s"


def is_implicit_key(name: str) -> bool:
    """Return True if a bare property name denotes a foreign key.

    The name must end in ``Id`` and must not be exactly ``Id``.
    """
    return name.endswith(ID_SUFFIX) and name != ID_SUFFIX


def strip_id_suffix(name: str) -> str:
    """Drop a trailing ``Id`` (any case) from a property name."""
    if len(name) > len(ID_SUFFIX) and name.lower().endswith(ID_SUFFIX.lower()):
        return name[: -len(ID_SUFFIX)]
    return name

# Copyright 2026 EFBuilder Contributors
# SPDX-License-Identifier: Apache-2.0

"""EFBuilder: compile compact entity definitions into Entity Framework Core code."""

__version__ = "0.1.0"

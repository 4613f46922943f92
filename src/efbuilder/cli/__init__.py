# Copyright 2026 EFBuilder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Command-line interface for EFBuilder."""

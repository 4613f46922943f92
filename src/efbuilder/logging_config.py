# Copyright 2026 EFBuilder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Logging configuration for the command-line entry point.

Library modules only create loggers via ``logging.getLogger(__name__)``;
handlers are installed here, once, by the CLI.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

# ###############
# Public Interface
# ###############

DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level: int = logging.WARNING,
    log_file: Path | None = None,
    format_string: str | None = None,
) -> logging.Logger:
    """Install a stderr handler (and optionally a file handler) on the root logger.

    Existing root handlers are removed so repeated calls do not duplicate output.

    Args:
        level: Level for the root logger and the console handler.
        log_file: Optional file receiving all records at DEBUG and above.
        format_string: Optional override of :data:`DEFAULT_FORMAT`.

    Returns:
        The configured root logger.
    """
    formatter = logging.Formatter(format_string or DEFAULT_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(console_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
        root_logger.setLevel(min(level, logging.DEBUG))
    else:
        root_logger.setLevel(level)

    return root_logger

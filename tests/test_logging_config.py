# Copyright 2026 EFBuilder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the logging setup used by the CLI."""

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from efbuilder.logging_config import setup_logging


@pytest.fixture(autouse=True)
def _restore_root_logger() -> Iterator[None]:
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_single_console_handler() -> None:
    setup_logging()
    setup_logging()
    root = logging.getLogger()
    assert len(root.handlers) == 1
    assert root.level == logging.WARNING


def test_level_is_applied(capsys: pytest.CaptureFixture[str]) -> None:
    setup_logging(logging.DEBUG)
    logging.getLogger("efbuilder.test").debug("parsed entity")
    err = capsys.readouterr().err
    assert "DEBUG" in err
    assert "efbuilder.test" in err
    assert "parsed entity" in err


def test_custom_format(capsys: pytest.CaptureFixture[str]) -> None:
    setup_logging(logging.INFO, format_string="%(levelname)s:%(message)s")
    logging.getLogger("efbuilder.test").info("hello")
    assert "INFO:hello" in capsys.readouterr().err


def test_log_file_receives_debug(tmp_path: Path) -> None:
    log_file = tmp_path / "efbuilder.log"
    setup_logging(logging.WARNING, log_file=log_file)
    logging.getLogger("efbuilder.test").debug("to file only")
    for handler in logging.getLogger().handlers:
        handler.flush()
    assert "to file only" in log_file.read_text(encoding="utf-8")

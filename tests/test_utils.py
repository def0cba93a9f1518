"""Tests for the helper modules under :mod:`grove.utils`."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from grove.services.settings import Settings
from grove.utils import file_io, logging as logging_utils


@pytest.fixture
def package_logger() -> Iterator[logging.Logger]:
    logger = logging.getLogger("grove")
    handlers = list(logger.handlers)
    yield logger
    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(logging.NOTSET)


def test_write_bytes_atomic_replaces_target(tmp_path: Path) -> None:
    target = tmp_path / "out" / "data.bin"

    returned = file_io.write_bytes(target, b"first")
    file_io.write_bytes(target, b"second")

    assert returned == target
    assert target.read_bytes() == b"second"
    assert [p.name for p in target.parent.iterdir()] == ["data.bin"]


def test_write_bytes_non_atomic(tmp_path: Path) -> None:
    target = tmp_path / "plain.txt"

    file_io.write_bytes(target, b"plain", atomic=False)

    assert target.read_bytes() == b"plain"


def test_setup_logging_writes_to_the_configured_directory(tmp_path: Path, package_logger: logging.Logger) -> None:
    settings = Settings(log_dir=str(tmp_path / "logs"))

    log_path = logging_utils.setup_logging(settings, console=False)

    logging.getLogger("grove.tests").info("Logging smoke test")
    for handler in package_logger.handlers:
        handler.flush()

    assert log_path == tmp_path / "logs" / "grove.log"
    assert log_path == logging_utils.log_path_for(settings)
    assert "Logging smoke test" in log_path.read_text(encoding="utf-8")
    assert package_logger.level == logging.INFO
    assert all(getattr(h, "baseFilename", None) != str(log_path) for h in logging.getLogger().handlers)


def test_debug_logging_setting_lowers_the_level(tmp_path: Path, package_logger: logging.Logger) -> None:
    logging_utils.setup_logging(Settings(log_dir=str(tmp_path), debug_logging=True), console=False)

    assert package_logger.level == logging.DEBUG


def test_debug_flag_overrides_settings(tmp_path: Path, package_logger: logging.Logger) -> None:
    logging_utils.setup_logging(Settings(log_dir=str(tmp_path)), debug=True, console=False)

    assert package_logger.level == logging.DEBUG


def test_setup_logging_twice_replaces_its_handlers(tmp_path: Path, package_logger: logging.Logger) -> None:
    before = len(package_logger.handlers)

    logging_utils.setup_logging(Settings(log_dir=str(tmp_path / "first")), console=False)
    second = logging_utils.setup_logging(Settings(log_dir=str(tmp_path / "second")), console=False)

    assert len(package_logger.handlers) == before + 1
    assert package_logger.handlers[-1].baseFilename == str(second)


def test_log_path_defaults_to_home_directory() -> None:
    assert logging_utils.log_path_for(Settings()) == Path.home() / ".grove" / "logs" / "grove.log"

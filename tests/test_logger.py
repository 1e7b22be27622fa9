"""Test the logger factory."""
import logging
from pathlib import Path

import pytest

from calculator_microservice.common.logger import close_logger, create_logger


@pytest.fixture
def logger(tmp_path: Path):
    """Logger writing under a temporary log directory."""
    log = create_logger(tmp_path / "logs", name="test-calculator-logger")
    yield log
    close_logger(log)


def test_creates_log_directory(logger: logging.Logger, tmp_path: Path) -> None:
    """The log directory and both files exist once the logger is built."""
    log_dir = tmp_path / "logs"
    assert (log_dir / "combined.log").exists()
    assert (log_dir / "error.log").exists()


def test_levels_routed_to_files(logger: logging.Logger, tmp_path: Path) -> None:
    """Info goes to combined.log only, errors go to both files."""
    logger.info("Addition: 1.0 + 2.0 = 3.0")
    logger.error("Invalid num1 value: abc")

    combined = (tmp_path / "logs" / "combined.log").read_text()
    errors = (tmp_path / "logs" / "error.log").read_text()

    assert "[INFO] test-calculator-logger: Addition: 1.0 + 2.0 = 3.0" in combined
    assert "[ERROR] test-calculator-logger: Invalid num1 value: abc" in combined
    assert "Invalid num1 value: abc" in errors
    assert "Addition" not in errors


def test_files_are_appended(tmp_path: Path) -> None:
    """Rebuilding the logger keeps previous records."""
    first = create_logger(tmp_path, name="test-calculator-append")
    first.info("first run")
    second = create_logger(tmp_path, name="test-calculator-append")
    second.info("second run")
    close_logger(first)
    close_logger(second)

    combined = (tmp_path / "combined.log").read_text()
    assert "first run" in combined
    assert "second run" in combined


def test_each_call_builds_its_own_logger(tmp_path: Path) -> None:
    """Loggers with the same name stay independent and outside the registry."""
    first = create_logger(tmp_path / "a")
    second = create_logger(tmp_path / "b")
    assert first is not second
    assert first is not logging.getLogger(first.name)
    assert len(first.handlers) == 3
    assert len(second.handlers) == 3

    first.info("only in a")
    close_logger(first)
    close_logger(second)

    assert first.handlers == []
    assert "only in a" in (tmp_path / "a" / "combined.log").read_text()
    assert "only in a" not in (tmp_path / "b" / "combined.log").read_text()


def test_level_filters_records(tmp_path: Path) -> None:
    log = create_logger(tmp_path, level="ERROR", name="test-calculator-level")
    log.info("hidden")
    log.error("shown")
    close_logger(log)

    combined = (tmp_path / "combined.log").read_text()
    assert "hidden" not in combined
    assert "shown" in combined

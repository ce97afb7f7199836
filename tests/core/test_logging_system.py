"""Tests for logging setup."""

import copy
import logging
import logging.config
from collections.abc import Iterator
from pathlib import Path

import pytest

from airportgen.core.logging_system import DEFAULT_CONFIG, get_logger, initialize_logging


@pytest.fixture(autouse=True)
def restore_logging() -> Iterator[None]:
    """Restore the default configuration after each test."""
    yield
    logging.config.dictConfig(copy.deepcopy(DEFAULT_CONFIG))


class TestInitializeLogging:
    """Test initialize_logging()."""

    def test_defaults_without_file(self) -> None:
        """Test the built-in configuration is used without a file."""
        assert initialize_logging() is False
        assert logging.getLogger("airportgen").level == logging.INFO

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test a missing file falls back to defaults."""
        assert initialize_logging(tmp_path / "logging.yaml") is False

    def test_yaml_file(self, tmp_path: Path) -> None:
        """Test a YAML dictConfig file is applied."""
        path = tmp_path / "logging.yaml"
        path.write_text(
            "version: 1\n"
            "disable_existing_loggers: false\n"
            "loggers:\n"
            "  airportgen:\n"
            "    level: WARNING\n",
            encoding="utf-8",
        )

        assert initialize_logging(path) is True
        assert logging.getLogger("airportgen").level == logging.WARNING

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        """Test an invalid file falls back to defaults."""
        path = tmp_path / "logging.yaml"
        path.write_text("version: [unclosed\n", encoding="utf-8")

        assert initialize_logging(path) is False
        assert logging.getLogger("airportgen").level == logging.INFO

    def test_level_override(self) -> None:
        """Test the level override."""
        initialize_logging(level="debug")
        assert logging.getLogger("airportgen").level == logging.DEBUG


def test_get_logger() -> None:
    """Test module loggers share the package hierarchy."""
    package_logger = logging.getLogger("airportgen")
    assert get_logger("airportgen.layout").parent is package_logger

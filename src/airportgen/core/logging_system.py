"""Logging setup.

Configures the standard logging tree either from a YAML ``dictConfig`` file
or from a built-in console configuration.

Typical usage:
    from airportgen.core.logging_system import get_logger, initialize_logging

    initialize_logging("config/logging.yaml")
    logger = get_logger(__name__)
    logger.info("Ready")
"""

import copy
import logging
import logging.config
from pathlib import Path
from typing import Any

import yaml

DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

DEFAULT_CONFIG: dict[str, Any] = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {"default": {"format": DEFAULT_FORMAT}},
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "default",
            "stream": "ext://sys.stderr",
        }
    },
    "root": {"level": "WARNING", "handlers": ["console"]},
    "loggers": {"airportgen": {"level": "INFO"}},
}


def initialize_logging(config_path: str | Path | None = None, level: str | None = None) -> bool:
    """Configure logging.

    Args:
        config_path: YAML dictConfig file. The built-in configuration is used
            when it is None, missing or invalid.
        level: Optional level override for the ``airportgen`` logger (e.g. "DEBUG").

    Returns:
        True if the YAML file was applied, False if the defaults were used.
    """
    applied = False
    if config_path is not None and Path(config_path).exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                logging.config.dictConfig(yaml.safe_load(f))
            applied = True
        except (OSError, yaml.YAMLError, ValueError, TypeError) as e:
            logging.config.dictConfig(copy.deepcopy(DEFAULT_CONFIG))
            logging.getLogger(__name__).warning("Invalid logging config %s: %s", config_path, e)
    else:
        logging.config.dictConfig(copy.deepcopy(DEFAULT_CONFIG))

    if level is not None:
        logging.getLogger("airportgen").setLevel(level.upper())

    return applied


def get_logger(name: str) -> logging.Logger:
    """Get a module logger."""
    return logging.getLogger(name)

"""Logging configuration for pipeline-xray.

Loggers are obtained through Prefect's logger factory so trace recording
inside Prefect flows and tasks shows up next to the flow's own output.
Prefect nests every name under its own ``prefect`` logger, so the module
logger for ``pipeline_xray.recorder`` is ``prefect.pipeline_xray.recorder``
and all of them share the parent ``prefect.pipeline_xray``.

Configuration is a ``logging.config.dictConfig`` mapping loaded from YAML or
built from defaults.

Usage:
    >>> from pipeline_xray.logging import get_pipeline_logger
    >>> logger = get_pipeline_logger(__name__)
    >>> logger.info("Trace saved")

Environment variables:
    XRAY_LOGGING_CONFIG: Path to a custom logging.yml
    XRAY_LOG_LEVEL: Level for pipeline_xray loggers (INFO, DEBUG, ...)
    PREFECT_LOGGING_LEVEL: Prefect's logging level
    PREFECT_LOGGING_SETTINGS_PATH: Fallback config path
"""

import logging.config
import os
from pathlib import Path
from typing import Any

import yaml
from prefect.logging import get_logger

PACKAGE_LOGGER = "pipeline_xray"
PACKAGE_LOGGER_QUALNAME = f"prefect.{PACKAGE_LOGGER}"
"""Name under which Prefect registers the package logger; configure this one in YAML."""

_CONFIG_PATH_VARIABLES = ("XRAY_LOGGING_CONFIG", "PREFECT_LOGGING_SETTINGS_PATH")


def _default_config() -> dict[str, Any]:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "%(asctime)s.%(msecs)03d | %(levelname)-7s | %(name)s - %(message)s",
                "datefmt": "%H:%M:%S",
            },
        },
        "handlers": {
            # stdout is reserved for CLI output
            "stderr": {
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "stream": "ext://sys.stderr",
            },
        },
        "loggers": {
            PACKAGE_LOGGER_QUALNAME: {
                "level": os.environ.get("XRAY_LOG_LEVEL", "INFO"),
                "handlers": ["stderr"],
                "propagate": False,
            },
        },
        "root": {"level": "WARNING", "handlers": ["stderr"]},
    }


class LoggingConfig:
    """A dictConfig mapping and where it came from.

    The source is, in order: the explicit ``config_path``, then the first of
    ``XRAY_LOGGING_CONFIG`` / ``PREFECT_LOGGING_SETTINGS_PATH`` that is set,
    then the built-in defaults (stderr console, ``XRAY_LOG_LEVEL`` for the
    package, WARNING for root). A path that does not exist also yields the
    defaults. The mapping is read once per instance.
    """

    def __init__(self, config_path: Path | None = None):
        self.config_path = config_path or self._path_from_environment()
        self._config: dict[str, Any] | None = None

    @staticmethod
    def _path_from_environment() -> Path | None:
        for variable in _CONFIG_PATH_VARIABLES:
            if value := os.environ.get(variable):
                return Path(value)
        return None

    def load_config(self) -> dict[str, Any]:
        if self._config is None:
            if self.config_path is not None and self.config_path.exists():
                self._config = yaml.safe_load(self.config_path.read_text(encoding="utf-8"))
            else:
                self._config = _default_config()
        return self._config

    def apply(self) -> None:
        """Install the mapping with ``logging.config.dictConfig``.

        A ``prefect`` logger level in the mapping is exported as
        ``PREFECT_LOGGING_LEVEL`` unless the environment already sets it.
        """
        config = self.load_config()
        logging.config.dictConfig(config)

        prefect_logger = config.get("loggers", {}).get("prefect")
        if prefect_logger is not None:
            os.environ.setdefault("PREFECT_LOGGING_LEVEL", prefect_logger.get("level", "INFO"))


_logging_config: LoggingConfig | None = None


def setup_logging(config_path: Path | None = None, level: str | None = None) -> None:
    """Configure logging for pipeline-xray.

    Args:
        config_path: Optional YAML dictConfig file. Environment variables and
            defaults are used when omitted.
        level: Optional level override. Set on the package logger, which
            every module logger inherits from, and exported to Prefect.

    Example:
        >>> setup_logging(level="DEBUG")
    """
    global _logging_config

    _logging_config = LoggingConfig(config_path)
    _logging_config.apply()

    if level:
        get_logger(PACKAGE_LOGGER).setLevel(level)
        os.environ["PREFECT_LOGGING_LEVEL"] = level


def get_pipeline_logger(name: str):
    """Return the Prefect logger for ``name``, configuring logging on first use."""
    if _logging_config is None:
        setup_logging()
    return get_logger(name)

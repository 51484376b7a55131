"""Logging for pipeline-xray.

Always obtain loggers through ``get_pipeline_logger`` rather than
``logging.getLogger`` so output is routed through Prefect's logging.

Example:
    >>> from pipeline_xray.logging import get_pipeline_logger
    >>> logger = get_pipeline_logger(__name__)
    >>> logger.info("Recording started")
"""

from .logging_config import LoggingConfig, get_pipeline_logger, setup_logging

__all__ = [
    "LoggingConfig",
    "setup_logging",
    "get_pipeline_logger",
]

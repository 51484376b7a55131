"""Configuration settings for pipeline-xray.

Settings are loaded from environment variables with .env file support via
pydantic-settings.

Environment variables:
    XRAY_TRACES_FILE: JSON document the file trace store reads and writes
    XRAY_TRACE_STORE: Trace store backend, ``file`` or ``memory``
    XRAY_REGRESSION_MODE: Default regression mode for new recorders

Configuration precedence:
    1. Environment variables (highest priority)
    2. .env file in current directory
    3. Default values

Example:
    >>> from pipeline_xray.settings import settings
    >>> print(settings.xray_traces_file)
    data/traces.json

Note:
    Settings are loaded once at import and frozen. Restart the process to pick
    up changes to the environment or .env file.
"""

from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuration for trace recording and storage.

    Attributes:
        xray_traces_file: Path of the JSON document used by the file trace
            store. Relative paths resolve against the working directory.

        xray_trace_store: Backend selected by ``create_trace_store``. The
            ``memory`` backend keeps traces for the life of the process only.

        xray_regression_mode: Whether recorders built without an explicit
            ``regression_mode`` track structural fingerprints per step.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    xray_traces_file: Path = Path("data/traces.json")
    xray_trace_store: Literal["file", "memory"] = "file"
    xray_regression_mode: bool = False


settings = Settings()
"""Process-wide settings instance; import this rather than building Settings objects."""

"""Settings for rendering commit logs and configuring log output."""

import json
import logging
from datetime import tzinfo
from pathlib import Path
from typing import Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ValidationError, field_validator

from commit_log.exceptions import InvalidArgumentError
from commit_log.models.commit import DEFAULT_TIMESTAMP_FORMAT

logger = logging.getLogger(__name__)

LOG_LEVEL_ENV_VAR = "COMMIT_LOG_LOG_LEVEL"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class CommitLogSettings(BaseModel):
    """Runtime settings for a commit log.

    Attributes:
        timestamp_format: ``strftime`` pattern used when describing commits.
        timezone: IANA zone name used for rendering. ``None`` renders in the
            local zone.
        log_level: Default level for the ``commit_log`` loggers when the CLI
            configures logging.
    """

    timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT
    timezone: Optional[str] = None
    log_level: str = "WARNING"

    model_config = {"frozen": True}

    @field_validator("timezone")
    @classmethod
    def _check_timezone(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {value}") from e
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {value}")
        return level

    @property
    def tzinfo(self) -> Optional[tzinfo]:
        """Get the configured zone, or ``None`` for the local zone."""
        return ZoneInfo(self.timezone) if self.timezone else None

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "CommitLogSettings":
        """Load settings from a JSON file."""
        config_path = Path(path)
        try:
            data = json.loads(config_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise InvalidArgumentError(f"Cannot read config {config_path}: {e}") from e

        if not isinstance(data, dict):
            raise InvalidArgumentError(f"Config {config_path} must hold a JSON object")

        try:
            settings = cls(**data)
        except ValidationError as e:
            raise InvalidArgumentError(f"Invalid config {config_path}: {e}") from e

        logger.debug("Loaded settings from %s", config_path)
        return settings


DEFAULT_SETTINGS = CommitLogSettings()

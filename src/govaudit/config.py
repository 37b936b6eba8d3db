"""
Configuration settings for govaudit.

Settings are read from the environment (prefix ``GOVAUDIT_``) and an optional
``.env`` file in the working directory.
"""
import logging
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from pydantic import Field, ValidationError as PydanticValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class LogLevel(str, Enum):
    """Logging level options."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class Settings(BaseSettings):
    """Application settings.

    Environment Variables:
        GOVAUDIT_LOG_LEVEL: Logging level (default: WARNING)
        GOVAUDIT_JSON_LOGS: Emit logs as JSON lines (default: false)
        GOVAUDIT_LOG_FILE: Optional log file path
        GOVAUDIT_UNKNOWN_SELECTOR_PENALTY: Risk added for unresolved selectors
        GOVAUDIT_PAYABLE_PENALTY: Risk added for payable functions
        GOVAUDIT_VALUE_PENALTY: Risk added when a call carries value
    """

    model_config = SettingsConfigDict(
        env_prefix="GOVAUDIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    LOG_LEVEL: LogLevel = Field(
        LogLevel.WARNING,
        description="Logging level",
    )
    LOG_FORMAT: str = Field(
        DEFAULT_LOG_FORMAT,
        description="Log message format",
    )
    JSON_LOGS: bool = Field(
        False,
        description="Use JSON format for logs",
    )
    LOG_FILE: Optional[Path] = Field(
        None,
        description="Optional file to mirror log output to",
    )

    UNKNOWN_SELECTOR_PENALTY: int = Field(
        10,
        ge=0,
        description="Risk added when a call selector is not in the ABI",
    )
    PAYABLE_PENALTY: int = Field(
        5,
        ge=0,
        description="Risk added when the resolved function is payable",
    )
    VALUE_PENALTY: int = Field(
        5,
        ge=0,
        description="Risk added when a call carries a positive value",
    )

    DEFAULT_ABI_PATH: Path = Field(
        Path("abi.json"),
        description="ABI document used when --abi is not given",
    )
    DEFAULT_CALLS_PATH: Path = Field(
        Path("calls.json"),
        description="Call queue document used when --calls is not given",
    )

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @property
    def log_level_value(self) -> int:
        return getattr(logging, self.LOG_LEVEL.value)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings instance.

    Raises:
        ConfigurationError: If an environment override fails validation
    """
    load_dotenv()
    try:
        return Settings()
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid govaudit settings: {e}") from e


def get_config() -> Dict[str, Any]:
    """Get configuration as a dictionary."""
    return get_settings().model_dump()

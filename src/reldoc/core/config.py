"""
Configuration management for the reldoc codec.

Configuration precedence (highest to lowest):
1. Explicit kwargs passed to CodecConfig (CLI options end up here)
2. Environment variables (RELDOC_* prefix)
3. .env file
4. pyproject.toml [tool.reldoc] section
5. Hardcoded defaults
"""

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from ..models.document import DELIMITER, is_valid_name
from ..models.enums import LogLevel, RelationPolicy

logger = logging.getLogger(__name__)

# Characters that would corrupt a header or a row if they appeared in a token
_GRAMMAR_CHARS = frozenset(",.:()[]{}\n")


def load_pyproject_defaults() -> dict[str, Any]:
    """
    Load defaults from the [tool.reldoc] section in pyproject.toml.

    Returns:
        Dictionary of configuration overrides from pyproject.toml
    """
    pyproject_path = Path("pyproject.toml")

    if not pyproject_path.exists():
        return {}

    try:
        with pyproject_path.open("rb") as f:
            data = tomllib.load(f)
    except OSError as e:
        logger.warning(f"Could not load pyproject.toml: {e}")
        return {}
    except tomllib.TOMLDecodeError as e:
        logger.warning(f"Could not parse pyproject.toml: {e}")
        return {}

    tool_config = data.get("tool", {}).get("reldoc", {})
    if tool_config:
        logger.debug(f"Loaded {len(tool_config)} settings from pyproject.toml")

    return tool_config


class PyProjectTomlSettingsSource(PydanticBaseSettingsSource):
    """
    A pydantic-settings source that loads configuration from pyproject.toml.
    """

    def get_field_value(self, field_name: str, field_info: Any) -> tuple[Any, str, bool]:
        """Not used in this implementation."""
        return None, "", False

    def __call__(self) -> dict[str, Any]:
        """Load and return configuration from pyproject.toml."""
        return load_pyproject_defaults()


class CodecConfig(BaseSettings):
    """
    Settings for encoding and decoding relational documents.
    """

    model_config = SettingsConfigDict(
        env_prefix="RELDOC_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Decoding
    relation_policy: RelationPolicy = Field(
        default=RelationPolicy.SKIP,
        description="What to do with child blocks whose parent cannot be found: skip or strict",
    )
    strip_whitespace: bool = Field(
        default=True, description="Trim whitespace around keys and field values when decoding"
    )

    # Encoding
    foreign_key_suffix: str = Field(
        default="_id", description="Appended to the singular root name to form the foreign key"
    )
    null_literal: str = Field(default="null", description="Text written for null values")
    default_root_name: str = Field(
        default="data", description="Root block name used when the caller gives none"
    )

    # Logging
    log_level: LogLevel = Field(default=LogLevel.WARNING, description="Logging level")
    log_file: Path | None = Field(
        default=None,
        description="Path to a JSON log file (set to None to disable file logging)",
    )
    log_max_bytes: int = Field(
        default=10 * 1024 * 1024, description="Maximum log file size before rotation"  # 10MB
    )
    log_backup_count: int = Field(default=5, description="Number of backup log files to keep")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert pyproject.toml between the .env file and secret files."""
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            PyProjectTomlSettingsSource(settings_cls),
            file_secret_settings,
        )

    @field_validator("foreign_key_suffix")
    @classmethod
    def validate_foreign_key_suffix(cls, v: str) -> str:
        """Suffix must be non-empty and free of grammar characters"""
        if not v:
            raise ValueError("foreign_key_suffix must not be empty")
        bad = sorted(set(v) & _GRAMMAR_CHARS)
        if bad:
            raise ValueError(f"foreign_key_suffix contains reserved characters: {''.join(bad)}")
        return v

    @field_validator("null_literal")
    @classmethod
    def validate_null_literal(cls, v: str) -> str:
        """A null literal containing the delimiter would split the row"""
        if DELIMITER in v or "\n" in v:
            raise ValueError(f"null_literal must not contain '{DELIMITER}' or newlines, got {v!r}")
        return v

    @field_validator("default_root_name")
    @classmethod
    def validate_default_root_name(cls, v: str) -> str:
        if not is_valid_name(v):
            raise ValueError(f"default_root_name must match [A-Za-z0-9_]+, got {v!r}")
        return v

    @field_validator("log_max_bytes", "log_backup_count")
    @classmethod
    def validate_log_rotation(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"Log rotation settings must not be negative, got {v}")
        return v

    def ensure_log_directory(self) -> None:
        """Ensure the log directory exists."""
        if self.log_file and self.log_file.parent:
            self.log_file.parent.mkdir(parents=True, exist_ok=True)


# Global configuration instance
_config: CodecConfig | None = None


def get_config() -> CodecConfig:
    """
    Get the global configuration instance.

    Returns:
        CodecConfig instance
    """
    global _config
    if _config is None:
        _config = CodecConfig()
        _config.ensure_log_directory()
    return _config


def reset_config() -> None:
    """Reset the global configuration (mainly for testing)."""
    global _config
    _config = None

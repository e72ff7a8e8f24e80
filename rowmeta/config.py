"""
Configuration management for rowmeta.

Loads and validates configuration from rowmeta.toml files using Pydantic.
Every setting can also be overridden from the environment.
"""

from __future__ import annotations

import codecs
import sys
from pathlib import Path
from typing import Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from rowmeta.core.value_meta import DEFAULT_STRING_ENCODING, STORAGE_TYPES, STORAGE_TYPE_NORMAL

CONFIG_FILENAME = "rowmeta.toml"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ValueMetaSettings(BaseSettings):
    """Column value handling defaults."""

    model_config = SettingsConfigDict(env_prefix="ROWMETA_VALUE_")

    string_encoding: str = Field(
        default=DEFAULT_STRING_ENCODING, description="Charset for text payloads"
    )
    sort_descending: bool = Field(default=False, description="Sort values descending")
    storage_type: str = Field(
        default=STORAGE_TYPE_NORMAL,
        description=f"Storage type: one of {', '.join(STORAGE_TYPES)}",
    )
    identical_format: bool = Field(
        default=True,
        description="Binary-string payloads are already in canonical form",
    )

    @field_validator("storage_type")
    @classmethod
    def _check_storage_type(cls, value: str) -> str:
        if value not in STORAGE_TYPES:
            raise ValueError(f"storage_type must be one of {', '.join(STORAGE_TYPES)}")
        return value

    @field_validator("string_encoding")
    @classmethod
    def _check_encoding(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError as e:
            raise ValueError(f"Unknown string encoding: {value}") from e
        return value


class DatabaseSettings(BaseSettings):
    """Database connection configuration."""

    model_config = SettingsConfigDict(env_prefix="ROWMETA_DB_")

    url: str = Field(
        default="postgresql://localhost/rowmeta",
        description="Database connection URL",
    )
    dialect: str = Field(
        default="POSTGRESQL", description="Dialect identifier for column type mapping"
    )


class Config(BaseSettings):
    """Main configuration for rowmeta."""

    model_config = SettingsConfigDict(env_prefix="ROWMETA_")

    log_level: str = Field(default="WARNING", description="Root log level")
    value: ValueMetaSettings = Field(default_factory=ValueMetaSettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level

    @classmethod
    def from_toml(cls, path: Path | str) -> Config:
        """
        Load configuration from TOML file.

        Args:
            path: Path to rowmeta.toml file

        Returns:
            Config instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config file is invalid
        """
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path, "rb") as f:
            data = tomllib.load(f)

        return cls(
            log_level=data.get("log_level", "WARNING"),
            value=ValueMetaSettings(**data.get("value", {})),
            database=DatabaseSettings(**data.get("database", {})),
        )

    @classmethod
    def find_and_load(cls, start_dir: Optional[Path] = None) -> Config:
        """
        Find and load configuration from rowmeta.toml.

        Searches starting from start_dir and walking up parent directories
        until found or reaching filesystem root.

        Raises:
            FileNotFoundError: If no config file found
        """
        if start_dir is None:
            start_dir = Path.cwd()

        current = Path(start_dir).resolve()

        while True:
            config_path = current / CONFIG_FILENAME
            if config_path.exists():
                return cls.from_toml(config_path)

            parent = current.parent
            if parent == current:
                break
            current = parent

        raise FileNotFoundError(
            f"No {CONFIG_FILENAME} found in {start_dir} or parent directories."
        )

    def to_toml(self, path: Path | str) -> None:
        """Write configuration to TOML file."""
        toml_content = f"""# rowmeta configuration
log_level = "{self.log_level}"

[value]
string_encoding = "{self.value.string_encoding}"
sort_descending = {str(self.value.sort_descending).lower()}
storage_type = "{self.value.storage_type}"
identical_format = {str(self.value.identical_format).lower()}

[database]
url = "{self.database.url}"
dialect = "{self.database.dialect}"
"""

        Path(path).write_text(toml_content)

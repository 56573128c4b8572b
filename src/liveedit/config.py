"""Configuration file loading and validation."""

import logging
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, HttpUrl, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from .consts import LOG_FILE_DEFAULT
from .errors import ConfigException

logger = logging.getLogger(__name__)


class ServiceConfig(BaseModel):
    """Template service configuration."""

    host: HttpUrl
    # None waits forever, matching the browser fetch the service was built for
    timeout: Optional[float] = Field(default=None, gt=0)
    access_code: Optional[str] = None

    @field_validator("access_code")
    @classmethod
    def blank_access_code_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            return None
        return v

    @property
    def base_url(self) -> str:
        return str(self.host).rstrip("/")


class EditorConfig(BaseModel):
    """Defaults for the form being edited."""

    form_template_id: str = ""


class Config(BaseSettings):
    """Application configuration."""

    log_file: str = Field(default=LOG_FILE_DEFAULT)

    service: ServiceConfig
    editor: EditorConfig = Field(default_factory=EditorConfig)

    model_config = SettingsConfigDict(
        env_prefix="LIVEEDIT_",
        env_nested_delimiter="__",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            TomlConfigSettingsSource(settings_cls),
        )

    @classmethod
    def load_from_file(cls, config_path: str) -> "Config":
        """Load configuration from specified path."""
        path = Path(config_path)
        if not path.exists():
            raise ConfigException(f"Configuration file not found: {config_path}")

        class _Config(cls):
            model_config = SettingsConfigDict(
                toml_file=str(path),
                env_prefix="LIVEEDIT_",
                env_nested_delimiter="__",
            )

        try:
            return _Config()
        except ValidationError as e:
            error_lines = ["Configuration validation failed:"]
            for error in e.errors():
                loc = " -> ".join(str(item) for item in error["loc"])
                error_lines.append(f"  - {loc}: {error['msg']}")
            raise ConfigException("\n".join(error_lines)) from e
        except ValueError as e:
            # tomllib.TOMLDecodeError is a ValueError
            raise ConfigException(f"Invalid configuration file {config_path}: {e}") from e

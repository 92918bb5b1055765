# path: config/settings.py
from __future__ import annotations

import logging
from typing import Any, Literal, Optional

from pydantic import field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from .loader import yaml_settings_source
from .models import ConnectionRetryStrategy


class _YamlMirrorSource(PydanticBaseSettingsSource):
    """pydantic-settings v2 settings source that feeds values from YAML.

    Lowest precedence; allows ENV and .env to override.
    Implements both `__call__` and `get_field_value` as required by v2.
    """

    def __init__(self, settings_cls: type[BaseSettings]):
        super().__init__(settings_cls)
        self._data: dict[str, Any] = yaml_settings_source()

    def __call__(self) -> dict[str, Any]:
        return self._data

    def get_field_value(
        self,
        field,  # pydantic.fields.FieldInfo
        field_name: str,
    ) -> tuple[Any, str | None, dict[str, Any] | None]:
        if field_name in self._data:
            return self._data[field_name], field_name, self._data
        return None, None, None


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
        env_nested_delimiter="__",
        nested_model_default_partial_update=True,
    )

    ENV: Literal["dev", "test", "prod"] = "dev"
    LOG_LEVEL: str = "INFO"

    # Backoff (flat env mirrors)
    BACKOFF_EXPONENT_BASE: int = 2
    BACKOFF_FACTOR_MS: int = 100
    BACKOFF_RETRIES: int = 5

    # Nested strategy (from YAML; overridable via CONNECTION_RETRY__*)
    connection_retry: Optional[ConnectionRetryStrategy] = None

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _known_level(cls, v: Any):
        level = str(v).strip().upper() if v is not None else "INFO"
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"unknown log level: {v!r}")
        return level

    @property
    def retry_strategy(self) -> ConnectionRetryStrategy:
        """Strategy handed to the backoff plan; an explicit nested section wins over BACKOFF_*."""
        if self.connection_retry is not None:
            return self.connection_retry
        return ConnectionRetryStrategy(
            exponent_base=self.BACKOFF_EXPONENT_BASE,
            factor=self.BACKOFF_FACTOR_MS,
            number_of_retries=self.BACKOFF_RETRIES,
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
        # Priority high→low: init > ENV > .env > secrets > YAML
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            file_secret_settings,
            _YamlMirrorSource(settings_cls),
        )


settings = Settings()

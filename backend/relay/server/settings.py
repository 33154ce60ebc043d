"""Relay server configuration via environment variables."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings

from relay.messaging.encoder import DEFAULT_MAX_MESSAGE_SIZE
from shared.validators import StringListEnvSettingsSource, parse_string_list

if TYPE_CHECKING:
    from pydantic_settings.sources.base import PydanticBaseSettingsSource


class RelayServerSettings(BaseSettings):
    model_config = {"env_prefix": "RELAY_", "populate_by_name": True}

    host: str = Field(default="0.0.0.0", min_length=1)  # noqa: S104
    # Hosting platforms inject a bare PORT; RELAY_PORT wins when both are set.
    port: int = Field(default=8080, ge=1, le=65535, validation_alias=AliasChoices("RELAY_PORT", "PORT"))
    log_dir: str | None = None
    cors_origins: list[str] = []
    max_message_size: int = Field(default=DEFAULT_MAX_MESSAGE_SIZE, ge=1)

    @field_validator("cors_origins", mode="before")
    @classmethod
    def validate_cors_origins(cls, v: str | list[str]) -> list[str]:
        return parse_string_list(v, allow_empty=True)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return init_settings, StringListEnvSettingsSource(settings_cls), dotenv_settings, file_secret_settings

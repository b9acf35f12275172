"""Process-level configuration read from ``TOOLCFG_*`` environment variables."""

from __future__ import annotations

from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="TOOLCFG_", case_sensitive=False)

    dest_root: Path | None = None
    file_mode: str = "0644"
    log_level: str = "INFO"

    @field_validator("file_mode")
    @classmethod
    def _check_octal(cls, value: str) -> str:
        int(value, 8)
        return value

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        return value.upper()

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    db_file: str = Field(default="database.json", alias="DB_FILE")
    strict_load: bool = Field(default=False, alias="STRICT_LOAD")
    hash_preview_length: int = Field(default=16, ge=1, alias="HASH_PREVIEW_LENGTH")
    log_level: str = Field(default="WARNING", alias="LOG_LEVEL")

    @field_validator("db_file", mode="before")
    @classmethod
    def normalize_db_file(cls, value: str) -> str:
        return value.strip() if isinstance(value, str) else value

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.strip().upper() if isinstance(value, str) else value

    @field_validator("db_file")
    @classmethod
    def validate_db_file(cls, value: str) -> str:
        if not value:
            raise ValueError("DB_FILE must be set")
        return value

    def with_overrides(self, **values) -> Settings:
        return type(self)(**{**self.model_dump(), **values})


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()

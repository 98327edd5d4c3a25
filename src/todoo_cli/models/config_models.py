"""Configuration models for Todoo CLI."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from todoo_cli.utils.logger import DEFAULT_LEVEL, LOG_LEVELS


class OutputConfig(BaseModel):
    """Output configuration."""

    format: str = Field(default="pretty")
    color: bool = Field(default=True)


class StorageConfig(BaseModel):
    """Where and under which keys user data is stored."""

    data_dir: str | None = Field(
        default=None, description="Directory for JSON data files"
    )
    namespace: str = Field(default="todoapp", description="Key namespace")

    @field_validator("namespace")
    @classmethod
    def validate_namespace(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("namespace cannot be empty")
        return v.strip()


class AppConfig(BaseModel):
    """Main Todoo configuration"""

    user_id: str = Field(default="local", description="Active user id")
    storage: StorageConfig = Field(default_factory=StorageConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    dedupe_day_templates: bool = Field(
        default=True,
        description="Skip day-template tasks that already exist on the date",
    )
    log_level: str = Field(default=DEFAULT_LEVEL, description="Level of todoo.log")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of: {', '.join(LOG_LEVELS)}")
        return level

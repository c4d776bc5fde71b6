"""
Application settings and configuration management.

Uses Pydantic Settings for validation and environment variable support.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DiceSettings(BaseSettings):
    """Formula engine limits and randomness configuration."""

    max_dice: int = Field(
        default=1000, ge=1, description="Largest die count (N) a formula may request"
    )
    max_sides: int = Field(
        default=1000, ge=2, description="Largest face count (M) a die may have"
    )
    max_modifier: int = Field(
        default=10000, ge=0, description="Largest absolute flat modifier (K)"
    )
    max_formula_length: int = Field(
        default=64, ge=3, description="Longest formula string accepted, in characters"
    )
    seed: int | None = Field(
        default=None,
        description="Seed for the random generator. None uses an unseeded generator; "
                    "set it only for reproducible test sessions.",
    )

    model_config = SettingsConfigDict(env_prefix="DICE_")


class ToolSettings(BaseSettings):
    """Function tool registration configuration."""

    name: str = Field(
        default="roll_dice_formula", description="Unique tool identifier in the host registry"
    )
    display_name: str = Field(default="AI Dice Roller", description="Human-readable tool name")
    stealth: bool = Field(
        default=True,
        description="Hide tool invocations from the host's chat transcript",
    )

    model_config = SettingsConfigDict(env_prefix="TOOL_")


class Settings(BaseSettings):
    """Main application settings."""

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    log_file: Path | None = Field(default=None, description="Log file path")

    # Sub-configurations
    dice: DiceSettings = Field(default_factory=DiceSettings)
    tools: ToolSettings = Field(default_factory=ToolSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def load_settings(env_file: str | Path | None = None) -> Settings:
    """
    Load settings from file and environment.

    Args:
        env_file: Path to .env file (optional)

    Returns:
        Loaded settings instance
    """
    global _settings
    if env_file:
        _settings = Settings(_env_file=env_file)
    else:
        _settings = Settings()
    return _settings

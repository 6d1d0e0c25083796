"""Configuration management for Rolodex Text."""

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration via environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Rolodex (source of truth) workbook
    rolodex_path: Path = Field(default=Path("rolodex.xlsx"), alias="ROLODEX_PATH")
    rolodex_tab: str = Field(default="Rolodex", alias="ROLODEX_TAB")
    rolodex_key_column: int = Field(default=1, ge=1, alias="ROLODEX_KEY_COLUMN")
    rolodex_text_column: int = Field(default=2, ge=1, alias="ROLODEX_TEXT_COLUMN")

    # Template workbook where the key is selected and sections are written
    template_path: Path = Field(
        default=Path("template.xlsx"),
        alias="ROLODEX_TEMPLATE_PATH",
    )
    template_sheet: str = Field(default="Template", alias="ROLODEX_TEMPLATE_SHEET")
    template_key_cell: str = Field(default="B3", alias="ROLODEX_TEMPLATE_KEY_CELL")

    # JSON file overriding the built-in section table
    sections_file: Optional[Path] = Field(default=None, alias="ROLODEX_SECTIONS_FILE")

    # Timestamp rule
    timezone: str = Field(default="America/New_York", alias="ROLODEX_TIMEZONE")
    timestamp_format: str = Field(
        default="%m/%d/%Y %H:%M:%S",
        alias="ROLODEX_TIMESTAMP_FORMAT",
    )
    # Dropdown cell -> timestamp cell, given as JSON in the environment
    timestamp_cells: dict[str, str] = Field(
        default_factory=dict,
        alias="ROLODEX_TIMESTAMP_CELLS",
    )

    # Image row fitting
    image_max_width: Optional[int] = Field(
        default=None,
        gt=0,
        alias="ROLODEX_IMAGE_MAX_WIDTH",
    )
    # Sheet of the template workbook where image URLs are pasted. Each row
    # also names the template cell that shows the image.
    image_input_sheet: str = Field(default="Input", alias="ROLODEX_IMAGE_INPUT_SHEET")
    image_url_column: int = Field(default=2, ge=1, alias="ROLODEX_IMAGE_URL_COLUMN")
    image_target_column: int = Field(
        default=1,
        ge=1,
        alias="ROLODEX_IMAGE_TARGET_COLUMN",
    )

    log_level: str = Field(default="WARNING", alias="ROLODEX_LOG_LEVEL")


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance, creating it if needed."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def load_settings(env_file: Optional[Path] = None) -> Settings:
    """Load settings from an optional specific .env file."""
    global _settings
    if env_file:
        _settings = Settings(_env_file=env_file)
    else:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None

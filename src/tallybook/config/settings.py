"""
Application settings with Pydantic v2 validation.

Loads configuration from environment variables with sensible defaults.
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class TotalsSettings(BaseSettings):
    """Totals engine configuration."""

    model_config = SettingsConfigDict(env_prefix="TOTALS_")

    default_currency: str = "AUD"
    pricing_mode: Literal["EXCLUSIVE", "INCLUSIVE"] = "EXCLUSIVE"

    # Memoised document calculations (0 disables the cache)
    cache_size: int = 256

    @field_validator("default_currency")
    @classmethod
    def upper_currency(cls, v: str) -> str:
        return v.strip().upper()


class NumberingSettings(BaseSettings):
    """Document number sequence configuration."""

    model_config = SettingsConfigDict(env_prefix="NUMBERING_")

    invoice_prefix: str = "I"
    invoice_start: int = 98978
    quote_prefix: str = "E"
    quote_start: int = 82385


class TaxSettings(BaseSettings):
    """Company tax configuration."""

    model_config = SettingsConfigDict(env_prefix="TAX_")

    country_code: str = "AU"
    use_default_gst_scheme: bool = True


class APISettings(BaseSettings):
    """API server configuration."""

    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    cors_origins: list[str] = ["*"]


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Tallybook"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Sub-settings
    totals: TotalsSettings = Field(default_factory=TotalsSettings)
    numbering: NumberingSettings = Field(default_factory=NumberingSettings)
    tax: TaxSettings = Field(default_factory=TaxSettings)
    api: APISettings = Field(default_factory=APISettings)


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None

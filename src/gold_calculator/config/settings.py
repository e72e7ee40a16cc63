"""
Centralized settings and path configuration for the gold calculator.

Every field can be overridden with a GOLD_CALC_<FIELD> environment variable
(or a line in .env), e.g. GOLD_CALC_DEFAULT_PRICE_PER_GRAM=62.5.
"""
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_PRICE_PER_GRAM = 60.0
DEFAULT_QUOTE_ENDPOINT = "https://api.firecrawl.dev/v1/scrape"
DEFAULT_QUOTE_PAGE_URL = "https://www.kitco.com/charts/livegold.html"


def get_project_root() -> Path:
    """Get the project root directory (where pyproject.toml lives)."""
    current = Path(__file__).resolve()
    for parent in current.parents:
        if (parent / 'pyproject.toml').exists():
            return parent
    # Fallback to 4 levels up from this file (src/gold_calculator/config/)
    return Path(__file__).resolve().parent.parent.parent.parent


class Settings(BaseSettings):
    """Application settings with sensible defaults."""

    model_config = SettingsConfigDict(
        env_prefix="GOLD_CALC_",
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    # Project paths
    project_root: Path = Field(default_factory=get_project_root)

    # Where the price-lookup API key is kept between runs
    credential_path: Optional[Path] = None

    # New line items start at this price
    default_price_per_gram: float = Field(DEFAULT_PRICE_PER_GRAM, ge=0, allow_inf_nan=False)
    currency_symbol: str = "$"

    # Locale
    default_language: str = "en"

    # External price lookup
    quote_endpoint: str = DEFAULT_QUOTE_ENDPOINT
    quote_page_url: str = DEFAULT_QUOTE_PAGE_URL
    quote_timeout: float = Field(15.0, gt=0, allow_inf_nan=False)

    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.strip().upper()

    @model_validator(mode="after")
    def _default_credential_path(self) -> 'Settings':
        if self.credential_path is None:
            self.credential_path = self.project_root / '.gold_calculator' / 'credential'
        return self

    @classmethod
    def load(cls, project_root: Optional[Path] = None) -> 'Settings':
        """
        Load settings from the project structure and GOLD_CALC_* environment variables.

        Raises:
            pydantic.ValidationError (a ValueError): a variable is not a valid
                value for its field, e.g. a negative or non-numeric price
        """
        return cls(project_root=project_root or get_project_root())


# Default settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def reset_settings():
    """Drop the cached settings so the next get_settings() reloads them."""
    global _settings
    _settings = None

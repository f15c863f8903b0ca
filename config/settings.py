"""
Settings for the property import engine.

Loaded from environment variables (or a .env file) with pydantic-settings,
so limits can be tuned per deployment: IMPORT_MAX_ROWS=1000, LOG_LEVEL=DEBUG...
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from functools import lru_cache


class Settings(BaseSettings):
    """
    Import limits and runtime settings.

    Every field has a default, so the engine runs with no environment at all.
    """

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),  # Check current dir, then parent
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # Ignore extra env vars
    )

    # ===================
    # PROPERTY IMPORT
    # ===================
    import_max_rows: int = Field(
        default=500,
        ge=1,
        le=10000,
        description="Maximum data rows accepted per import file"
    )
    import_preview_sample_size: int = Field(
        default=5,
        ge=0,
        le=50,
        description="Rows projected into the preview sample"
    )
    import_contains_min_length: int = Field(
        default=4,
        ge=1,
        le=20,
        description="Minimum header/key length for contains matching"
    )
    import_default_currency: str = Field(
        default="COP",
        pattern="^[A-Z]{3}$",
        description="Currency used when the file has no currency column"
    )

    # ===================
    # APP SETTINGS
    # ===================
    environment: str = Field(
        default="development",
        pattern="^(development|staging|production)$",
        description="Application environment"
    )
    debug: bool = Field(
        default=True,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Logging level"
    )

    # ===================
    # COMPUTED PROPERTIES
    # ===================
    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"


@lru_cache()
def get_settings() -> Settings:
    """
    Settings shared by the import services.

    Cached; tests that change the environment call get_settings.cache_clear().

    Raises:
        pydantic.ValidationError: If an IMPORT_* or LOG_LEVEL variable is invalid
    """
    return Settings()


# For convenient imports: from config.settings import settings
settings = get_settings()

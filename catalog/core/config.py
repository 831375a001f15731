"""
Application Configuration
Manages environment variables and application settings using Pydantic Settings.

This module loads configuration from .env file and provides type-safe access
to the database location and logging options. Every setting has a default,
so the catalog runs without any configuration.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings are loaded from .env file or environment variables.
    """

    # Database Configuration
    DATABASE_URL: str = "sqlite:///./data/products.db"
    # Format: sqlite:///relative/path.db, sqlite:////absolute/path.db, sqlite:// (in memory)

    # Logging
    LOG_LEVEL: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    LOG_DIR: str = "./data/logs"  # Rotating log files live here
    FILE_LOGGING: bool = True  # Disable to log to console only

    # Application Settings
    PROJECT_NAME: str = "Product Manager"  # Shown in the console header
    DEBUG: bool = False  # Echo SQL statements

    model_config = SettingsConfigDict(
        env_file=".env",  # Load from .env file
        env_file_encoding="utf-8",  # UTF-8 encoding
        case_sensitive=False,  # Case-insensitive env vars
        extra="ignore",  # Unrelated keys in a shared .env are not an error
    )


# Global settings instance
# Read by the composition root; components receive values explicitly.
settings = Settings()

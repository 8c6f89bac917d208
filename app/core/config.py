"""
Application configuration.

Loads settings from environment variables and .env file.
All configuration is centralized here.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        project_name: Display name of the application.
        version: Current version string.
        debug: Enable debug mode. Must be False in production.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        limite_consultas_diarias: Chat queries a client may make per day
            when no explicit limit is given for that day.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    project_name: str = "NutriChat"
    version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"
    limite_consultas_diarias: int = 3


settings = Settings()

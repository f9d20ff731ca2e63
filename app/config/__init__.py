"""
Configuration package for the application.

Settings are organized by domain (base, security, integrations) and composed
into a single frozen ``Settings`` object that is read from the environment
once per process.

Usage:
    from app.config import get_settings

    settings = get_settings()
    print(settings.APP_NAME)
    print(settings.ADMIN_EMAIL)
"""

from pydantic_settings import BaseSettings

from app.config.base import BaseConfig
from app.config.security import SecurityConfig, normalize_origin
from app.config.integrations import IntegrationsConfig
from app.config.database import MongoDBConfig, get_mongodb_config


class Settings(
    BaseConfig,
    SecurityConfig,
    IntegrationsConfig,
    BaseSettings
):
    """
    Unified application settings composed from modular configurations.

    - BaseConfig: Core application settings (APP_NAME, PORT, ENVIRONMENT, logging)
    - SecurityConfig: Cross-origin allow-list
    - IntegrationsConfig: SMTP transport and notification recipients

    MongoDB configuration is handled separately via app.config.database.
    """

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"
        frozen = True


# Global settings instance
_settings = None


def get_settings() -> Settings:
    """
    Get the global settings instance (singleton pattern).

    Returns:
        Settings: The global settings instance
    """
    global _settings

    if _settings is None:
        _settings = Settings()

    return _settings


__all__ = [
    "Settings",
    "get_settings",
    "BaseConfig",
    "SecurityConfig",
    "IntegrationsConfig",
    "MongoDBConfig",
    "get_mongodb_config",
    "normalize_origin",
]

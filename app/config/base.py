"""
Base application configuration.
Core settings like host, port, runtime environment and logging.
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings


class BaseConfig(BaseSettings):
    """Core application settings."""

    # Application Info
    APP_NAME: str = "Feedback API"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"

    # Server Configuration
    HOST: str = "0.0.0.0"
    PORT: int = 5000
    WORKERS: int = 1
    RELOAD: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "logs/feedback_api.log"

    # Monitoring
    ENABLE_METRICS: bool = True

    # Batch export
    TRAINING_DATA_EXPORT_PATH: str = "training_data.json"

    # Validators
    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        return v.upper()

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        valid_envs = ["development", "staging", "production", "testing"]
        if v.lower() not in valid_envs:
            raise ValueError(f"ENVIRONMENT must be one of {valid_envs}")
        return v.lower()

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @property
    def include_stack_traces(self) -> bool:
        """Error responses carry a stack trace outside production."""
        return not self.is_production

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"
        frozen = True

"""
External integrations configuration.
Outbound email (SMTP) settings used for feedback notifications.
"""

from typing import Optional
from pydantic import field_validator
from pydantic_settings import BaseSettings


class IntegrationsConfig(BaseSettings):
    """Email transport and recipient settings."""

    # =============================================================================
    # Email Configuration (from .env)
    # =============================================================================

    EMAIL_HOST: Optional[str] = None
    EMAIL_PORT: int = 587
    EMAIL_SECURE: bool = False
    EMAIL_USER: Optional[str] = None
    EMAIL_PASSWORD: Optional[str] = None
    EMAIL_FROM_NAME: str = "Feedback System"
    EMAIL_TIMEOUT_SECONDS: int = 30

    # Administrative recipient of feedback notifications
    ADMIN_EMAIL: Optional[str] = None

    # Send a "we received your feedback" email to the submitter as well
    SEND_CONFIRMATION_EMAIL: bool = False

    # =============================================================================
    # Validators
    # =============================================================================

    @field_validator("EMAIL_PORT")
    @classmethod
    def validate_email_port(cls, v: int) -> int:
        if not 1 <= v <= 65535:
            raise ValueError("EMAIL_PORT must be between 1 and 65535")
        return v

    # =============================================================================
    # Computed Properties
    # =============================================================================

    @property
    def smtp_auth_enabled(self) -> bool:
        """Check if SMTP authentication is configured."""
        return bool(self.EMAIL_USER and self.EMAIL_PASSWORD)

    @property
    def email_is_configured(self) -> bool:
        """Check if notifications can be delivered at all."""
        return bool(self.EMAIL_HOST and self.EMAIL_USER and self.ADMIN_EMAIL)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"
        frozen = True

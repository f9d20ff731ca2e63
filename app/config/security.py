"""
Security configuration.
Cross-origin allow-list settings.
"""

from typing import List, Optional, Union
from pydantic import field_validator
from pydantic_settings import BaseSettings


def normalize_origin(url: Optional[str]) -> str:
    """Strip a single trailing slash so origins compare consistently."""
    if not url:
        return ""
    return url[:-1] if url.endswith("/") else url


class SecurityConfig(BaseSettings):
    """Cross-origin settings."""

    # Primary client deployment (from .env)
    CLIENT_URL: Optional[str] = None

    # Additional allowed origins, comma separated in .env
    ALLOWED_ORIGINS: Union[str, List[str]] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]
    ALLOW_CREDENTIALS: bool = True
    ALLOWED_METHODS: Union[str, List[str]] = ["GET", "POST", "PATCH", "DELETE", "OPTIONS"]
    ALLOWED_HEADERS: Union[str, List[str]] = ["*"]

    # Validators
    @field_validator("ALLOWED_ORIGINS", "ALLOWED_METHODS", "ALLOWED_HEADERS", mode="before")
    @classmethod
    def assemble_comma_list(cls, v: Union[str, List[str], None]) -> List[str]:
        # Handle None or empty string
        if v is None or v == "":
            return []
        # Handle string values
        if isinstance(v, str):
            return [i.strip() for i in v.split(",") if i.strip()]
        # Handle list values
        elif isinstance(v, list):
            return v
        raise ValueError(f"Invalid comma-separated list: {v}")

    @property
    def origin_allow_list(self) -> List[str]:
        """Normalized origins accepted by the cross-origin middleware."""
        origins = [normalize_origin(self.CLIENT_URL)]
        origins.extend(normalize_origin(origin) for origin in self.ALLOWED_ORIGINS)
        return [origin for origin in origins if origin]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"
        frozen = True

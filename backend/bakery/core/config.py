"""
Application settings for the Dreamy Delights API

All configuration is read from environment variables or a local .env file.
"""
import json
from decimal import Decimal
from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration, loaded from environment / .env"""

    # API Settings
    API_TITLE: str = "Dreamy Delights API"
    API_VERSION: str = "1.0.0"
    API_DESCRIPTION: str = "Storefront and back-office API for Dreamy Delights bakery"
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    API_DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = ""

    # CORS - Can be string (comma-separated) or JSON array
    # Example: "http://localhost:3000,https://yourdomain.com" or '["http://localhost:3000"]'
    ALLOWED_ORIGINS: Optional[str] = "http://localhost:3000,http://localhost:3001"

    def get_allowed_origins(self) -> List[str]:
        """Parse ALLOWED_ORIGINS string into list"""
        if not self.ALLOWED_ORIGINS:
            return ["http://localhost:3000"]

        # Try JSON parse first (for array format)
        try:
            origins = json.loads(self.ALLOWED_ORIGINS)
            if isinstance(origins, list):
                return origins
        except (json.JSONDecodeError, ValueError):
            pass

        # Fall back to comma-separated string
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",")]

    # Authentication
    JWT_SECRET: Optional[str] = None
    ADMIN_JWT_SECRET: Optional[str] = None
    JWT_ALGORITHM: str = "HS256"
    USER_TOKEN_EXPIRE_HOURS: int = 24 * 7
    ADMIN_TOKEN_EXPIRE_HOURS: int = 24

    # Business rules (tax as a fraction, e.g. 0.08 for 8%)
    TAX_PERCENTAGE: Decimal = Decimal("0.00")
    DELIVERY_FEE: Decimal = Decimal("0.00")
    BUSINESS_NAME: str = "Dreamy Delights"

    # Outgoing e-mail (SMTP)
    SMTP_HOST: str = "smtp.gmail.com"
    SMTP_PORT: int = 587
    SMTP_USER: str = ""
    SMTP_PASS: str = ""
    SMTP_USE_TLS: bool = True
    ADMIN_EMAIL: str = ""

    # Product image storage (S3-compatible)
    STORAGE_BUCKET: str = ""
    STORAGE_REGION: str = "us-east-1"
    STORAGE_ENDPOINT: str = ""
    STORAGE_ACCESS_KEY_ID: str = ""
    STORAGE_SECRET_ACCESS_KEY: str = ""
    STORAGE_PUBLIC_BASE_URL: str = ""
    MAX_IMAGE_SIZE_BYTES: int = 5 * 1024 * 1024

    # Per-endpoint rate limits (requests per minute per client)
    CONTACT_RATE_LIMIT: int = 5
    LOGIN_RATE_LIMIT: int = 10

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()

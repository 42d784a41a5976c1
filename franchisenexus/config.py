"""Configuration management using environment variables"""
import os
import logging
import secrets
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Development placeholder for the token secret (not secure - for local testing only)
DEV_SECRET_PLACEHOLDER = "franchisenexus_dev_secret"


class Settings:
    """Application settings read once from the environment"""

    def __init__(self):
        # Environment
        self.environment = os.getenv("ENVIRONMENT", "development")

        # JWT configuration for bearer token authentication
        if self.environment == "production":
            self.jwt_secret = self._get_required("JWT_SECRET")

            # Reject the dev placeholder in production
            if self.jwt_secret == DEV_SECRET_PLACEHOLDER:
                raise ValueError(
                    f"Cannot use placeholder secret '{DEV_SECRET_PLACEHOLDER}' in production mode. "
                    "Set a real JWT_SECRET."
                )
        else:
            jwt_secret_env = os.getenv("JWT_SECRET", "")
            if jwt_secret_env:
                self.jwt_secret = jwt_secret_env
            else:
                # Generate a random secret on startup for development
                self.jwt_secret = secrets.token_urlsafe(32)
                logging.getLogger(__name__).warning(
                    "⚠️  No JWT_SECRET provided - generated random secret for this process. "
                    "Tokens will not survive a restart. Set JWT_SECRET in .env for persistent tokens."
                )

        self.jwt_algorithm = os.getenv("JWT_ALGORITHM", "HS256")
        self.jwt_expiration_hours = int(os.getenv("JWT_EXPIRATION_HOURS", "24"))

        # Server configuration
        self.host = os.getenv("HOST", "0.0.0.0")
        self.port = int(os.getenv("PORT", "8000"))

        # Database configuration (any SQLAlchemy async URL)
        self.database_url = os.getenv(
            "DATABASE_URL",
            "sqlite+aiosqlite:///./franchisenexus.db"
        )

        # CORS origins (comma-separated list)
        self.cors_origins = os.getenv("CORS_ORIGINS", "")

        # Application status allow-list (comma-separated). Empty keeps statuses open-ended.
        self.application_status_allowlist = self._get_list("APPLICATION_STATUS_ALLOWLIST")

        # Logging
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()

    def _get_required(self, key: str) -> str:
        """Get required environment variable or raise error."""
        value = os.getenv(key, "").strip()
        if not value:
            raise ValueError(
                f"Missing required environment variable: {key}. "
                f"Required in production mode."
            )
        return value

    @staticmethod
    def _get_list(key: str) -> list[str]:
        """Split a comma-separated environment variable, dropping blanks."""
        raw = os.getenv(key, "")
        return [item.strip() for item in raw.split(",") if item.strip()]


# Global settings instance
settings = Settings()

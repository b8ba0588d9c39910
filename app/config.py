"""Configuration settings for TeamPulse auth."""

import os
import secrets
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


class Settings:
    """Application settings loaded from environment variables."""

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./teampulse.db")

    # JWT / session
    JWT_SECRET_KEY: str = os.getenv("JWT_SECRET_KEY", "")
    JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")
    SESSION_MAX_AGE_DAYS: int = int(os.getenv("SESSION_MAX_AGE_DAYS", "30"))
    COOKIE_SECURE: bool = _env_bool("COOKIE_SECURE", "true")

    # Passwords
    BCRYPT_ROUNDS: int = int(os.getenv("BCRYPT_ROUNDS", "12"))

    # Password recovery
    CLIENT_URL: str = os.getenv("CLIENT_URL", "http://localhost:5173").rstrip("/")
    RECOVERY_TOKEN_TTL_MINUTES: int = int(os.getenv("RECOVERY_TOKEN_TTL_MINUTES", "0"))

    # Email
    SMTP_HOST: str = os.getenv("SMTP_HOST", "")
    SMTP_PORT: int = int(os.getenv("SMTP_PORT", "587"))
    SMTP_USERNAME: str = os.getenv("SMTP_USERNAME", "")
    SMTP_PASSWORD: str = os.getenv("SMTP_PASSWORD", "")
    SMTP_SENDER: str = os.getenv("SMTP_SENDER", "no-reply@teampulse.local")
    SMTP_USE_TLS: bool = _env_bool("SMTP_USE_TLS", "true")
    SMTP_TIMEOUT_SECONDS: float = float(os.getenv("SMTP_TIMEOUT_SECONDS", "10"))

    # Application
    APP_ENV: str = os.getenv("APP_ENV", "development")
    DEBUG: bool = _env_bool("DEBUG", "false")

    def __init__(self) -> None:
        self.jwt_secret_generated = not self.JWT_SECRET_KEY
        if self.jwt_secret_generated:
            self.JWT_SECRET_KEY = secrets.token_urlsafe(32)
        self.EXPOSE_RESET_TOKEN = _env_bool(
            "EXPOSE_RESET_TOKEN", "true" if self.APP_ENV == "development" else "false"
        )
        default_origins = ["http://localhost:5173", "http://localhost:5174", "http://localhost:4200", self.CLIENT_URL]
        raw_origins = os.getenv("CORS_ORIGINS")
        if raw_origins:
            self.CORS_ORIGINS = [o.strip() for o in raw_origins.split(",") if o.strip()]
        else:
            self.CORS_ORIGINS = list(dict.fromkeys(default_origins))

    def validate(self) -> list[str]:
        """Validate settings and return list of warnings."""
        warnings = []
        if self.jwt_secret_generated:
            warnings.append("JWT_SECRET_KEY is not set - using auto-generated key (not persistent across restarts)")
        if self.EXPOSE_RESET_TOKEN and self.APP_ENV != "development":
            warnings.append("EXPOSE_RESET_TOKEN is enabled outside development - reset links are returned to callers")
        if not self.SMTP_HOST:
            warnings.append("SMTP_HOST is not set - reset emails are written to the log in development and dropped elsewhere")
        if self.BCRYPT_ROUNDS < 10:
            warnings.append(f"BCRYPT_ROUNDS={self.BCRYPT_ROUNDS} is below the recommended minimum of 10")
        return warnings


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

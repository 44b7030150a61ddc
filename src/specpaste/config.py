"""
Configuration management for specpaste.
"""
import os
from typing import Optional
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


class Config:
    """Application configuration."""

    # Project paths
    PROJECT_ROOT = Path(__file__).parent.parent.parent

    # Flask settings
    FLASK_ENV: str = os.getenv("FLASK_ENV", "development")
    FLASK_DEBUG: bool = os.getenv("FLASK_DEBUG", "False").lower() == "true"
    FLASK_HOST: str = os.getenv("FLASK_HOST", "0.0.0.0")
    FLASK_PORT: int = int(os.getenv("FLASK_PORT", "5000"))
    SECRET_KEY: str = os.getenv("SECRET_KEY", "dev-secret-key")
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "*")

    # Page fetching (URL import)
    # Leave FETCH_PROXY_URL unset to fetch pages directly
    FETCH_PROXY_URL: Optional[str] = os.getenv("FETCH_PROXY_URL")
    FETCH_PROXY_KEY: Optional[str] = os.getenv("FETCH_PROXY_KEY")
    FETCH_TIMEOUT_S: int = int(os.getenv("FETCH_TIMEOUT_S", "10"))
    FETCH_MAX_BYTES: int = int(os.getenv("FETCH_MAX_BYTES", str(5 * 1024 * 1024)))
    # Comma-separated; empty allows any domain
    FETCH_ALLOWED_DOMAINS: str = os.getenv("FETCH_ALLOWED_DOMAINS", "")

    # Crowd-learned aliases (PostgREST-style endpoint)
    CROWD_ALIAS_URL: Optional[str] = os.getenv("CROWD_ALIAS_URL")
    CROWD_ALIAS_API_KEY: Optional[str] = os.getenv("CROWD_ALIAS_API_KEY")
    CROWD_ALIAS_MIN_USAGE: int = int(os.getenv("CROWD_ALIAS_MIN_USAGE", "3"))
    CROWD_ALIAS_TIMEOUT_S: int = int(os.getenv("CROWD_ALIAS_TIMEOUT_S", "5"))

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @classmethod
    def validate(cls) -> list[str]:
        """
        Validate configuration.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        if cls.CROWD_ALIAS_URL and not cls.CROWD_ALIAS_API_KEY:
            errors.append("CROWD_ALIAS_API_KEY not set (required when CROWD_ALIAS_URL is set)")

        if cls.CROWD_ALIAS_MIN_USAGE < 1:
            errors.append(f"Invalid CROWD_ALIAS_MIN_USAGE: {cls.CROWD_ALIAS_MIN_USAGE}. Must be >= 1")

        if cls.FETCH_TIMEOUT_S <= 0:
            errors.append(f"Invalid FETCH_TIMEOUT_S: {cls.FETCH_TIMEOUT_S}. Must be > 0")

        if cls.FETCH_PROXY_URL and not cls.FETCH_PROXY_URL.startswith(("http://", "https://")):
            errors.append(f"Invalid FETCH_PROXY_URL: {cls.FETCH_PROXY_URL}")

        return errors

    @classmethod
    def is_valid(cls) -> bool:
        """Check if configuration is valid."""
        return len(cls.validate()) == 0

    @classmethod
    def get_cors_origins(cls) -> list[str]:
        """Parse CORS_ORIGINS into a list ("*" means any origin)."""
        origins = [o.strip() for o in cls.CORS_ORIGINS.split(",") if o.strip()]
        return origins or ["*"]

    @classmethod
    def get_allowed_domains(cls) -> list[str]:
        """Parse FETCH_ALLOWED_DOMAINS into a list (empty means any domain)."""
        return [d.strip().lower() for d in cls.FETCH_ALLOWED_DOMAINS.split(",") if d.strip()]

    @classmethod
    def get_summary(cls) -> dict:
        """Get configuration summary (safe for logging)."""
        return {
            "flask_env": cls.FLASK_ENV,
            "flask_debug": cls.FLASK_DEBUG,
            "fetch_proxy_configured": cls.FETCH_PROXY_URL is not None,
            "fetch_timeout_s": cls.FETCH_TIMEOUT_S,
            "crowd_aliases_configured": cls.CROWD_ALIAS_URL is not None,
            "crowd_alias_min_usage": cls.CROWD_ALIAS_MIN_USAGE,
            "log_level": cls.LOG_LEVEL,
        }

"""Settings configuration using pydantic-settings for environment variable management."""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from dotenv import load_dotenv

load_dotenv(override=True)


FALLBACK_ACCESS_SECRET = "fallback-secret-key"
FALLBACK_REFRESH_SECRET = "fallback-refresh-secret-key"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    MONGODB_URL: str = "mongodb://localhost:27017"
    DATABASE_NAME: str = "mindjournal"

    JWT_SECRET: str = FALLBACK_ACCESS_SECRET
    JWT_REFRESH_SECRET: str = FALLBACK_REFRESH_SECRET
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 15
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7

    BCRYPT_ROUNDS: int = 12

    FRONTEND_URL: str = "http://localhost:5173"
    PORT: int = 5000
    ENVIRONMENT: str = "development"

    APP_NAME: str = "MindJournal"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    @field_validator("ENVIRONMENT", mode="before")
    @classmethod
    def normalize_environment(cls, v):
        """Lower-case and trim the environment name."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT == "development"

    def uses_fallback_secrets(self) -> list[str]:
        """
        Names of the JWT secrets still set to their hardcoded fallback.

        Returns:
            List of setting names (e.g., ['JWT_SECRET']), empty when both are configured
        """
        fallbacks = []
        if self.JWT_SECRET == FALLBACK_ACCESS_SECRET:
            fallbacks.append("JWT_SECRET")
        if self.JWT_REFRESH_SECRET == FALLBACK_REFRESH_SECRET:
            fallbacks.append("JWT_REFRESH_SECRET")
        return fallbacks


settings = Settings()

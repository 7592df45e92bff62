"""Application settings using pydantic-settings."""

from functools import lru_cache

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Credential configuration - single source of truth.

    All settings loaded from environment variables or .env files.

    Usage:
        settings = get_settings()
        hasher = Pbkdf2PasswordHasher(pepper=settings.password_pepper)
    """

    # Password hashing
    password_pepper: str = Field(default="", validate_default=True)
    password_hash_iterations: int = Field(default=10000, ge=1)
    password_salt_size: int = Field(default=16, ge=8)
    password_key_size: int = Field(default=32, ge=16)

    # Password policy
    password_min_length: int = Field(default=8, ge=1)
    password_max_length: int = Field(default=48, ge=1)
    generated_password_length: int = Field(default=16)

    # Verification codes
    verification_code_ttl_minutes: int = Field(default=5, ge=1)

    # Logging
    log_level: str = Field(default="INFO")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("password_pepper")
    @classmethod
    def validate_password_pepper(cls, v: str) -> str:
        """Ensure the pepper is provided and meets requirements."""
        if not v or len(v) < 16:
            raise ValueError(
                "PASSWORD_PEPPER must be set in environment and be at least 16 characters long"
            )
        return v

    @model_validator(mode="after")
    def validate_password_lengths(self) -> "Settings":
        """Ensure the policy bounds are consistent with the generator."""
        if self.password_max_length < self.password_min_length:
            raise ValueError(
                "PASSWORD_MAX_LENGTH must be greater than or equal to PASSWORD_MIN_LENGTH"
            )
        if not (
            self.password_min_length
            <= self.generated_password_length
            <= self.password_max_length
        ):
            raise ValueError(
                "GENERATED_PASSWORD_LENGTH must lie within the password policy bounds"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Settings are loaded once and cached for the application lifecycle.
    For testing, clear the cache with: get_settings.cache_clear()

    Returns:
        Settings instance loaded from environment
    """
    return Settings()

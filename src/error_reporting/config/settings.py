from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from pathlib import Path
from typing import Literal
from functools import lru_cache
from ..validators.config_validators import to_uppercase, to_lowercase


class Settings(BaseSettings):
    """
    Error-reporting settings loaded from environment.
    """

    # Environment mode. "test" (any casing) silences every reporting call.
    ENV: str = "development"

    # Sentry
    SENTRY_DSN: str | None = None
    SENTRY_ENVIRONMENT: str = "production"

    # Console tracebacks: frames from these packages are collapsed
    TRACEBACK_SUPPRESS: list[str] = ["starlette", "fastapi"]

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "json"
    LOG_TO_STDOUT: bool = True
    LOG_DIR: Path = Path("/var/log/error-reporting")
    LOG_MAX_BYTES: int = 10_000_000  # 10 MB
    LOG_BACKUP_COUNT: int = 5

    # --- Derived settings ---
    @property
    def is_test_mode(self) -> bool:
        """
        True when the process runs under automated tests.

        ENV is lower-cased by its validator, so "TEST", "Test" and "test"
        all switch reporting off.
        """
        return self.ENV == "test"

    # --- Validators ---
    @field_validator("ENV", mode="before")
    def normalize_env(cls, v: str | None) -> str | None:
        """
        Normalize the ENV environment variable value to lowercase.
        """
        return to_lowercase(v)

    @field_validator("LOG_LEVEL", mode="before")
    def normalize_log_level(cls, v: str | None) -> str | None:
        """
        Normalize the LOG_LEVEL environment variable value to uppercase.

        Runs before Literal validation so "debug" and "Debug" are accepted.
        """
        return to_uppercase(v)

    @field_validator("LOG_FORMAT", mode="before")
    def normalize_log_format(cls, v: str | None) -> str | None:
        """
        Normalize the LOG_FORMAT environment variable value to lowercase.
        """
        return to_lowercase(v)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        # the .env file is usually shared with the host application
        extra="ignore",
    )


# get_settings() takes no arguments and always returns the same settings from the environment,
# so caching it with @lru_cache() is good for performance.
@lru_cache()
def get_settings() -> Settings:
    return Settings()

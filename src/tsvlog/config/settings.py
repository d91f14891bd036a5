from pydantic_settings import BaseSettings
from pydantic import ConfigDict, field_validator
from pathlib import Path
from typing import Literal
from functools import lru_cache
from ..validators.config_validators import to_uppercase, to_lowercase, strip_or_default

class Settings(BaseSettings):
    """
    Logger settings loaded from environment.
    """

    # Environment
    ENV: Literal["development", "testing", "staging", "production"] = "development"

    # Logging
    LOG_LEVEL: Literal[
        "NONE", "DEBUG", "INFO", "NOTICE", "WARNING", "ERROR", "CRITICAL", "ALERT", "EMERGENCY"
    ] = "INFO"
    LOG_CHANNEL: str = "app"
    LOG_FORMAT: Literal["tsv", "json"] = "tsv"
    LOG_TO_STDOUT: bool = False
    LOG_DIR: Path = Path("storage/log")
    LOG_FILE: str = "app"

    # Processors
    LOG_REDACT: bool = True
    LOG_REQUEST_ID: bool = True

    # --- Validators ---
    @field_validator("LOG_LEVEL", mode="before")
    def normalize_log_level(cls, v: str | None) -> str | None:
        """
        Normalize the LOG_LEVEL environment variable value to uppercase.

        This validator runs before the Literal check (mode="before"), so "debug",
        "Debug" and "DEBUG" are all accepted. Anything that is still not one of the
        nine level names after normalization is rejected by Pydantic with a
        ValidationError when Settings() is constructed.

        Args:
            cls: The class where this validator is defined.
            v (str | None): The raw input value for LOG_LEVEL from the environment.

        Returns:
            str | None: The normalized uppercase level name, or None if input was None.
        """
        return to_uppercase(v)

    @field_validator("LOG_FORMAT", mode="before")
    def normalize_log_format(cls, v: str | None) -> str | None:
        """
        Normalize the LOG_FORMAT environment variable value to lowercase.
        """
        return to_lowercase(v)

    @field_validator("LOG_CHANNEL", "LOG_FILE", mode="before")
    def normalize_names(cls, v: str | None) -> str:
        """
        Blank channel / file names fall back to "app".
        """
        return strip_or_default(v, "app")

    # --- ConfigDict settings ---
    model_config = ConfigDict(
        # Load environment variables from a .env file in the working directory.
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

# get_settings() takes no arguments and always returns the same settings from the environment,
# so caching it with @lru_cache() is good for performance.
@lru_cache()
def get_settings() -> Settings:
    return Settings()

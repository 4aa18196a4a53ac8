"""Library configuration via environment variables."""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Validator settings loaded from FIELDCHECK_* environment variables."""

    # Logging
    DEBUG: bool = False
    LOG_LEVEL: str = "info"

    # Messages
    DEFAULT_VALID_MESSAGE: str = "This field is valid."

    # Date/time predicates (letter tokens like "m/d/Y", or strftime directives)
    DEFAULT_DATE_FORMAT: str = "m/d/Y"
    DEFAULT_TIME_FORMAT: str = "H:i"

    # MIME resolution
    CONTENT_INSPECTION: bool = True
    INSPECTION_BYTES: int = 2048

    model_config = {"env_prefix": "FIELDCHECK_", "env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache
def get_settings() -> Settings:
    return Settings()

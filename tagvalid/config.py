"""Library configuration via environment variables."""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings

DEFAULT_TAG_NAME = "valid"


class Settings(BaseSettings):
    """Settings loaded from ``TAGVALID_*`` environment variables."""

    # Validation
    TAG_NAME: str = DEFAULT_TAG_NAME
    MAX_DEPTH: Optional[int] = None

    # Logging
    DEBUG: bool = False
    LOG_LEVEL: str = "info"

    model_config = {"env_prefix": "TAGVALID_"}


@lru_cache
def get_settings() -> Settings:
    return Settings()

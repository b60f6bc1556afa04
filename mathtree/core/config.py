"""
Library configuration.

Settings are read from ``MATHTREE_``-prefixed environment variables and an
optional ``.env`` file.
"""

from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    """Library settings"""

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "text"  # json or text
    LOG_FILE: Optional[str] = None

    # Parsing
    CONTEXT_FILE: Optional[str] = None  # YAML context, see Context.from_yaml
    NESTED_FUNCTIONS: bool = True

    class Config:
        env_prefix = "MATHTREE_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()

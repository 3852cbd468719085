"""
Reader configuration management.

This module handles configuration from environment variables using Pydantic Settings.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Reader configuration from environment variables.

    All settings can be overridden via environment variables prefixed with
    EML_READER_ (e.g. EML_READER_MAX_MULTIPART_DEPTH).
    """

    # Message defaults applied at the start of every parse
    default_charset: str = Field(
        default="UTF-8",
        description="Charset recorded when Content-Type carries no charset parameter",
    )
    default_encoding: str = Field(
        default="quoted-printable",
        description="Default transfer encoding recorded on parsed messages",
    )

    # Processing limits
    max_multipart_depth: int = Field(
        default=32,
        ge=1,
        description="Maximum nesting of multipart bodies before the parse is aborted",
    )

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    model_config = {
        "env_prefix": "EML_READER_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> Settings:
    """
    Get cached reader settings.

    Returns:
        Settings instance built from the environment
    """
    return Settings()

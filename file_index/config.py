"""
Settings for the file index service.

Values come from FILE_INDEX_* environment variables and are read once.
"""

import os
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, field_validator

ENV_PREFIX = "FILE_INDEX_"


class Settings(BaseModel):
    """Site and scan settings"""
    site: str = "https://example.com"
    base: str = "/"
    public_dir: Path = Path("public")
    timezone: str = "Asia/Shanghai"
    log_level: str = "INFO"

    # Scan policy
    excluded_prefix: str = "_"
    hidden_prefix: str = "."
    index_name: str = "index.html"
    ignored_names: frozenset[str] = frozenset()

    @field_validator("ignored_names", mode="before")
    @classmethod
    def split_ignored_names(cls, value):
        # Environment values are comma-separated
        if isinstance(value, str):
            return frozenset(name.strip() for name in value.split(",") if name.strip())
        return value

    @field_validator("base")
    @classmethod
    def normalize_base(cls, value: str) -> str:
        # Routes always end with a slash, so the base does too
        value = "/" + value.strip("/")
        return value if value == "/" else value + "/"

    @field_validator("log_level")
    @classmethod
    def upper_log_level(cls, value: str) -> str:
        return value.upper()

    def scan_options(self) -> dict:
        """Keyword arguments for scan_listings"""
        return {
            "excluded_prefix": self.excluded_prefix,
            "hidden_prefix": self.hidden_prefix,
            "index_name": self.index_name,
            "ignored_names": self.ignored_names,
        }


def load_settings(environ=None) -> Settings:
    """
    Build settings from environment variables.

    Args:
        environ: Mapping to read from (defaults to os.environ)

    Returns:
        Settings with every FILE_INDEX_* override applied
    """
    environ = os.environ if environ is None else environ
    values = {}
    for field in Settings.model_fields:
        key = ENV_PREFIX + field.upper()
        if key in environ:
            values[field] = environ[key]
    return Settings(**values)


@lru_cache
def get_settings() -> Settings:
    return load_settings()

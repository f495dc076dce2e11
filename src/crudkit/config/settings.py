"""
Centralized settings for crudkit.

:class:`CrudKitSettings` is the single validated source for connection
strings, MongoDB options and logging preferences.  Values come from
``CRUDKIT_*`` environment variables or a ``.env`` file; nested MongoDB
options use the ``__`` delimiter (``CRUDKIT_MONGO__DATABASE_NAME``).

Examples:
    >>> import os
    >>> os.environ["CRUDKIT_CONNECTION_STRINGS"] = '{"default": "sqlite:///app.db"}'
    >>> get_settings(_force_reload=True).connection_string("default")
    'sqlite:///app.db'

Tags:
    crudkit, configuration, settings, pydantic, caching
"""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class MongoDbOptions(BaseModel):
    """Connection options for the document store."""

    connection_string: str = Field(default="mongodb://localhost:27017/")
    database_name: str = Field(default="crudkit")


class CrudKitSettings(BaseSettings):
    """crudkit configuration.

    All fields can be set via ``CRUDKIT_*`` environment variables.
    """

    model_config = SettingsConfigDict(
        env_prefix="CRUDKIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    # ── Relational ───────────────────────────────────────────────
    connection_strings: dict[str, str] = Field(
        default_factory=dict,
        description="Named SQLAlchemy URLs, e.g. {'default': 'sqlite:///app.db'}",
    )
    database_echo: bool = Field(default=False)

    # ── Document store ───────────────────────────────────────────
    mongo: MongoDbOptions = Field(default_factory=MongoDbOptions)

    # ── Logging ──────────────────────────────────────────────────
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="console")

    def connection_string(self, name: str) -> str | None:
        """Return the connection string registered under *name*, if any."""
        return self.connection_strings.get(name)


# ── Settings factory with caching ────────────────────────────────────────

_settings_cache: CrudKitSettings | None = None


def get_settings(*, _force_reload: bool = False) -> CrudKitSettings:
    """Load, validate, and cache a :class:`CrudKitSettings` instance."""
    global _settings_cache
    if _force_reload or _settings_cache is None:
        _settings_cache = CrudKitSettings()
    return _settings_cache


def clear_settings_cache() -> None:
    """Clear the settings cache (primarily for testing)."""
    global _settings_cache
    _settings_cache = None


__all__ = [
    "MongoDbOptions",
    "CrudKitSettings",
    "get_settings",
    "clear_settings_cache",
]

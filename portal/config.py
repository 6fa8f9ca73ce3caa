"""Application settings loaded from environment variables."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

_PREFIX = "APP_"
_SEPARATOR = "__"

_DATABASE_URL_KEYS = {
    "development": "LOCAL_DATABASE_URL",
    "production": "PROD_DATABASE_URL",
}

_DEFAULTS = {
    "server.host": "127.0.0.1",
    "server.port": "8080",
    "database.max_connections": "20",
    "database.min_connections": "5",
    "database.connection_timeout": "30",
    "database.idle_timeout": "600",
}

_U16_MAX = 2**16 - 1
_U32_MAX = 2**32 - 1
_U64_MAX = 2**64 - 1


class ConfigError(Exception):
    """Raised when the configuration is missing or invalid."""


@dataclass(frozen=True)
class DatabaseConfig:
    url: str
    max_connections: int = 20
    min_connections: int = 5
    connection_timeout: int = 30
    idle_timeout: int = 600


@dataclass(frozen=True)
class ServerConfig:
    host: str = "127.0.0.1"
    port: int = 8080


@dataclass(frozen=True)
class AppConfig:
    database: DatabaseConfig
    server: ServerConfig
    environment: str

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> AppConfig:
        """Build the configuration from ``environ`` (``os.environ`` by default)."""
        env = os.environ if environ is None else environ

        app_environment = env.get("APP_ENV")
        if app_environment is None:
            raise ConfigError("APP_ENV: environment variable not found")

        url_key = _DATABASE_URL_KEYS.get(app_environment)
        if url_key is None:
            raise ConfigError(
                f"Unsupported APP_ENV value '{app_environment}'. "
                "Valid values: development, production"
            )

        database_url = env.get(url_key)
        if database_url is None:
            raise ConfigError(f"{url_key}: environment variable not found")

        values = dict(_DEFAULTS)
        for name, value in env.items():
            if name.startswith(_PREFIX):
                key = name[len(_PREFIX):].lower().replace(_SEPARATOR, ".")
                values[key] = value
        values["database.url"] = database_url
        values["environment"] = app_environment

        config = cls(
            database=DatabaseConfig(
                url=values["database.url"],
                max_connections=_integer(values, "database.max_connections", _U32_MAX),
                min_connections=_integer(values, "database.min_connections", _U32_MAX),
                connection_timeout=_integer(values, "database.connection_timeout", _U64_MAX),
                idle_timeout=_integer(values, "database.idle_timeout", _U64_MAX),
            ),
            server=ServerConfig(
                host=values["server.host"],
                port=_integer(values, "server.port", _U16_MAX),
            ),
            environment=values["environment"],
        )

        if config.database.min_connections > config.database.max_connections:
            raise ConfigError("min_connections cannot be greater than max_connections")
        return config


def _integer(values: Mapping[str, str], key: str, maximum: int) -> int:
    raw = values[key]
    try:
        number = int(raw.strip())
    except ValueError:
        raise ConfigError(f"invalid value {raw!r} for {key}: expected an integer") from None
    if not 0 <= number <= maximum:
        raise ConfigError(f"invalid value {raw!r} for {key}: out of range")
    return number
"""
Configuration loading for the backend server.

Configuration values are resolved using the following precedence:

1. Explicit arguments passed to `load_config`
2. Environment variables (e.g., BACKEND_PORT, BACKEND_DATABASE_URI)
3. `backend.toml` if present in the working directory
4. Built-in defaults

The database connection string is never embedded in source; deployments
provide it through `BACKEND_DATABASE_URI` or the `[database]` table.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import tomllib
from pydantic import BaseModel, Field, ValidationError, field_validator

from app.exceptions import ConfigError

__all__ = [
    "ConfigError",
    "DEFAULT_DATABASE_URI",
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "Settings",
    "load_config",
]


DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8000
DEFAULT_DATABASE_URI = "mongodb://localhost:27017"
DEFAULT_CONFIG_FILE = Path("backend.toml")
LOG_FORMATS = {"json", "console"}
LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class Settings(BaseModel):
    """Top-level settings shared by the bootstrap, connector and logging."""

    host: str = Field(DEFAULT_HOST, description="Interface to bind", min_length=1)
    port: int = Field(DEFAULT_PORT, description="TCP port to listen on", ge=1, le=65535)
    database_uri: str = Field(
        DEFAULT_DATABASE_URI, description="MongoDB connection string", min_length=1
    )
    db_timeout_ms: Optional[int] = Field(
        None,
        description="Server selection timeout; driver default when unset",
        gt=0,
    )
    require_database: bool = Field(
        False, description="Block startup until the database connect settles"
    )
    cors_origins: List[str] = Field(
        default_factory=lambda: ["*"], description="Allowed cross-origin callers"
    )
    health_checks_enabled: bool = Field(
        False, description="Expose /health, /health/* and /metrics"
    )
    log_level: str = Field("INFO", description="Root log level")
    log_format: str = Field("console", description="Log renderer: json or console")
    log_file: Optional[Path] = Field(None, description="Optional rotating log file")

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: Any) -> List[str]:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("log_level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized == "WARN":
            normalized = "WARNING"
        if normalized not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(LOG_LEVELS)}")
        return normalized

    @field_validator("log_format")
    @classmethod
    def _check_format(cls, value: str) -> str:
        normalized = value.lower()
        if normalized not in LOG_FORMATS:
            raise ValueError(f"log_format must be one of {sorted(LOG_FORMATS)}")
        return normalized

    @field_validator("log_file", mode="before")
    @classmethod
    def _coerce_path(cls, value: Any) -> Optional[Path]:
        if value is None or value == "":
            return None
        return Path(value) if not isinstance(value, Path) else value


def load_config(
    config_path: Optional[Path | str] = None, **overrides: Any
) -> Settings:
    """
    Load backend settings from arguments/environment/file/defaults.

    Args:
        config_path: Optional explicit path to a `backend.toml` file.
        **overrides: Field values that win over every other source.

    Returns:
        Settings populated with the resolved values.

    Raises:
        ConfigError: if the config file is missing, cannot be parsed, or a
            resolved value fails validation.
    """

    raw_data = _load_toml_data(config_path)
    server = raw_data.get("server", {})
    database = raw_data.get("database", {})
    logging_data = raw_data.get("logging", {})

    values: Dict[str, Any] = {
        "host": _env_or_value("BACKEND_HOST", server.get("host"), DEFAULT_HOST),
        "port": _env_or_value("BACKEND_PORT", server.get("port"), DEFAULT_PORT),
        "database_uri": _env_or_value(
            "BACKEND_DATABASE_URI", database.get("uri"), DEFAULT_DATABASE_URI
        ),
        "cors_origins": _env_or_value(
            "BACKEND_CORS_ORIGINS", _join(server.get("cors_origins")), "*"
        ),
        "require_database": _env_bool(
            "BACKEND_REQUIRE_DATABASE", database.get("required", False)
        ),
        "health_checks_enabled": _env_bool(
            "BACKEND_HEALTH_CHECKS_ENABLED", server.get("health_checks", False)
        ),
        "log_level": _env_or_value("BACKEND_LOG_LEVEL", logging_data.get("level"), "INFO"),
        "log_format": _env_or_value(
            "BACKEND_LOG_FORMAT", logging_data.get("format"), "console"
        ),
    }

    timeout = os.getenv("BACKEND_DB_TIMEOUT_MS", database.get("timeout_ms"))
    if timeout is not None:
        values["db_timeout_ms"] = timeout

    log_file = os.getenv("BACKEND_LOG_FILE", logging_data.get("file"))
    if log_file:
        values["log_file"] = log_file

    values.update(overrides)

    try:
        return Settings(**values)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc


def _load_toml_data(config_path: Optional[Path | str]) -> Dict[str, Any]:
    """Load data from a TOML file if one can be resolved."""

    resolved = _resolve_config_path(config_path)
    if resolved is None:
        return {}

    if not resolved.exists():
        raise ConfigError(f"Configuration file not found: {resolved}")

    try:
        with resolved.open("rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Cannot parse {resolved}: {exc}") from exc


def _resolve_config_path(config_path: Optional[Path | str]) -> Optional[Path]:
    """Resolve configuration path with environment fallback."""

    if config_path:
        return Path(config_path)

    env_path = os.getenv("BACKEND_CONFIG_FILE")
    if env_path:
        return Path(env_path)

    return DEFAULT_CONFIG_FILE if DEFAULT_CONFIG_FILE.exists() else None


def _join(value: Any) -> Optional[str]:
    if isinstance(value, list):
        return ",".join(str(item) for item in value)
    return value


def _env_bool(env_var: str, default: Any) -> bool:
    """Resolve boolean from environment with fallback; file strings parse the same way."""

    value = os.getenv(env_var)
    if value is None:
        if not isinstance(default, str):
            return bool(default)
        value = default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    raise ConfigError(f"Invalid boolean for {env_var}: {value}")


def _env_or_value(env_var: str, value: Any, default: Any) -> str:
    """Return environment variable value if set, otherwise fallback to provided/default values."""

    env_value = os.getenv(env_var)
    if env_value is not None:
        return env_value
    if value is not None:
        return str(value)
    return str(default)

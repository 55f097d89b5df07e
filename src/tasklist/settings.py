from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List

from dotenv import load_dotenv

load_dotenv(override=False)

DEFAULT_DATABASE_URL = "sqlite:///./data/tasks.db"
DEFAULT_PORT = 5678


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - DATABASE_URL: SQLAlchemy connection string. Default 'sqlite:///./data/tasks.db'
    - PORT: listen port for the service (default: 5678)
    - HOST: listen host for the service (default: 0.0.0.0)
    - CORS_ALLOW_ORIGINS: comma-separated list of allowed origins; '*' by default
    - LOG_LEVEL: root log level name (default: INFO)
    - TASKLIST_API_URL: base URL the client talks to (default: http://localhost:5678/api)
    """

    database_url: str
    host: str
    port: int
    cors_allow_origins: List[str]
    log_level: str
    api_url: str


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value.strip() == "":
        return default
    return value


def _parse_port(value: str, default: int = DEFAULT_PORT) -> int:
    try:
        port = int(value.strip())
    except ValueError:
        return default
    if not (0 < port < 65536):
        return default
    return port


def _parse_origins(origins_value: str) -> List[str]:
    """
    Parse CORS origins from env. Supports:
    - '*' to allow all origins
    - Comma-separated list of origins
    """
    value = origins_value.strip()
    if value == "*":
        return ["*"]
    return [o.strip() for o in value.split(",") if o.strip()]


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return application settings loaded from environment variables."""
    port = _parse_port(_get_env("PORT", str(DEFAULT_PORT)))
    log_level = _get_env("LOG_LEVEL", "INFO").strip().upper()
    if log_level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        log_level = "INFO"

    return Settings(
        database_url=_get_env("DATABASE_URL", DEFAULT_DATABASE_URL).strip(),
        host=_get_env("HOST", "0.0.0.0").strip(),
        port=port,
        cors_allow_origins=_parse_origins(_get_env("CORS_ALLOW_ORIGINS", "*")),
        log_level=log_level,
        api_url=_get_env("TASKLIST_API_URL", f"http://localhost:{port}/api").strip().rstrip("/"),
    )

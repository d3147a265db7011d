import os
from datetime import timedelta
from urllib.parse import urlparse, urlunparse

DEFAULT_DATABASE_URL = "sqlite:///dealerdesk.db"


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    text = value.strip()
    if not text:
        return default
    try:
        return int(text)
    except ValueError:
        return default


def _normalize_db_url(url: str) -> str:
    if not url:
        return DEFAULT_DATABASE_URL

    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql://", 1)

    parsed = urlparse(url)

    if parsed.scheme not in {"postgresql", "postgresql+psycopg2"}:
        return url

    def _preferred_db_name() -> str | None:
        for key in ("PGDATABASE", "POSTGRES_DB", "POSTGRES_DATABASE", "DATABASE_NAME"):
            value = os.getenv(key)
            if value:
                return value
        return None

    path = (parsed.path or "").lstrip("/")
    preferred_db = _preferred_db_name()

    if preferred_db:
        if not path:
            parsed = parsed._replace(path=f"/{preferred_db}")
        elif path == "postgres" and preferred_db != "postgres":
            parsed = parsed._replace(path=f"/{preferred_db}")

    return urlunparse(parsed)


def current_database_url() -> str:
    """``DATABASE_URL`` from the environment, normalised; read on every call."""

    return _normalize_db_url((os.getenv("DATABASE_URL") or "").strip())


class Config:
    SQLALCHEMY_DATABASE_URI = current_database_url()
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "dealerdesk-dev-secret-change-me-in-production")
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=_env_int("JWT_ACCESS_TOKEN_HOURS", 10))
    JWT_TOKEN_LOCATION = ["headers"]
    LOG_LEVEL = (os.getenv("LOG_LEVEL") or "INFO").strip().upper()
    PAGINATION_DEFAULT_LIMIT = _env_int("PAGINATION_DEFAULT_LIMIT", 10)
    PAGINATION_MAX_LIMIT = _env_int("PAGINATION_MAX_LIMIT", 100)

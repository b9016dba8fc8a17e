# backend/vendorhub/config.py
from __future__ import annotations
import os


def _postgres_uri_from_parts() -> str | None:
    """Build a PostgreSQL URI from POSTGRES_* / DB_* variables, if a host is given."""
    host = os.environ.get("POSTGRES_HOST") or os.environ.get("DB_HOST")
    if not host:
        return None
    user = os.environ.get("POSTGRES_USER") or os.environ.get("DB_USER") or "postgres"
    password = os.environ.get("POSTGRES_PASSWORD") or os.environ.get("DB_PASSWORD") or ""
    port = os.environ.get("POSTGRES_PORT") or os.environ.get("DB_PORT") or "5432"
    database = os.environ.get("POSTGRES_DATABASE") or os.environ.get("DB_NAME") or "vendorhub"
    auth = f"{user}:{password}" if password else user
    return f"postgresql+psycopg2://{auth}@{host}:{port}/{database}"


def _env_flag(name: str, default: str = "false") -> bool:
    return os.environ.get(name, default).lower() == "true"


class Config:
    # Optional "SECRET_KEY", with default dev key
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    # memory | file | sql
    STORE_BACKEND = os.environ.get("STORE_BACKEND", "memory").lower()

    # JSON document used by the file backend
    DATA_FILE = os.environ.get("DATA_FILE", "vendorhub_data.json")

    SQLALCHEMY_DATABASE_URI = (
        os.environ.get("DATABASE_URL")
        or os.environ.get("POSTGRES_URL")
        or _postgres_uri_from_parts()
        or "sqlite:///vendorhub.sqlite3"  # default local location
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    SEED_DEMO = _env_flag("SEED_DEMO")

    CORS_ORIGINS = [
        origin.strip()
        for origin in os.environ.get(
            "CORS_ORIGINS",
            "http://localhost:3000,http://127.0.0.1:3000,http://localhost:5173,http://127.0.0.1:5173",
        ).split(",")
        if origin.strip()
    ]

    API_VERSION = "3.0"

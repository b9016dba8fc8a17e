# Overview: Record store selection; one store per Flask app, kept in app.extensions.

from flask import Flask, current_app

from .base import COLLECTIONS, RecordStore
from .file import JsonFileStore
from .memory import MemoryStore
from .sql import SqlStore

EXTENSION_KEY = "record_store"

BACKENDS = ("memory", "file", "sql")


def build_store(app: Flask) -> RecordStore:
    """Create the store named by STORE_BACKEND and attach it to the app."""
    backend = app.config.get("STORE_BACKEND", "memory")
    if backend == "memory":
        store = MemoryStore()
    elif backend == "file":
        store = JsonFileStore(app.config["DATA_FILE"])
    elif backend == "sql":
        store = SqlStore()
    else:
        raise ValueError(f"Unknown STORE_BACKEND {backend!r}; expected one of {', '.join(BACKENDS)}")
    app.extensions[EXTENSION_KEY] = store
    return store


def get_store() -> RecordStore:
    return current_app.extensions[EXTENSION_KEY]


__all__ = [
    "COLLECTIONS", "RecordStore", "MemoryStore", "JsonFileStore", "SqlStore",
    "BACKENDS", "build_store", "get_store",
]

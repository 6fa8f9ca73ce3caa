"""Membership portal backend: configuration, SQLite storage, models, auth types, payloads and handlers."""

__version__ = "0.1.0"
"""Persistence layer - configuration files and database settings."""

from mediaconf.persistence.adapter import ResourcePersistence
from mediaconf.persistence.config import DatabaseConfig, ServerPaths, resolve_base_path
from mediaconf.persistence.files import FileResourcePersistence

__all__ = [
    "DatabaseConfig",
    "FileResourcePersistence",
    "ResourcePersistence",
    "ServerPaths",
    "resolve_base_path",
]

"""Server path and database configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


def resolve_base_path() -> Path:
    """Base path is the repository root when running from /backend."""
    cwd = Path.cwd()
    if cwd.name == "backend":
        return cwd.parent
    return cwd


@dataclass
class ServerPaths:
    """Filesystem layout of a mediaconf installation.

    Attributes:
        data_path: Root data directory
        configuration_path: Directory holding system.json and <key>.json files
        metadata_path: Directory holding YAML manifests (plugins/, libraries/)
    """

    data_path: Path
    configuration_path: Path
    metadata_path: Path

    SYSTEM_CONFIGURATION_FILE = "system.json"

    @classmethod
    def from_env(cls, base_path: Path | None = None) -> ServerPaths:
        """Create paths from environment variables.

        Resolution order for the data directory:
        1. MEDIACONF_DATA_DIR env var
        2. {base_path}/data, base_path defaulting to resolve_base_path()

        MEDIACONF_METADATA_DIR overrides the manifest directory, which
        otherwise defaults to {base_path}/metadata.
        """
        base = base_path or resolve_base_path()

        data_dir = os.environ.get("MEDIACONF_DATA_DIR")
        data_path = Path(data_dir) if data_dir else base / "data"

        metadata_dir = os.environ.get("MEDIACONF_METADATA_DIR")
        metadata_path = Path(metadata_dir) if metadata_dir else base / "metadata"

        return cls(
            data_path=data_path,
            configuration_path=data_path / "config",
            metadata_path=metadata_path,
        )

    @property
    def system_configuration_file(self) -> Path:
        return self.configuration_path / self.SYSTEM_CONFIGURATION_FILE

    def named_configuration_file(self, key: str) -> Path:
        return self.configuration_path / f"{key}.json"

    @property
    def plugins_path(self) -> Path:
        return self.metadata_path / "plugins"

    @property
    def libraries_path(self) -> Path:
        return self.metadata_path / "libraries"


@dataclass
class DatabaseConfig:
    """Database connection configuration for the user store.

    Supports sqlite:/// and postgresql:// URL schemes.
    """

    url: str

    @classmethod
    def from_env(cls, data_path: Path | None = None) -> DatabaseConfig:
        """Create config from environment variables.

        Resolution order:
        1. DATABASE_URL env var (standard)
        2. MEDIACONF_DB_PATH env var (converted to sqlite:/// URL)
        3. Default: sqlite:///{data_path}/mediaconf.db
        """
        url = os.environ.get("DATABASE_URL")
        if url:
            return cls(url=url)

        db_path = os.environ.get("MEDIACONF_DB_PATH")
        if db_path:
            return cls(url=f"sqlite:///{db_path}")

        if data_path:
            return cls(url=f"sqlite:///{data_path / 'mediaconf.db'}")

        return cls(url="sqlite:///mediaconf.db")

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    @property
    def sqlalchemy_url(self) -> str:
        """URL suitable for SQLAlchemy engine creation.

        postgresql:// URLs are pinned to the psycopg (v3) driver.
        """
        if self.url.startswith("postgresql://"):
            return self.url.replace("postgresql://", "postgresql+psycopg://", 1)
        return self.url

"""Configuration store.

Holds the singleton ServerConfiguration in memory and persists it as
system.json. The in-memory copy is reloaded when system.json changes
on disk (for example via `mediaconf config set system`). Named configurations are resolved through the type
registry and persisted as <key>.json next to it; they are always read
from persistence so a GET reflects the last committed write.

Writers to the same resource are serialized with a per-resource lock.
Across processes the last write wins.
"""

import logging
import threading
from pathlib import Path

from mediaconf.configuration.cache import ResourceIdentity
from mediaconf.configuration.errors import ConfigurationLoadError, SchemaMismatchError
from mediaconf.configuration.registry import ConfigurationTypeRegistry
from mediaconf.configuration.types import (
    ConfigurationModel,
    ServerConfiguration,
    coerce_to_schema,
)
from mediaconf.events import (
    CONFIGURATION_UPDATED,
    NAMED_CONFIGURATION_UPDATED,
    EventChannel,
)
from mediaconf.persistence.adapter import ResourcePersistence
from mediaconf.persistence.config import ServerPaths

logger = logging.getLogger(__name__)

_SYSTEM_LOCK_KEY = "\x00system"


class ConfigurationStore:
    """Get/replace the application configuration and get/save named ones."""

    def __init__(
        self,
        paths: ServerPaths,
        registry: ConfigurationTypeRegistry,
        persistence: ResourcePersistence,
        events: EventChannel | None = None,
    ):
        """Initialize the store and load the application configuration.

        A missing system.json yields schema defaults (not persisted until
        ensure_defaults() or the first replace). A corrupt one raises.

        Raises:
            ConfigurationLoadError: If system.json exists but is malformed
        """
        self._paths = paths
        self._registry = registry
        self._persistence = persistence
        self._events = events
        self._locks: dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()
        self._loaded_ticks = self._system_ticks()
        self._configuration = self._load_application_configuration()

    @property
    def registry(self) -> ConfigurationTypeRegistry:
        return self._registry

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _lock_for(self, name: str) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(name)
            if lock is None:
                lock = self._locks[name] = threading.Lock()
            return lock

    def _load(self, path: Path, schema: type[ConfigurationModel]) -> ConfigurationModel:
        if not self._persistence.exists(path):
            raise ConfigurationLoadError(f"No persisted configuration at {path}")
        try:
            raw = self._persistence.read_bytes(path)
        except OSError as e:
            raise ConfigurationLoadError(f"Failed to read {path}: {e}") from e
        try:
            return coerce_to_schema(schema, raw)
        except SchemaMismatchError as e:
            raise ConfigurationLoadError(f"Corrupt configuration at {path}: {e.detail}") from e

    def _system_ticks(self) -> int:
        path = self._paths.system_configuration_file
        return self._persistence.modified_at_ticks(path) if self._persistence.exists(path) else 0

    def _load_application_configuration(self) -> ServerConfiguration:
        path = self._paths.system_configuration_file
        if not self._persistence.exists(path):
            return ServerConfiguration()
        return self._load(path, ServerConfiguration)  # type: ignore[return-value]

    def _named_path(self, key: str) -> Path:
        return self._paths.named_configuration_file(self._registry.canonical_key(key))

    def _publish(self, topic: str, payload: object) -> None:
        if self._events is not None:
            self._events.publish(topic, payload)

    # ------------------------------------------------------------------
    # Application configuration
    # ------------------------------------------------------------------

    def get_application_configuration(self) -> ServerConfiguration:
        """Return a copy of the current application configuration.

        If system.json was rewritten outside this store it is reloaded
        first. A file that no longer parses is logged and the last good
        configuration is kept.
        """
        with self._lock_for(_SYSTEM_LOCK_KEY):
            ticks = self._system_ticks()
            if ticks != self._loaded_ticks:
                self._loaded_ticks = ticks
                try:
                    self._configuration = self._load_application_configuration()
                    logger.info("Application configuration reloaded from disk")
                except ConfigurationLoadError as e:
                    logger.warning("Keeping previous application configuration: %s", e)
            return self._configuration.model_copy(deep=True)

    def replace_application_configuration(self, candidate: object) -> ServerConfiguration:
        """Canonicalize candidate to ServerConfiguration, persist it, and swap it in.

        Raises:
            SchemaMismatchError: If candidate cannot be coerced (nothing persisted)
        """
        configuration = coerce_to_schema(ServerConfiguration, candidate)

        with self._lock_for(_SYSTEM_LOCK_KEY):
            self._persistence.write_bytes(
                self._paths.system_configuration_file,
                configuration.to_json_bytes(),
            )
            self._configuration = configuration.model_copy(deep=True)
            self._loaded_ticks = self._system_ticks()

        logger.info("Application configuration replaced")
        self._publish(CONFIGURATION_UPDATED, configuration)
        return configuration

    # ------------------------------------------------------------------
    # Named configuration
    # ------------------------------------------------------------------

    def get_named_configuration(self, key: str) -> ConfigurationModel:
        """Load the named configuration for key as its registered type.

        Raises:
            UnknownConfigurationKey: If key is not registered
            ConfigurationLoadError: If persisted data is absent or malformed
        """
        schema = self._registry.resolve_type(key)
        return self._load(self._named_path(key), schema)

    def save_named_configuration(self, key: str, raw: bytes) -> ConfigurationModel:
        """Validate raw against key's schema and persist the typed result.

        Raises:
            UnknownConfigurationKey: If key is not registered
            SchemaMismatchError: If raw cannot be coerced (nothing persisted)
        """
        schema = self._registry.resolve_type(key)
        configuration = coerce_to_schema(schema, raw)
        canonical = self._registry.canonical_key(key)

        with self._lock_for(canonical):
            self._persistence.write_bytes(
                self._paths.named_configuration_file(canonical),
                configuration.to_json_bytes(),
            )

        logger.info("Named configuration '%s' saved", canonical)
        self._publish(NAMED_CONFIGURATION_UPDATED, (canonical, configuration))
        return configuration

    def ensure_defaults(self) -> list[str]:
        """Persist defaults for every configuration that has no file yet.

        Returns:
            Names of the resources that were written ("system" or keys).
        """
        written: list[str] = []

        system_path = self._paths.system_configuration_file
        with self._lock_for(_SYSTEM_LOCK_KEY):
            if not self._persistence.exists(system_path):
                self._persistence.write_bytes(
                    system_path, self._configuration.to_json_bytes()
                )
                self._loaded_ticks = self._system_ticks()
                written.append("system")

        for key in self._registry.keys():
            path = self._paths.named_configuration_file(key)
            with self._lock_for(key):
                if self._persistence.exists(path):
                    continue
                schema = self._registry.resolve_type(key)
                self._persistence.write_bytes(path, schema().to_json_bytes())
            written.append(key)

        if written:
            logger.info("Wrote default configuration for: %s", ", ".join(written))
        return written

    # ------------------------------------------------------------------
    # Cache identities
    # ------------------------------------------------------------------

    def resource_identity(self, key: str | None = None) -> ResourceIdentity:
        """Identity of system.json (key=None) or of a named configuration file.

        A resource that was never persisted reports 0 ticks.
        """
        path = (
            self._paths.system_configuration_file
            if key is None
            else self._named_path(key)
        )
        ticks = (
            self._persistence.modified_at_ticks(path)
            if self._persistence.exists(path)
            else 0
        )
        return ResourceIdentity(path=str(path), modified_at_ticks=ticks)

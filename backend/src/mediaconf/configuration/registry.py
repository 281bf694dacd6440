"""Configuration type registry.

Maps named configuration keys to their schema types. The mapping is
built once at application startup and is read-only afterwards: there is
no runtime registration. Lookups are case-insensitive and fail closed on
unknown keys.
"""

from collections.abc import Iterable, Iterator
from types import MappingProxyType

from mediaconf.configuration.errors import UnknownConfigurationKey
from mediaconf.configuration.types import (
    BrandingOptions,
    ConfigurationModel,
    EncodingOptions,
    LiveTvOptions,
    MetadataConfiguration,
    SubtitleOptions,
    XbmcMetadataOptions,
)

BUILTIN_CONFIGURATIONS: tuple[tuple[str, type[ConfigurationModel]], ...] = (
    ("encoding", EncodingOptions),
    ("metadata", MetadataConfiguration),
    ("xbmcmetadata", XbmcMetadataOptions),
    ("livetv", LiveTvOptions),
    ("branding", BrandingOptions),
    ("subtitles", SubtitleOptions),
)


def _normalize(key: str) -> str:
    return key.strip().lower()


class ConfigurationTypeRegistry:
    """Immutable key → schema type mapping.

    Example:
        registry = ConfigurationTypeRegistry([("encoding", EncodingOptions)])
        registry.resolve_type("Encoding")  # -> EncodingOptions
    """

    def __init__(self, entries: Iterable[tuple[str, type[ConfigurationModel]]]):
        """Build the registry.

        Args:
            entries: (key, schema type) pairs

        Raises:
            ValueError: If a key is empty or registered twice
        """
        mapping: dict[str, type[ConfigurationModel]] = {}
        for key, schema in entries:
            normalized = _normalize(key)
            if not normalized:
                raise ValueError("Configuration key must not be empty")
            if normalized in mapping:
                raise ValueError(f"Configuration key '{key}' is registered twice")
            mapping[normalized] = schema
        self._types = MappingProxyType(mapping)

    @classmethod
    def builtin(cls) -> "ConfigurationTypeRegistry":
        """Registry of the configurations shipped with the server."""
        return cls(BUILTIN_CONFIGURATIONS)

    def resolve_type(self, key: str) -> type[ConfigurationModel]:
        """Get the schema type registered for key.

        Raises:
            UnknownConfigurationKey: If key has no registered schema
        """
        schema = self._types.get(_normalize(key))
        if schema is None:
            raise UnknownConfigurationKey(key)
        return schema

    def canonical_key(self, key: str) -> str:
        """Normalized form of key, used for persisted file names."""
        self.resolve_type(key)
        return _normalize(key)

    def keys(self) -> list[str]:
        return sorted(self._types.keys())

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and _normalize(key) in self._types

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self._types)

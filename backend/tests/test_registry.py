"""Tests for ConfigurationTypeRegistry."""

import pytest

from mediaconf.configuration import ConfigurationTypeRegistry, UnknownConfigurationKey
from mediaconf.configuration.types import (
    BrandingOptions,
    EncodingOptions,
    SubtitleOptions,
)


class TestResolveType:
    def test_builtin_keys(self):
        registry = ConfigurationTypeRegistry.builtin()
        assert registry.keys() == [
            "branding",
            "encoding",
            "livetv",
            "metadata",
            "subtitles",
            "xbmcmetadata",
        ]

    def test_resolves_registered_type(self):
        registry = ConfigurationTypeRegistry.builtin()
        assert registry.resolve_type("encoding") is EncodingOptions
        assert registry.resolve_type("subtitles") is SubtitleOptions

    def test_lookup_is_case_insensitive(self):
        registry = ConfigurationTypeRegistry.builtin()
        assert registry.resolve_type("Encoding") is EncodingOptions
        assert registry.resolve_type(" BRANDING ") is BrandingOptions
        assert registry.canonical_key("XbmcMetadata") == "xbmcmetadata"

    def test_unknown_key_raises(self):
        registry = ConfigurationTypeRegistry.builtin()
        with pytest.raises(UnknownConfigurationKey) as exc_info:
            registry.resolve_type("nonexistent")
        assert exc_info.value.key == "nonexistent"

    def test_canonical_key_of_unknown_key_raises(self):
        registry = ConfigurationTypeRegistry.builtin()
        with pytest.raises(UnknownConfigurationKey):
            registry.canonical_key("nonexistent")

    def test_contains(self):
        registry = ConfigurationTypeRegistry.builtin()
        assert "livetv" in registry
        assert "LiveTv" in registry
        assert "nonexistent" not in registry
        assert 42 not in registry


class TestRegistryConstruction:
    def test_duplicate_keys_rejected(self):
        """Keys differing only in case are the same key."""
        with pytest.raises(ValueError, match="registered twice"):
            ConfigurationTypeRegistry(
                [("encoding", EncodingOptions), ("Encoding", BrandingOptions)]
            )

    def test_empty_key_rejected(self):
        with pytest.raises(ValueError):
            ConfigurationTypeRegistry([("  ", EncodingOptions)])

    def test_mapping_is_read_only(self):
        registry = ConfigurationTypeRegistry([("encoding", EncodingOptions)])
        with pytest.raises(TypeError):
            registry._types["branding"] = BrandingOptions  # type: ignore[index]
        assert len(registry) == 1
        assert list(registry) == ["encoding"]

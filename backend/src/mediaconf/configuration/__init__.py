"""Server configuration - typed named configurations, store, cache gate and API."""

from mediaconf.configuration.errors import (
    ConfigurationError,
    ConfigurationLoadError,
    SchemaMismatchError,
    UnknownConfigurationKey,
)
from mediaconf.configuration.types import (
    ConfigurationModel,
    MetadataOptions,
    MetadataPluginSummary,
    ServerConfiguration,
    UpdateConfigurationRequest,
    coerce_to_schema,
)
from mediaconf.configuration.registry import ConfigurationTypeRegistry
from mediaconf.configuration.cache import (
    CacheDecision,
    FingerprintCacheGate,
    ResourceIdentity,
    compute_fingerprint,
)
from mediaconf.configuration.store import ConfigurationStore
from mediaconf.configuration.plugins import MetadataPluginLoader

__all__ = [
    "CacheDecision",
    "ConfigurationError",
    "ConfigurationLoadError",
    "ConfigurationModel",
    "ConfigurationStore",
    "ConfigurationTypeRegistry",
    "FingerprintCacheGate",
    "MetadataOptions",
    "MetadataPluginLoader",
    "MetadataPluginSummary",
    "ResourceIdentity",
    "SchemaMismatchError",
    "ServerConfiguration",
    "UnknownConfigurationKey",
    "UpdateConfigurationRequest",
    "coerce_to_schema",
    "compute_fingerprint",
]

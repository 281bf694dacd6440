"""System configuration API endpoints."""

import logging
from collections.abc import Callable

from fastapi import APIRouter, Depends, HTTPException, Request, Response

from mediaconf.auth.dependencies import require_authenticated
from mediaconf.auth.types import UserContext
from mediaconf.configuration.cache import FingerprintCacheGate
from mediaconf.configuration.errors import (
    ConfigurationLoadError,
    SchemaMismatchError,
    UnknownConfigurationKey,
)
from mediaconf.configuration.plugins import MetadataPluginLoader
from mediaconf.configuration.store import ConfigurationStore
from mediaconf.configuration.types import (
    MetadataOptions,
    UpdateConfigurationRequest,
    coerce_to_schema,
)

logger = logging.getLogger(__name__)

DEFAULT_METADATA_OPTIONS_RESOURCE = "/System/Configuration/MetadataOptions/Default"
METADATA_PLUGINS_RESOURCE = "/System/Configuration/MetadataPlugins"


def create_configuration_router(
    get_store: Callable[[], ConfigurationStore | None],
    get_cache_gate: Callable[[], FingerprintCacheGate | None],
    get_plugin_loader: Callable[[], MetadataPluginLoader | None],
) -> APIRouter:
    """Create the /System/Configuration router with injected dependencies."""
    router = APIRouter(prefix="/System/Configuration", tags=["configuration"])

    def _services() -> tuple[ConfigurationStore, FingerprintCacheGate]:
        store = get_store()
        gate = get_cache_gate()
        if not store or not gate:
            raise HTTPException(500, "Configuration service not initialized")
        return store, gate

    # Fixed paths are registered before /{key} so they are not captured as keys.

    @router.get("")
    async def get_configuration(http_request: Request) -> Response:
        """Return the application configuration, validated by fingerprint."""
        store, gate = _services()
        return gate.respond(
            http_request,
            store.resource_identity(),
            lambda: store.get_application_configuration().to_dict(),
        )

    @router.post("", status_code=204)
    async def update_configuration(
        http_request: Request,
        user: UserContext = Depends(require_authenticated),
    ) -> Response:
        """Replace the application configuration."""
        store, _ = _services()
        body = await http_request.body()
        try:
            envelope = coerce_to_schema(UpdateConfigurationRequest, body)
            store.replace_application_configuration(envelope)
        except SchemaMismatchError as e:
            raise HTTPException(400, str(e))
        logger.info("Application configuration updated by user '%s'", user.user_id)
        return Response(status_code=204)

    @router.get("/MetadataOptions/Default")
    async def get_default_metadata_options(
        http_request: Request,
        user: UserContext = Depends(require_authenticated),
    ) -> Response:
        """Return a default-valued MetadataOptions object."""
        _, gate = _services()
        return gate.respond(
            http_request,
            gate.synthetic_identity(DEFAULT_METADATA_OPTIONS_RESOURCE),
            lambda: MetadataOptions().to_dict(),
        )

    @router.get("/MetadataPlugins")
    async def get_metadata_plugins(
        http_request: Request,
        user: UserContext = Depends(require_authenticated),
    ) -> Response:
        """Return the metadata plugin summaries."""
        _, gate = _services()
        loader = get_plugin_loader()
        if not loader:
            raise HTTPException(500, "Plugin loader not initialized")
        return gate.respond(
            http_request,
            gate.synthetic_identity(METADATA_PLUGINS_RESOURCE),
            lambda: [summary.to_dict() for summary in loader.summaries()],
        )

    @router.get("/{key}")
    async def get_named_configuration(
        key: str,
        user: UserContext = Depends(require_authenticated),
    ) -> dict:
        """Return the named configuration for key."""
        store, _ = _services()
        try:
            return store.get_named_configuration(key).to_dict()
        except UnknownConfigurationKey as e:
            raise HTTPException(404, str(e))
        except ConfigurationLoadError as e:
            logger.error("Failed to load configuration '%s': %s", key, e)
            raise HTTPException(500, f"Configuration '{key}' could not be loaded")

    @router.post("/{key}", status_code=204)
    async def update_named_configuration(
        key: str,
        http_request: Request,
        user: UserContext = Depends(require_authenticated),
    ) -> Response:
        """Save the raw request body as the named configuration for key."""
        store, _ = _services()
        body = await http_request.body()
        try:
            store.save_named_configuration(key, body)
        except UnknownConfigurationKey as e:
            raise HTTPException(404, str(e))
        except SchemaMismatchError as e:
            raise HTTPException(400, str(e))
        return Response(status_code=204)

    return router

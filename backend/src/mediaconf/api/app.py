"""FastAPI application."""

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mediaconf.auth import AuthMiddleware, JWTService, PasswordService
from mediaconf.configuration import (
    ConfigurationStore,
    ConfigurationTypeRegistry,
    FingerprintCacheGate,
    MetadataPluginLoader,
)
from mediaconf.configuration.endpoints import create_configuration_router
from mediaconf.events import process_channel
from mediaconf.persistence import DatabaseConfig, FileResourcePersistence, ServerPaths
from mediaconf.users import LibraryViewLoader, UserStore
from mediaconf.users.endpoints import create_users_router

logger = logging.getLogger(__name__)

DEFAULT_SECRET_KEY = "dev-secret-key-change-in-production"

# Global instances (initialized on startup)
config_store: ConfigurationStore | None = None
cache_gate: FingerprintCacheGate | None = None
plugin_loader: MetadataPluginLoader | None = None
user_store: UserStore | None = None
jwt_service: JWTService | None = None
password_service: PasswordService | None = None


def _auth_disabled() -> bool:
    return os.environ.get("MEDIACONF_DISABLE_AUTH", "").lower() in ("1", "true", "yes")


def _seed_administrator(store: UserStore, passwords: PasswordService | None) -> None:
    """Create the first administrator from MEDIACONF_ADMIN_USER when no users exist."""
    name = os.environ.get("MEDIACONF_ADMIN_USER")
    if not name or store.list_users():
        return
    password = os.environ.get("MEDIACONF_ADMIN_PASSWORD", "")
    password_hash = passwords.hash(password) if passwords and password else None
    store.create_user(name, password_hash=password_hash, is_administrator=True)
    logger.info("Created administrator '%s'", name)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize on startup, cleanup on shutdown."""
    global config_store, cache_gate, plugin_loader, user_store
    global jwt_service, password_service

    paths = ServerPaths.from_env()
    paths.configuration_path.mkdir(parents=True, exist_ok=True)

    # Configuration store, with defaults written for a fresh install
    config_store = ConfigurationStore(
        paths,
        ConfigurationTypeRegistry.builtin(),
        FileResourcePersistence(),
        events=process_channel,
    )
    config_store.ensure_defaults()
    cache_gate = FingerprintCacheGate()

    plugin_loader = MetadataPluginLoader(paths.plugins_path)
    plugin_loader.load_all()

    # Initialize database (supports DATABASE_URL or MEDIACONF_DB_PATH env vars)
    db_config = DatabaseConfig.from_env(paths.data_path)
    if db_config.is_sqlite:
        sqlite_path = db_config.url.replace("sqlite:///", "")
        if sqlite_path and sqlite_path != ":memory:":
            Path(sqlite_path).parent.mkdir(parents=True, exist_ok=True)
    user_store = UserStore(db_config.sqlalchemy_url)

    library_loader = LibraryViewLoader(paths.libraries_path)
    library_loader.load_all()
    for view in library_loader.list_views():
        user_store.upsert_view(view)

    # Auth services (can be disabled via environment variable for testing)
    if _auth_disabled():
        jwt_service = None
        password_service = None
        logger.warning("Authentication is disabled; all requests run as administrator")
    else:
        secret_key = os.environ.get("MEDIACONF_SECRET_KEY", DEFAULT_SECRET_KEY)
        if secret_key == DEFAULT_SECRET_KEY:
            logger.warning("MEDIACONF_SECRET_KEY is not set; using the development key")
        jwt_service = JWTService(secret_key)
        password_service = PasswordService.from_env()

    _seed_administrator(user_store, password_service)

    yield

    # Cleanup
    if user_store:
        user_store.close()


app = FastAPI(title="mediaconf API", lifespan=lifespan)

# CORS for the web client dev server
app.add_middleware(
    CORSMiddleware,
    allow_origins=os.environ.get("MEDIACONF_CORS_ORIGINS", "http://localhost:5173").split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(AuthMiddleware, get_jwt_service=lambda: jwt_service)

app.include_router(
    create_configuration_router(
        get_store=lambda: config_store,
        get_cache_gate=lambda: cache_gate,
        get_plugin_loader=lambda: plugin_loader,
    )
)
app.include_router(
    create_users_router(
        get_user_store=lambda: user_store,
        get_jwt_service=lambda: jwt_service,
        get_password_service=lambda: password_service,
    )
)

"""Configuration schema types.

Every schema serializes with PascalCase keys (HidePlayedInLatest,
MetadataCountryCode, ...) and rejects unknown fields, so a payload
validated against one schema can never be stored as another.
"""

from enum import Enum
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_pascal

from mediaconf.configuration.errors import SchemaMismatchError


class ConfigurationModel(BaseModel):
    """Base class for all persisted configuration schemas."""

    model_config = ConfigDict(
        alias_generator=to_pascal,
        populate_by_name=True,
        extra="forbid",
    )

    def to_dict(self) -> dict[str, Any]:
        """Convert to API response dict."""
        return self.model_dump(mode="json", by_alias=True)

    def to_json_bytes(self) -> bytes:
        return self.model_dump_json(by_alias=True, indent=2).encode("utf-8")


M = TypeVar("M", bound=ConfigurationModel)


# ----------------------------------------------------------------------
# Metadata options
# ----------------------------------------------------------------------


class MetadataOptions(ConfigurationModel):
    """Per item-type metadata provider preferences."""

    item_type: str | None = None
    disabled_metadata_savers: list[str] = Field(default_factory=list)
    local_metadata_reader_order: list[str] = Field(default_factory=list)
    disabled_metadata_fetchers: list[str] = Field(default_factory=list)
    metadata_fetcher_order: list[str] = Field(default_factory=list)
    disabled_image_fetchers: list[str] = Field(default_factory=list)
    image_fetcher_order: list[str] = Field(default_factory=list)


def _default_metadata_options() -> list[MetadataOptions]:
    return [
        MetadataOptions(item_type="Book"),
        MetadataOptions(item_type="MusicArtist"),
        MetadataOptions(item_type="MusicAlbum"),
    ]


# ----------------------------------------------------------------------
# Application configuration (singleton)
# ----------------------------------------------------------------------


class ServerConfiguration(ConfigurationModel):
    """Global server settings. One instance per process."""

    server_name: str = ""
    http_server_port_number: int = 8096
    https_port_number: int = 8920
    enable_https: bool = False
    enable_upnp: bool = Field(default=True, alias="EnableUPnP")
    ui_culture: str = Field(default="en-us", alias="UICulture")
    preferred_metadata_language: str = "en"
    metadata_country_code: str = "US"
    metadata_path: str | None = None
    min_resume_pct: int = 5
    max_resume_pct: int = 90
    min_resume_duration_seconds: int = 300
    library_monitor_delay: int = 60
    log_file_retention_days: int = 3
    enable_dashboard_response_caching: bool = True
    enable_automatic_restart: bool = True
    sort_remove_words: list[str] = Field(default_factory=lambda: ["the", "a", "an"])
    metadata_options: list[MetadataOptions] = Field(
        default_factory=_default_metadata_options
    )


class UpdateConfigurationRequest(ServerConfiguration):
    """Request envelope for replacing the application configuration.

    Unknown fields are tolerated here; the store drops them when it
    canonicalizes the envelope into ServerConfiguration.
    """

    model_config = ConfigDict(extra="allow")


# ----------------------------------------------------------------------
# Named configuration schemas
# ----------------------------------------------------------------------


class EncodingOptions(ConfigurationModel):
    encoding_thread_count: int = -1
    transcoding_temp_path: str | None = None
    down_mix_audio_boost: float = 2.0
    enable_throttling: bool = True
    hardware_acceleration_type: str = ""
    encoder_app_path: str | None = None


class MetadataConfiguration(ConfigurationModel):
    use_file_creation_time_for_date_added: bool = True


class XbmcMetadataOptions(ConfigurationModel):
    user_id: str | None = None
    release_date_format: str = "yyyy-MM-dd"
    save_image_paths_in_nfo: bool = True
    enable_path_substitution: bool = True
    enable_extra_thumbs_duplication: bool = False


class LiveTvOptions(ConfigurationModel):
    guide_days: int | None = None
    enable_movie_providers: bool = True
    recording_path: str | None = None
    pre_padding_seconds: int = 0
    post_padding_seconds: int = 0


class BrandingOptions(ConfigurationModel):
    login_disclaimer: str | None = None
    custom_css: str | None = None


class SubtitleOptions(ConfigurationModel):
    skip_if_embedded_subtitles_present: bool = False
    skip_if_audio_track_matches: bool = False
    download_languages: list[str] = Field(default_factory=list)
    download_movie_subtitles: bool = False
    download_episode_subtitles: bool = False
    require_perfect_match: bool = True


# ----------------------------------------------------------------------
# Metadata plugins
# ----------------------------------------------------------------------


class MetadataPluginType(str, Enum):
    LOCAL_IMAGE_PROVIDER = "LocalImageProvider"
    METADATA_FETCHER = "MetadataFetcher"
    METADATA_SAVER = "MetadataSaver"
    SUBTITLE_FETCHER = "SubtitleFetcher"
    IMAGE_FETCHER = "ImageFetcher"
    LOCAL_METADATA_PROVIDER = "LocalMetadataProvider"


class MetadataPlugin(ConfigurationModel):
    name: str
    type: MetadataPluginType


class MetadataPluginSummary(ConfigurationModel):
    """Providers available for one item type."""

    item_type: str
    plugins: list[MetadataPlugin] = Field(default_factory=list)
    supported_image_types: list[str] = Field(default_factory=list)


# ----------------------------------------------------------------------
# Schema coercion
# ----------------------------------------------------------------------


def _summarize(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(p) for p in item["loc"]) or "<root>"
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)


def coerce_to_schema(schema: type[M], value: Any) -> M:
    """Coerce value into an instance of exactly schema.

    Accepts raw JSON (bytes or str), a plain mapping, or another model.
    A model is reduced to the fields schema declares before validation,
    so request-envelope fields never reach the stored configuration.

    Raises:
        SchemaMismatchError: If value cannot be coerced.
    """
    try:
        if isinstance(value, (bytes, bytearray, str)):
            return schema.model_validate_json(value)
        if isinstance(value, BaseModel):
            data = value.model_dump(include=set(schema.model_fields))
            return schema.model_validate(data)
        return schema.model_validate(value)
    except ValidationError as e:
        raise SchemaMismatchError(schema.__name__, _summarize(e)) from e

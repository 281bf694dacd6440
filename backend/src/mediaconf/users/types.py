"""User, user configuration and library view types."""

from pydantic import Field, field_validator

from mediaconf.configuration.types import ConfigurationModel

HOME_SECTION_COUNT = 7

# Stored in a home section slot when the user explicitly cleared it.
UNSET_SECTION = ""


class UserConfiguration(ConfigurationModel):
    """Per-user display preferences. Replaced as a whole, never patched.

    HomeSections has exactly seven slots. A slot is None when it was never
    configured (the slot default applies), UNSET_SECTION when the user
    explicitly cleared it, or a section type id.
    """

    hide_played_in_latest: bool = False
    latest_items_excludes: list[str] = Field(default_factory=list)
    ordered_views: list[str] = Field(default_factory=list)
    home_sections: list[str | None] = Field(
        default_factory=lambda: [None] * HOME_SECTION_COUNT
    )
    play_default_audio_track: bool = True
    display_missing_episodes: bool = False
    audio_language_preference: str | None = None
    subtitle_language_preference: str | None = None

    @field_validator("latest_items_excludes")
    @classmethod
    def _dedupe_excludes(cls, value: list[str]) -> list[str]:
        return list(dict.fromkeys(value))

    @field_validator("ordered_views")
    @classmethod
    def _unique_views(cls, value: list[str]) -> list[str]:
        if len(set(value)) != len(value):
            raise ValueError("OrderedViews must not contain duplicate view ids")
        return value

    @field_validator("home_sections")
    @classmethod
    def _seven_slots(cls, value: list[str | None]) -> list[str | None]:
        if len(value) != HOME_SECTION_COUNT:
            raise ValueError(f"HomeSections must have exactly {HOME_SECTION_COUNT} slots")
        return value


class User(ConfigurationModel):
    """A server user as returned by the API (password hash excluded)."""

    id: str
    name: str
    is_administrator: bool = False
    has_password: bool = False
    configuration: UserConfiguration = Field(default_factory=UserConfiguration)


class LibraryView(ConfigurationModel):
    """A top-level library folder shown on a user's home screen."""

    id: str
    name: str
    collection_type: str | None = None
    type: str = "CollectionFolder"

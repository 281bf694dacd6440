"""Users, their display configuration, and library views."""

from mediaconf.users.types import (
    HOME_SECTION_COUNT,
    UNSET_SECTION,
    LibraryView,
    User,
    UserConfiguration,
)
from mediaconf.users.home_sections import HomeSectionType, get_default_section
from mediaconf.users.store import UserStore
from mediaconf.users.loader import LibraryViewLoader

__all__ = [
    "HOME_SECTION_COUNT",
    "UNSET_SECTION",
    "HomeSectionType",
    "LibraryView",
    "LibraryViewLoader",
    "User",
    "UserConfiguration",
    "UserStore",
    "get_default_section",
]

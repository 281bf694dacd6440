"""Home screen section types and the default assigned to each slot."""

from enum import Enum

from mediaconf.users.types import HOME_SECTION_COUNT


class HomeSectionType(str, Enum):
    SMALL_LIBRARY_TILES = "smalllibrarytiles"
    LIBRARY_BUTTONS = "librarybuttons"
    ACTIVE_RECORDINGS = "activerecordings"
    RESUME = "resume"
    RESUME_AUDIO = "resumeaudio"
    LATEST_MEDIA = "latestmedia"
    NEXT_UP = "nextup"
    LIVE_TV = "livetv"
    NONE = "none"


DEFAULT_SECTIONS: tuple[HomeSectionType, ...] = (
    HomeSectionType.SMALL_LIBRARY_TILES,
    HomeSectionType.RESUME,
    HomeSectionType.RESUME_AUDIO,
    HomeSectionType.LIVE_TV,
    HomeSectionType.NEXT_UP,
    HomeSectionType.LATEST_MEDIA,
    HomeSectionType.NONE,
)


def get_default_section(index: int) -> str:
    """Default section type id for slot index (0-based).

    Raises:
        IndexError: If index is outside 0..6
    """
    if not 0 <= index < HOME_SECTION_COUNT:
        raise IndexError(f"Home section slot {index} out of range")
    return DEFAULT_SECTIONS[index].value


def is_section_type(value: str) -> bool:
    return value in {t.value for t in HomeSectionType}

"""Home screen list editors.

OrderedListEditor holds the user's view order and changes it only by
swapping neighbours. ExclusionSetEditor holds one include toggle per
library folder for the "latest items" feed. Both are read at submit time:
neither records a history of edits.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from mediaconf.users.types import LibraryView

# Library kinds that never take part in the latest items feed.
EXCLUDED_COLLECTION_TYPES = frozenset({"playlists", "livetv", "boxsets", "channels"})
EXCLUDED_ITEM_TYPES = frozenset({"Channel"})


@dataclass
class ViewItem:
    id: str
    name: str


class OrderedListEditor:
    """Ordered sequence of view ids, mutable only by adjacent swaps."""

    def __init__(self, views: Iterable[LibraryView]):
        self._items = [ViewItem(id=v.id, name=v.name) for v in views]

    @property
    def items(self) -> list[ViewItem]:
        return list(self._items)

    def _index(self, item_id: str) -> int:
        for i, item in enumerate(self._items):
            if item.id == item_id:
                return i
        raise KeyError(item_id)

    def move_up(self, item_id: str) -> bool:
        """Swap item_id with its predecessor. Returns False at the head.

        Raises:
            KeyError: If item_id is not in the list
        """
        i = self._index(item_id)
        if i == 0:
            return False
        self._items[i - 1], self._items[i] = self._items[i], self._items[i - 1]
        return True

    def move_down(self, item_id: str) -> bool:
        """Swap item_id with its successor. Returns False at the tail.

        Raises:
            KeyError: If item_id is not in the list
        """
        i = self._index(item_id)
        if i == len(self._items) - 1:
            return False
        self._items[i + 1], self._items[i] = self._items[i], self._items[i + 1]
        return True

    def ordered_ids(self) -> list[str]:
        """Current order of view ids."""
        return [item.id for item in self._items]


@dataclass
class FolderToggle:
    id: str
    name: str
    included: bool


def is_excludable(view: LibraryView) -> bool:
    """Whether a view may be toggled in or out of the latest items feed."""
    if (view.collection_type or "") in EXCLUDED_COLLECTION_TYPES:
        return False
    return view.type not in EXCLUDED_ITEM_TYPES


class ExclusionSetEditor:
    """Include/exclude toggles for the latest items feed.

    Views of an excluded kind are left out of the universe entirely: they
    get no toggle and never appear in excluded_ids().
    """

    def __init__(self, views: Iterable[LibraryView], latest_items_excludes: Iterable[str]):
        excludes = set(latest_items_excludes)
        self._toggles = {
            v.id: FolderToggle(id=v.id, name=v.name, included=v.id not in excludes)
            for v in views
            if is_excludable(v)
        }

    @property
    def toggles(self) -> list[FolderToggle]:
        return list(self._toggles.values())

    def is_included(self, folder_id: str) -> bool:
        return self._toggles[folder_id].included

    def set_included(self, folder_id: str, included: bool) -> None:
        """Check or uncheck a folder toggle.

        Raises:
            KeyError: If folder_id is not an excludable folder
        """
        self._toggles[folder_id].included = included

    def toggle(self, folder_id: str) -> bool:
        """Flip a folder toggle and return its new state."""
        toggle = self._toggles[folder_id]
        toggle.included = not toggle.included
        return toggle.included

    def excluded_ids(self) -> list[str]:
        """Ids of folders whose toggle is unchecked, in display order."""
        return [t.id for t in self._toggles.values() if not t.included]

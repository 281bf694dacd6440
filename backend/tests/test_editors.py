"""Tests for the ordered-list and exclusion-set editors."""

import random

import pytest

from mediaconf.client.editors import (
    ExclusionSetEditor,
    OrderedListEditor,
    is_excludable,
)
from mediaconf.users import LibraryView


def _views(*ids: str) -> list[LibraryView]:
    return [LibraryView(id=i, name=i.upper()) for i in ids]


class TestOrderedListEditor:
    def test_initial_order(self):
        editor = OrderedListEditor(_views("a", "b", "c"))
        assert editor.ordered_ids() == ["a", "b", "c"]
        assert [item.name for item in editor.items] == ["A", "B", "C"]

    def test_move_up_twice(self):
        """Moving the last view up twice brings it to the front."""
        editor = OrderedListEditor(_views("a", "b", "c"))
        assert editor.move_up("c") is True
        assert editor.move_up("c") is True
        assert editor.ordered_ids() == ["c", "a", "b"]

    def test_move_down(self):
        editor = OrderedListEditor(_views("a", "b", "c"))
        assert editor.move_down("a") is True
        assert editor.ordered_ids() == ["b", "a", "c"]

    def test_move_up_at_head_is_noop(self):
        editor = OrderedListEditor(_views("a", "b", "c"))
        assert editor.move_up("a") is False
        assert editor.ordered_ids() == ["a", "b", "c"]

    def test_move_down_at_tail_is_noop(self):
        editor = OrderedListEditor(_views("a", "b", "c"))
        assert editor.move_down("c") is False
        assert editor.ordered_ids() == ["a", "b", "c"]

    def test_unknown_id_raises(self):
        editor = OrderedListEditor(_views("a", "b"))
        with pytest.raises(KeyError):
            editor.move_up("z")
        with pytest.raises(KeyError):
            editor.move_down("z")

    def test_single_item(self):
        editor = OrderedListEditor(_views("a"))
        assert editor.move_up("a") is False
        assert editor.move_down("a") is False

    def test_moves_preserve_permutation(self):
        ids = ["a", "b", "c", "d", "e"]
        editor = OrderedListEditor(_views(*ids))
        rng = random.Random(7)
        for _ in range(200):
            item_id = rng.choice(ids)
            if rng.random() < 0.5:
                editor.move_up(item_id)
            else:
                editor.move_down(item_id)
            assert sorted(editor.ordered_ids()) == ids

    def test_items_is_a_copy(self):
        editor = OrderedListEditor(_views("a", "b"))
        editor.items.reverse()
        assert editor.ordered_ids() == ["a", "b"]


class TestIsExcludable:
    @pytest.mark.parametrize(
        "collection_type", ["playlists", "livetv", "boxsets", "channels"]
    )
    def test_excluded_collection_types(self, collection_type):
        view = LibraryView(id="x", name="X", collection_type=collection_type)
        assert is_excludable(view) is False

    def test_channel_item_type(self):
        view = LibraryView(id="x", name="X", type="Channel")
        assert is_excludable(view) is False

    def test_regular_folders(self):
        assert is_excludable(LibraryView(id="m", name="M", collection_type="movies"))
        assert is_excludable(LibraryView(id="f", name="F"))


class TestExclusionSetEditor:
    def test_toggles_start_from_excludes(self):
        editor = ExclusionSetEditor(_views("a", "b", "c"), ["a", "b"])
        assert editor.is_included("a") is False
        assert editor.is_included("b") is False
        assert editor.is_included("c") is True

    def test_checking_a_folder_removes_it(self):
        editor = ExclusionSetEditor(_views("a", "b", "c"), ["a", "b"])
        editor.set_included("a", True)
        assert editor.excluded_ids() == ["b"]

    def test_toggle_flips(self):
        editor = ExclusionSetEditor(_views("a", "b"), [])
        assert editor.toggle("b") is False
        assert editor.excluded_ids() == ["b"]
        assert editor.toggle("b") is True
        assert editor.excluded_ids() == []

    def test_excluded_ids_in_display_order(self):
        editor = ExclusionSetEditor(_views("a", "b", "c"), ["c", "a"])
        assert editor.excluded_ids() == ["a", "c"]

    def test_filtered_kinds_have_no_toggle(self):
        views = [
            LibraryView(id="movies", name="Movies", collection_type="movies"),
            LibraryView(id="lists", name="Playlists", collection_type="playlists"),
            LibraryView(id="tv", name="Live TV", collection_type="livetv"),
            LibraryView(id="ch", name="News", type="Channel"),
        ]
        editor = ExclusionSetEditor(views, ["lists", "movies"])

        assert [t.id for t in editor.toggles] == ["movies"]
        assert editor.excluded_ids() == ["movies"]
        with pytest.raises(KeyError):
            editor.set_included("lists", True)

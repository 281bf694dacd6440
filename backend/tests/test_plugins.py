"""Tests for MetadataPluginLoader."""

from pathlib import Path

import pytest

from mediaconf.configuration import MetadataPluginLoader
from mediaconf.configuration.types import MetadataPluginType

REPO_PLUGINS = Path(__file__).parent.parent.parent / "metadata" / "plugins"


@pytest.fixture
def plugins_dir(tmp_path):
    """Create a temporary plugins directory with sample manifests."""
    plugins_path = tmp_path / "plugins"
    plugins_path.mkdir()

    (plugins_path / "b-tmdb.yaml").write_text("""
plugin:
  name: TheMovieDb
  type: MetadataFetcher
  itemTypes: [Movie, Series]
  imageTypes: [Primary, Backdrop]
""")
    (plugins_path / "a-fanart.yaml").write_text("""
plugin:
  name: FanArt
  type: ImageFetcher
  itemTypes: [Movie]
  imageTypes: [Backdrop, Logo]
""")
    return plugins_path


class TestLoadAll:
    def test_loads_manifests_by_file_stem(self, plugins_dir):
        loader = MetadataPluginLoader(plugins_dir)
        loader.load_all()
        assert set(loader.manifests) == {"a-fanart", "b-tmdb"}

    def test_missing_directory_loads_nothing(self, tmp_path):
        loader = MetadataPluginLoader(tmp_path / "missing")
        loader.load_all()
        assert loader.manifests == {}
        assert loader.summaries() == []

    def test_skips_file_without_plugin_section(self, plugins_dir):
        (plugins_dir / "c-empty.yaml").write_text("library:\n  name: Movies\n")
        loader = MetadataPluginLoader(plugins_dir)
        loader.load_all()
        assert "c-empty" not in loader.manifests

    def test_skips_unknown_plugin_type(self, plugins_dir):
        (plugins_dir / "c-bad.yaml").write_text("""
plugin:
  name: Mystery
  type: Telepathy
  itemTypes: [Movie]
""")
        loader = MetadataPluginLoader(plugins_dir)
        loader.load_all()
        assert "c-bad" not in loader.manifests

    def test_skips_manifest_without_name(self, plugins_dir):
        """A nameless manifest is skipped and the listing still builds."""
        (plugins_dir / "c-nameless.yaml").write_text("""
plugin:
  type: MetadataFetcher
  itemTypes: [Movie]
""")
        loader = MetadataPluginLoader(plugins_dir)
        loader.load_all()

        assert "c-nameless" not in loader.manifests
        movie = {s.item_type: s for s in loader.summaries()}["Movie"]
        assert [p.name for p in movie.plugins] == ["FanArt", "TheMovieDb"]

    @pytest.mark.parametrize("section", ["just-a-string", "[a, b]", "null", "42"])
    def test_skips_non_mapping_plugin_section(self, plugins_dir, section):
        (plugins_dir / "c-scalar.yaml").write_text(f"plugin: {section}\n")
        loader = MetadataPluginLoader(plugins_dir)
        loader.load_all()

        assert "c-scalar" not in loader.manifests
        assert set(loader.manifests) == {"a-fanart", "b-tmdb"}

    def test_skips_non_list_item_types(self, plugins_dir):
        (plugins_dir / "c-odd.yaml").write_text("""
plugin:
  name: Odd
  type: MetadataFetcher
  itemTypes: Movie
""")
        loader = MetadataPluginLoader(plugins_dir)
        loader.load_all()
        assert "c-odd" not in loader.manifests

    def test_skips_non_mapping_document(self, plugins_dir):
        (plugins_dir / "c-list.yaml").write_text("- plugin\n- other\n")
        loader = MetadataPluginLoader(plugins_dir)
        loader.load_all()
        assert "c-list" not in loader.manifests


class TestSummaries:
    def test_groups_by_item_type(self, plugins_dir):
        loader = MetadataPluginLoader(plugins_dir)
        loader.load_all()
        summaries = {s.item_type: s for s in loader.summaries()}

        assert list(summaries) == ["Movie", "Series"]
        movie = summaries["Movie"]
        assert [p.name for p in movie.plugins] == ["FanArt", "TheMovieDb"]
        assert movie.plugins[0].type == MetadataPluginType.IMAGE_FETCHER
        assert movie.supported_image_types == ["Backdrop", "Logo", "Primary"]

        series = summaries["Series"]
        assert [p.name for p in series.plugins] == ["TheMovieDb"]
        assert series.supported_image_types == ["Primary", "Backdrop"]

    def test_serializes_with_pascal_case(self, plugins_dir):
        loader = MetadataPluginLoader(plugins_dir)
        loader.load_all()
        data = loader.summaries()[0].to_dict()
        assert data == {
            "ItemType": "Movie",
            "Plugins": [
                {"Name": "FanArt", "Type": "ImageFetcher"},
                {"Name": "TheMovieDb", "Type": "MetadataFetcher"},
            ],
            "SupportedImageTypes": ["Backdrop", "Logo", "Primary"],
        }

    def test_shipped_manifests(self):
        loader = MetadataPluginLoader(REPO_PLUGINS)
        loader.load_all()
        summaries = {s.item_type: s for s in loader.summaries()}

        assert [p.name for p in summaries["Movie"].plugins] == [
            "FanArt",
            "Nfo",
            "Open Subtitles",
            "TheMovieDb",
        ]
        assert summaries["Audio"].plugins[0].name == "MusicBrainz"

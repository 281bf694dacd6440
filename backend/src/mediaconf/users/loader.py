"""Load library view definitions from YAML files."""

from pathlib import Path

import yaml

from mediaconf.users.types import LibraryView


class LibraryViewLoader:
    """Loads library views from metadata/libraries/*.yaml files."""

    def __init__(self, libraries_path: Path):
        self.libraries_path = libraries_path
        self.views: dict[str, LibraryView] = {}

    def load_all(self) -> None:
        """Load all library views from YAML files."""
        if not self.libraries_path.exists():
            return

        for yaml_file in self.libraries_path.glob("*.yaml"):
            with open(yaml_file) as f:
                data = yaml.safe_load(f)
                if data and "library" in data:
                    view = self._parse_view(data["library"], yaml_file.stem)
                    self.views[view.id] = view

    def _parse_view(self, data: dict, file_stem: str) -> LibraryView:
        """Parse a library YAML into a LibraryView. The file stem is the default id."""
        return LibraryView(
            id=str(data.get("id", file_stem)),
            name=data["name"],
            collection_type=data.get("collectionType"),
            type=data.get("type", "CollectionFolder"),
        )

    def list_views(self) -> list[LibraryView]:
        """List all loaded views."""
        return list(self.views.values())

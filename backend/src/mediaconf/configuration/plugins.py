"""Load metadata provider manifests from YAML files."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import yaml
from pydantic import ValidationError

from mediaconf.configuration.types import (
    MetadataPlugin,
    MetadataPluginSummary,
    MetadataPluginType,
)

logger = logging.getLogger(__name__)


@dataclass
class PluginManifest:
    """A parsed plugin manifest."""

    plugin: MetadataPlugin
    item_types: list[str] = field(default_factory=list)
    image_types: list[str] = field(default_factory=list)


class MetadataPluginLoader:
    """Loads metadata plugin manifests from metadata/plugins/*.yaml files.

    Manifest shape:

        plugin:
          name: TheMovieDb
          type: MetadataFetcher
          itemTypes: [Movie, Series]
          imageTypes: [Primary, Backdrop]
    """

    def __init__(self, plugins_path: Path):
        self.plugins_path = plugins_path
        self.manifests: dict[str, PluginManifest] = {}

    def load_all(self) -> None:
        """Load all plugin manifests from YAML files.

        Malformed manifests are logged and skipped.
        """
        if not self.plugins_path.exists():
            return

        for yaml_file in sorted(self.plugins_path.glob("*.yaml")):
            with open(yaml_file) as f:
                data = yaml.safe_load(f)
            if not isinstance(data, dict) or "plugin" not in data:
                logger.warning("Skipping %s: no 'plugin' section", yaml_file.name)
                continue
            try:
                manifest = self._parse_manifest(data["plugin"])
            except (KeyError, TypeError, ValueError, AttributeError, ValidationError) as e:
                logger.warning("Skipping %s: invalid manifest (%s)", yaml_file.name, e)
                continue
            self.manifests[yaml_file.stem] = manifest

    def _parse_manifest(self, data: dict) -> PluginManifest:
        """Parse a plugin section into a PluginManifest."""
        plugin = MetadataPlugin(
            name=data["name"],
            type=MetadataPluginType(data["type"]),
        )
        item_types = data.get("itemTypes") or []
        image_types = data.get("imageTypes") or []
        if not isinstance(item_types, list) or not isinstance(image_types, list):
            raise TypeError("itemTypes and imageTypes must be lists")
        return PluginManifest(
            plugin=plugin,
            item_types=[str(t) for t in item_types],
            image_types=[str(t) for t in image_types],
        )

    def summaries(self) -> list[MetadataPluginSummary]:
        """Group loaded plugins by item type.

        Item types keep first-seen order, plugins within an item type are
        sorted by name, and image types are unioned in first-seen order.
        """
        grouped: dict[str, MetadataPluginSummary] = {}
        for manifest in self.manifests.values():
            for item_type in manifest.item_types:
                summary = grouped.get(item_type)
                if summary is None:
                    summary = grouped[item_type] = MetadataPluginSummary(item_type=item_type)
                summary.plugins.append(manifest.plugin)
                for image_type in manifest.image_types:
                    if image_type not in summary.supported_image_types:
                        summary.supported_image_types.append(image_type)

        for summary in grouped.values():
            summary.plugins.sort(key=lambda p: p.name.lower())
        return list(grouped.values())

"""
Image lookup for content records.

• One resolver per asset category (logos, locations, prints).
• The category directory is scanned once into a manifest; lookups never
  touch the filesystem afterwards.
• A name missing from the manifest degrades to an inline placeholder image
  and a warning, so a single bad reference does not take the collection down.
• The manifest is scanned from the local site root; when the base path is a
  remote deployment, the site root must be a copy of what is deployed there.
"""
from __future__ import annotations
import html
import logging
import urllib.parse  # data URI encoding
from pathlib import Path
from typing import Dict, List

from config import SiteConfig
from errors import AssetUnresolvable
from utils import format_file_name

logger = logging.getLogger(__name__)

PRINT_SUFFIXES = (".png", ".jpg", ".jpeg", ".svg")


def _build_placeholder_svg(label: str) -> str:
    safe_label = html.escape(label)
    return f"""<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 200 200" role="img" aria-label="{safe_label}">
  <rect width="200" height="200" rx="100" fill="#e9ecef" />
  <circle cx="100" cy="80" r="34" fill="#adb5bd" />
  <rect x="46" y="128" width="108" height="14" rx="7" fill="#adb5bd" />
</svg>
"""


def placeholder_uri(label: str = "Image not available") -> str:
    """Self-contained data: URI, valid on any deployment without a file behind it."""
    return "data:image/svg+xml;charset=utf-8," + urllib.parse.quote(_build_placeholder_svg(label))


class AssetResolver:
    def __init__(self, config: SiteConfig, category: str):
        self.config = config
        self.category = category
        self.directory = config.asset_dir(category)
        self._manifest: Dict[str, Path] = {}
        self.refresh()

    def refresh(self) -> None:
        """Rescan the category directory."""
        if self.directory.is_dir():
            self._manifest = {p.name: p for p in self.directory.iterdir() if p.is_file()}
        else:
            logger.warning("Asset directory %s does not exist", self.directory)
            self._manifest = {}

    def __contains__(self, filename: str) -> bool:
        return filename in self._manifest

    def require(self, filename: str) -> str:
        """Public URL of `filename`; raises AssetUnresolvable when it is not bundled."""
        if filename not in self._manifest:
            raise AssetUnresolvable(self.category, filename)
        return self.config.asset_url(self.category, filename)

    def resolve(self, filename: str) -> str:
        try:
            return self.require(filename)
        except AssetUnresolvable as e:
            logger.warning("%s, using placeholder", e)
            return placeholder_uri()


def list_prints(config: SiteConfig) -> List[Dict[str, str]]:
    """Images of the 3D-printing gallery, in filename order, with readable captions."""
    directory = config.asset_dir("prints")
    if not directory.is_dir():
        return []
    files = sorted(p.name for p in directory.iterdir()
                   if p.is_file() and p.suffix.lower() in PRINT_SUFFIXES)
    return [{"src": config.asset_url("prints", name), "name": format_file_name(name)}
            for name in files]

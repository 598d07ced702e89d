"""
Configuration settings for the portfolio site.

Everything is read from the environment (or a local .env file) once, and
handed around as an explicit SiteConfig so the loaders and the asset
resolver never reach for globals.
"""

from dotenv import load_dotenv
load_dotenv()          # ← must be before os.getenv(...)
import os
from dataclasses import dataclass, field, replace
from pathlib import Path


def env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


# app/config.py -> app/ -> project root
_PROJECT_ROOT = Path(__file__).resolve().parent.parent

# Deployment root the JSON collections and images are fetched from.
# Leave empty to serve SITE_ROOT through the local preview server.
BASE_PATH = os.getenv("PORTFOLIO_BASE_PATH", "").rstrip("/")
SITE_ROOT = Path(os.getenv("PORTFOLIO_SITE_ROOT", _PROJECT_ROOT / "public"))
DATA_DIR = os.getenv("PORTFOLIO_DATA_DIR", "data").strip("/")

FETCH_TIMEOUT = float(os.getenv("PORTFOLIO_FETCH_TIMEOUT", "10"))
RAISE_LOAD_ERRORS = env_flag("PORTFOLIO_RAISE_LOAD_ERRORS")
LOG_LEVEL = os.getenv("PORTFOLIO_LOG_LEVEL", "INFO").upper()
# Show markup validation results in the GUI sidebar (author aid, off for visitors)
DEBUG = env_flag("PORTFOLIO_DEBUG")

# Image sub-directories under <site root>/assets, keyed by content category
ASSET_DIRS = {
    "logos": "logos",
    "locations": "locations",
    "prints": "prints",
}

RESUME_FILE = "resume.pdf"


@dataclass(frozen=True)
class SiteConfig:
    base_path: str = BASE_PATH
    site_root: Path = SITE_ROOT
    data_dir: str = DATA_DIR
    asset_dirs: dict = field(default_factory=lambda: dict(ASSET_DIRS))
    fetch_timeout: float = FETCH_TIMEOUT
    raise_errors: bool = RAISE_LOAD_ERRORS
    resume_file: str = RESUME_FILE
    debug: bool = DEBUG

    def data_url(self, name: str) -> str:
        """URL of the JSON resource backing one collection."""
        return f"{self.base_path}/{self.data_dir}/{name}.json"

    def asset_dir(self, category: str) -> Path:
        if category not in self.asset_dirs:
            raise ValueError(f"Unknown asset category: {category}")
        return self.site_root / "assets" / self.asset_dirs[category]

    def asset_url(self, category: str, filename: str) -> str:
        return f"{self.base_path}/assets/{self.asset_dirs[category]}/{filename}"

    def static_url(self, filename: str) -> str:
        return f"{self.base_path}/{filename}"


def get_site_config(**overrides) -> SiteConfig:
    """Build the site configuration, optionally overriding single fields."""
    cfg = SiteConfig()
    if overrides:
        cfg = replace(cfg, **overrides)
    return cfg

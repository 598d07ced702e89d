"""
Content loader: data/<name>.json ➜ validated records ➜ view store.

• One loader per collection; one GET per load, no retry, no polling.
• Image fields (logo / icon / image) are rewritten to asset URLs exactly
  once, here, never at render time.
• Failures are logged and recorded on the store; the collection already
  in the store stays. Set raise_errors to get the exception as well.
"""
from __future__ import annotations
import logging
from concurrent.futures import Executor, Future
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

import requests

from assets import AssetResolver
from config import SiteConfig
from errors import ContentError, MalformedResource, ResourceUnavailable
from schema_content import get_collection_spec, parse_collection
from store import Collection, ViewModelStore

logger = logging.getLogger(__name__)
logging.getLogger("urllib3").setLevel(logging.WARNING)

ASSET_FIELDS = ("logo", "icon", "image")


@dataclass(frozen=True)
class LoadResult:
    resource: str
    ok: bool
    collection: Collection = ()
    error: Optional[ContentError] = None
    stale: bool = False


class ContentLoader:
    def __init__(self, resource: str, store: ViewModelStore, config: SiteConfig,
                 resolver: AssetResolver | None = None, session: requests.Session | None = None):
        self.resource = resource
        self.store = store
        self.config = config
        spec = get_collection_spec(resource)
        self.resolver = resolver or AssetResolver(config, spec.asset_category)
        self.session = session or requests.Session()

    @property
    def url(self) -> str:
        return self.config.data_url(self.resource)

    def _resolve_assets(self, record: Dict[str, Any]) -> Dict[str, Any]:
        for field in ASSET_FIELDS:
            value = record.get(field)
            if not value:
                continue
            if not isinstance(value, str):
                raise MalformedResource(self.resource, f"{field} must be a file name, got {type(value).__name__}")
            record[field] = self.resolver.resolve(value)
        return record

    def fetch(self) -> List[Dict[str, Any]]:
        """GET the resource and return enriched records. Raises ContentError."""
        try:
            resp = self.session.get(self.url, timeout=self.config.fetch_timeout)
        except requests.RequestException as e:
            raise ResourceUnavailable(self.resource, str(e)) from e
        if not resp.ok:
            raise ResourceUnavailable(self.resource, f"HTTP {resp.status_code} for {self.url}")

        try:
            payload = resp.json()
        except ValueError as e:
            raise MalformedResource(self.resource, f"invalid JSON: {e}") from e

        return [self._resolve_assets(r) for r in parse_collection(self.resource, payload)]

    def load(self) -> LoadResult:
        token = self.store.begin(self.resource)
        try:
            records = self.fetch()
        except ContentError as e:
            logger.error("Error loading %s: %s", self.resource, e)
            stale = not self.store.fail(self.resource, token, str(e))
            if self.config.raise_errors:
                raise
            return LoadResult(self.resource, ok=False, error=e, stale=stale)

        if not self.store.complete(self.resource, token, records):
            return LoadResult(self.resource, ok=False, stale=True)
        logger.info("Loaded %d %s record(s)", len(records), self.resource)
        return LoadResult(self.resource, ok=True, collection=self.store.get(self.resource))


def load_concurrently(loaders: Iterable[ContentLoader], executor: Executor) -> List[Future]:
    """Kick off every load at once; the caller decides whether to wait."""
    return [executor.submit(loader.load) for loader in loaders]

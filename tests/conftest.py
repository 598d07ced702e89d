import json

import pytest
import requests

from config import get_site_config

BASE = "http://site.test"


class FakeResponse:
    def __init__(self, status_code=200, body=None, text=None):
        self.status_code = status_code
        self.ok = 200 <= status_code < 400
        self._text = text if text is not None else json.dumps(body)

    def json(self):
        return json.loads(self._text)


class FakeSession:
    """Stands in for requests.Session: URL -> FakeResponse or exception."""

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        outcome = self.routes.get(url, FakeResponse(404, text="not found"))
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def data_url(name):
    return f"{BASE}/data/{name}.json"


@pytest.fixture
def site_root(tmp_path):
    root = tmp_path / "public"
    for category, names in {
        "logos": ["ugr.svg", "odoo.svg", "github.svg"],
        "locations": ["granada.svg"],
        "prints": ["blue_vase.jpg", "a_dragon.png", "notes.txt"],
    }.items():
        folder = root / "assets" / category
        folder.mkdir(parents=True)
        for name in names:
            (folder / name).write_text("<svg/>", encoding="utf-8")
    (root / "data").mkdir()
    return root


@pytest.fixture
def site_config(site_root):
    return get_site_config(base_path=BASE, site_root=site_root, fetch_timeout=3.0, raise_errors=False)


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def connection_error():
    return requests.ConnectionError("connection refused")

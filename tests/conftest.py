"""
reelfetch test configuration

Shared fakes and HTML builders. No test touches the real network.
"""

import json
import sys
from pathlib import Path
from typing import Dict, List, Optional

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from reelfetch.core.config import ResolverConfig
from reelfetch.core.interfaces import NetworkAdapter
from reelfetch.infra.network.http import ServerError

FB_API = "https://fb-api.test/download"
IG_API = "https://ig-api.test/video"


class FakeNetwork(NetworkAdapter):
    """
    Call-counting stand-in for HttpNetworkAdapter.

    Responses are keyed by URL; a value that is an Exception is raised.
    Unknown URLs answer with HTTP 404.
    """

    def __init__(self, json_responses: Optional[Dict] = None, pages: Optional[Dict] = None):
        self.json_responses = json_responses or {}
        self.pages = pages or {}
        self.calls: List[tuple] = []

    def _answer(self, table, url):
        response = table.get(url, ServerError(404, url))
        if isinstance(response, Exception):
            raise response
        return response

    def get_json(self, url, params=None, headers=None, timeout=20.0):
        self.calls.append(("json", url, dict(params or {}), timeout))
        return self._answer(self.json_responses, url)

    def get_text(self, url, params=None, headers=None, timeout=20.0):
        self.calls.append(("text", url, dict(params or {}), timeout))
        return self._answer(self.pages, url)

    def urls_called(self) -> List[str]:
        return [c[1] for c in self.calls]


def build_html(meta: Optional[Dict[str, str]] = None, scripts: Optional[List[str]] = None, json_ld: Optional[List] = None, name_attr: bool = False) -> str:
    """Small HTML page with the given og tags, inline scripts and JSON-LD blocks."""
    attr = "name" if name_attr else "property"
    head = [f'<meta {attr}="{k}" content="{v}">' for k, v in (meta or {}).items()]
    for block in json_ld or []:
        body = block if isinstance(block, str) else json.dumps(block)
        head.append(f'<script type="application/ld+json">{body}</script>')
    body = [f"<script>{s}</script>" for s in scripts or []]
    return "<html><head>%s</head><body>%s</body></html>" % ("".join(head), "".join(body))


@pytest.fixture
def config() -> ResolverConfig:
    return ResolverConfig(facebook_api_url=FB_API, instagram_api_url=IG_API, request_timeout=15)


@pytest.fixture
def network() -> FakeNetwork:
    return FakeNetwork()

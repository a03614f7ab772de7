import logging
from typing import Any, Dict, Optional

import requests

from reelfetch.core.config import DEFAULT_USER_AGENT
from reelfetch.core.interfaces import NetworkAdapter

logger = logging.getLogger(__name__)

HTML_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8"
JSON_ACCEPT = "application/json, text/plain, */*"


class NetworkError(Exception):
    """Host unreachable, connection dropped or request timed out."""
    pass


class ServerError(Exception):
    def __init__(self, status_code: int, url: str = ""):
        super().__init__(f"HTTP {status_code}")
        self.status_code = status_code
        self.url = url


class ContentError(Exception):
    """The server answered 2xx but the body is not what was asked for."""
    pass


class HttpNetworkAdapter(NetworkAdapter):
    def __init__(self, user_agent: str = DEFAULT_USER_AGENT):
        self.user_agent = user_agent

    def _browser_headers(self, accept: str, headers: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        final_headers = {
            "User-Agent": self.user_agent,
            "Accept": accept,
            "Accept-Language": "en-US,en;q=0.9",
        }
        # Caller headers override defaults
        if headers:
            final_headers.update(headers)
        return final_headers

    def _get(self, url: str, params: Optional[Dict[str, str]], headers: Dict[str, str], timeout: float) -> requests.Response:
        # One session per request keeps concurrent callers fully independent
        try:
            with requests.Session() as s:
                resp = s.get(url, params=params, headers=headers, timeout=timeout, allow_redirects=True)
        except requests.exceptions.Timeout as e:
            raise NetworkError(f"Timed out after {timeout}s: {url}") from e
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"Connection failed: {e}") from e

        logger.debug("GET %s -> %s", resp.url, resp.status_code)
        if not 200 <= resp.status_code < 300:
            raise ServerError(resp.status_code, url)
        return resp

    def get_json(self, url: str, params: Optional[Dict[str, str]] = None, headers: Optional[Dict[str, str]] = None, timeout: float = 20.0) -> Any:
        resp = self._get(url, params, self._browser_headers(JSON_ACCEPT, headers), timeout)
        try:
            return resp.json()
        except ValueError as e:
            raise ContentError(f"Response from {url} is not JSON") from e

    def get_text(self, url: str, params: Optional[Dict[str, str]] = None, headers: Optional[Dict[str, str]] = None, timeout: float = 20.0) -> str:
        resp = self._get(url, params, self._browser_headers(HTML_ACCEPT, headers), timeout)

        content_type = resp.headers.get("Content-Type", "").lower()
        if content_type and "html" not in content_type and "text" not in content_type:
            raise ContentError(f"Expected HTML from {url}, got {content_type}")
        return resp.text

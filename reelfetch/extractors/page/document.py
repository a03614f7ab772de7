import logging
from typing import Dict, List, Optional

from bs4 import BeautifulSoup

from reelfetch.core.config import ResolverConfig
from reelfetch.core.interfaces import NetworkAdapter

logger = logging.getLogger(__name__)


class PageDocument:
    """Parsed HTML of a post page with the lookups the scraping strategies need."""

    def __init__(self, html: str, url: str = ""):
        self.url = url
        self.soup = BeautifulSoup(html or "", "html.parser")

    def meta(self, *keys: str) -> Optional[str]:
        """
        Return the first non-empty <meta> content for the given keys.

        Keys are tried in order and matched against both the ``property``
        and ``name`` attributes (Facebook and Instagram use either).
        """
        for key in keys:
            for attr in ("property", "name"):
                # Pages sometimes repeat a tag with an empty first copy
                for tag in self.soup.find_all("meta", attrs={attr: key}):
                    content = (tag.get("content") or "").strip()
                    if content:
                        return content
        return None

    def inline_scripts(self) -> List[str]:
        """Bodies of all <script> blocks without a src, in document order."""
        bodies = []
        for script in self.soup.find_all("script"):
            if script.get("src"):
                continue
            body = script.string if script.string is not None else script.get_text()
            if body and body.strip():
                bodies.append(body)
        return bodies

    def json_ld_blocks(self) -> List[str]:
        return [
            script.string or script.get_text()
            for script in self.soup.find_all("script", attrs={"type": "application/ld+json"})
        ]


class PageLoader:
    """
    Fetches the source page at most once per resolve call.

    Every page-based strategy of one call shares the same loader, so the
    HTML (or the error that prevented fetching it) is reused instead of
    hitting the platform again. Create a new loader per call.
    """

    def __init__(self, network: NetworkAdapter, config: ResolverConfig):
        self.network = network
        self.config = config
        self._pages: Dict[str, PageDocument] = {}
        self._errors: Dict[str, Exception] = {}
        self.fetch_count = 0

    def load(self, url: str) -> PageDocument:
        if url in self._pages:
            return self._pages[url]
        if url in self._errors:
            raise self._errors[url]

        self.fetch_count += 1
        try:
            html = self.network.get_text(
                url,
                headers={"User-Agent": self.config.user_agent},
                timeout=self.config.request_timeout,
            )
        except Exception as e:
            self._errors[url] = e
            raise

        page = PageDocument(html, url)
        self._pages[url] = page
        logger.debug("Fetched %s (%d chars)", url, len(html or ""))
        return page

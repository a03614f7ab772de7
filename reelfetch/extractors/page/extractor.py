import json
import logging
import re
from typing import Iterator, Optional, Tuple
from urllib.parse import unquote

from reelfetch.core.entities import MediaKind, Platform
from ..base import BaseStrategy, StrategyError
from ..result import ExtractResult
from .document import PageDocument, PageLoader

logger = logging.getLogger(__name__)

VIDEO_META_KEYS = ("og:video", "og:video:url", "og:video:secure_url")

# (field, quality label) in the order they are searched within a script block
SCRIPT_FIELDS = (
    ("video_url", "Original"),
    ("hd_src", "HD"),
    ("sd_src", "SD"),
)
SCRIPT_PATTERNS = [
    (re.compile(r'"%s"\s*:\s*"((?:[^"\\]|\\.)*)"' % field), label)
    for field, label in SCRIPT_FIELDS
]

_PERCENT_UNICODE = re.compile(r"%u([0-9a-fA-F]{4})")
_BACKSLASH_UNICODE = re.compile(r"\\u([0-9a-fA-F]{4})")


def unescape_script_value(raw: str) -> str:
    """
    Decode a URL captured from inside a JS/JSON string literal.

    Handles JSON escapes (``\\/``, ``\\u0026``), ``%uXXXX`` sequences and
    fully percent-encoded URLs.
    """
    value = _PERCENT_UNICODE.sub(lambda m: chr(int(m.group(1), 16)), raw)
    try:
        value = json.loads('"%s"' % value)
    except ValueError:
        value = _BACKSLASH_UNICODE.sub(lambda m: chr(int(m.group(1), 16)), value)
        value = value.replace("\\/", "/").replace('\\"', '"')

    if "%" in value and not value.lower().startswith(("http://", "https://")):
        decoded = unquote(value)
        if decoded.lower().startswith(("http://", "https://")):
            value = decoded
    return value.strip()


def page_metadata(page: PageDocument, platform: Platform) -> Tuple[Optional[str], Optional[str]]:
    """(title, thumbnail) from the page's Open Graph tags."""
    if platform is Platform.INSTAGRAM:
        title = page.meta("og:title", "og:description")
    else:
        title = page.meta("og:title")
    return title, page.meta("og:image")


class MetaTagStrategy(BaseStrategy):
    """Reads og:video style tags from the post page."""

    name = "meta_tags"
    platforms = (Platform.FACEBOOK, Platform.INSTAGRAM)

    def extract(self, url: str, platform: Platform, pages: PageLoader) -> ExtractResult:
        page = pages.load(url)
        video_url = page.meta(*VIDEO_META_KEYS)
        if video_url is None:
            raise StrategyError("No og:video tag on page")

        title, thumbnail = page_metadata(page, platform)
        return ExtractResult(
            platform=platform,
            source_url=url,
            strategy=self.name,
            media_kind=MediaKind.VIDEO,
            title=title,
            thumbnail=thumbnail,
            links=[("Original", video_url)],
        )


class InlineScriptStrategy(BaseStrategy):
    """Scans inline <script> bodies for video_url / hd_src / sd_src literals."""

    name = "inline_script"
    platforms = (Platform.FACEBOOK, Platform.INSTAGRAM)

    def find_video(self, page: PageDocument) -> Optional[Tuple[str, str]]:
        for body in page.inline_scripts():
            for pattern, label in SCRIPT_PATTERNS:
                for match in pattern.finditer(body):
                    value = unescape_script_value(match.group(1))
                    if value:
                        return label, value
        return None

    def extract(self, url: str, platform: Platform, pages: PageLoader) -> ExtractResult:
        page = pages.load(url)
        found = self.find_video(page)
        if found is None:
            raise StrategyError("No video field in inline scripts")

        label, video_url = found
        title, thumbnail = page_metadata(page, platform)
        return ExtractResult(
            platform=platform,
            source_url=url,
            strategy=self.name,
            media_kind=MediaKind.VIDEO,
            title=title,
            thumbnail=thumbnail,
            links=[(label, video_url)],
        )


def _iter_json_ld_objects(node) -> Iterator[dict]:
    if isinstance(node, list):
        for item in node:
            yield from _iter_json_ld_objects(item)
    elif isinstance(node, dict):
        yield node
        if "@graph" in node:
            yield from _iter_json_ld_objects(node["@graph"])


def _string_or_none(value) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


class JsonLdStrategy(BaseStrategy):
    """Reads video.contentUrl / video.url out of JSON-LD blocks."""

    name = "json_ld"
    platforms = (Platform.INSTAGRAM,)

    def find_video(self, page: PageDocument) -> Optional[dict]:
        for block in page.json_ld_blocks():
            try:
                data = json.loads(block)
            except ValueError:
                # Broken JSON-LD is common; treat it as no match
                logger.debug("Skipping unparsable JSON-LD block on %s", page.url)
                continue

            for obj in _iter_json_ld_objects(data):
                videos = obj.get("video")
                if isinstance(videos, dict):
                    videos = [videos]
                if not isinstance(videos, list):
                    continue
                for video in videos:
                    if not isinstance(video, dict):
                        continue
                    video_url = _string_or_none(video.get("contentUrl")) or _string_or_none(video.get("url"))
                    if video_url:
                        return {
                            "url": video_url,
                            "title": _string_or_none(video.get("name")) or _string_or_none(obj.get("headline")),
                            "thumbnail": _string_or_none(video.get("thumbnailUrl")),
                        }
        return None

    def extract(self, url: str, platform: Platform, pages: PageLoader) -> ExtractResult:
        page = pages.load(url)
        video = self.find_video(page)
        if video is None:
            raise StrategyError("No video in JSON-LD")

        page_title, page_thumbnail = page_metadata(page, platform)
        return ExtractResult(
            platform=platform,
            source_url=url,
            strategy=self.name,
            media_kind=MediaKind.VIDEO,
            title=video["title"] or page_title,
            thumbnail=video["thumbnail"] or page_thumbnail,
            links=[("Original", video["url"])],
        )


class OpenGraphImageStrategy(BaseStrategy):
    """Last resort for Instagram: the post image itself."""

    name = "og_image"
    platforms = (Platform.INSTAGRAM,)

    def extract(self, url: str, platform: Platform, pages: PageLoader) -> ExtractResult:
        page = pages.load(url)
        image_url = page.meta("og:image")
        if image_url is None:
            raise StrategyError("No og:image tag on page")

        # Page titles describe the post, not the image; keep the placeholder
        return ExtractResult(
            platform=platform,
            source_url=url,
            strategy=self.name,
            media_kind=MediaKind.IMAGE,
            title=None,
            thumbnail=image_url,
            links=[("Original", image_url)],
        )

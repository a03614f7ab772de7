import re
from typing import Optional
from urllib.parse import urlparse

from reelfetch.core.entities import Platform

FACEBOOK_HOSTS = ("facebook.com", "fb.watch")
INSTAGRAM_HOSTS = ("instagram.com", "instagr.am")

# Post, reel and story pages are the only Instagram paths that carry media
INSTAGRAM_MEDIA_PATH = re.compile(r"^/(p|reel|stories)/[^/]+", re.IGNORECASE)


def _host_matches(host: str, domains) -> bool:
    return any(host == d or host.endswith("." + d) for d in domains)


def is_valid_url(url) -> bool:
    """True for a non-empty absolute http(s) URL with a host."""
    if not isinstance(url, str) or not url.strip():
        return False
    if any(c.isspace() for c in url.strip()):
        return False
    try:
        parsed = urlparse(url.strip())
        # Accessing .port validates it
        parsed.port
    except ValueError:
        return False
    return parsed.scheme.lower() in ("http", "https") and bool(parsed.hostname)


def detect_platform(url: str, loose_instagram: bool = False) -> Optional[Platform]:
    """
    Identify the platform for a given URL.

    Args:
        url: The URL to classify.
        loose_instagram: Accept any instagram.com page instead of only
            /p/, /reel/ and /stories/ paths.

    Returns:
        The Platform, or None for malformed or unrecognised URLs.
    """
    if not is_valid_url(url):
        return None

    parsed = urlparse(url.strip())
    host = (parsed.hostname or "").lower()
    path = parsed.path or ""

    if _host_matches(host, FACEBOOK_HOSTS):
        return Platform.FACEBOOK if path.strip("/") else None

    if _host_matches(host, INSTAGRAM_HOSTS):
        if loose_instagram:
            return Platform.INSTAGRAM if path.strip("/") else None
        return Platform.INSTAGRAM if INSTAGRAM_MEDIA_PATH.match(path) else None

    return None

from urllib.parse import unquote_plus, urlparse, urlunparse

# Share/tracking params added by the apps; some of them break scraping
TRACKING_PARAMS = {
    "mibextid", "rdid", "share_url", "refsrc", "_rdr", "__tn__", "ref",
    "igsh", "igshid", "fbclid",
}


def _is_tracking(piece: str) -> bool:
    key = unquote_plus(piece.split("=", 1)[0]).lower()
    return key in TRACKING_PARAMS or key.startswith("utm_")


def clean_url(url: str) -> str:
    """
    Strip whitespace and tracking query parameters from a post URL.

    Args:
        url: A URL that already passed is_valid_url.

    Returns:
        The cleaned URL. Every other query piece (e.g. ``v`` or
        ``story_fbid``) is kept verbatim and in its original order.
    """
    url = url.strip()
    parsed = urlparse(url)
    if not parsed.query:
        return url

    kept = [piece for piece in parsed.query.split("&") if piece and not _is_tracking(piece)]
    return urlunparse(parsed._replace(query="&".join(kept)))

from typing import List, Optional

from reelfetch.core.entities import MediaLink, MediaMetadata, ResolutionResult
from .result import ExtractResult


def _present(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def placeholder_title(raw: ExtractResult) -> str:
    """e.g. "Facebook Video" or "Instagram Image"."""
    return f"{raw.platform.label} {raw.media_kind.label}"


def normalize(raw: ExtractResult) -> ResolutionResult:
    """
    Map a strategy's raw output onto the uniform result shape.

    The returned links may be empty; the orchestrator treats that as a
    failure and never hands such a result to a caller.
    """
    links: List[MediaLink] = []
    seen = set()
    for quality, url in raw.links:
        url = _present(url)
        if url is None or url in seen:
            continue
        seen.add(url)
        links.append(MediaLink(quality=quality, url=url))

    metadata = MediaMetadata(
        title=_present(raw.title) or placeholder_title(raw),
        thumbnail=_present(raw.thumbnail) or "",
        media_kind=raw.media_kind,
        platform=raw.platform,
    )
    return ResolutionResult(metadata=metadata, links=tuple(links))

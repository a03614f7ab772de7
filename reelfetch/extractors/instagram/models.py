from dataclasses import dataclass, field
from typing import Any, List, Optional
from urllib.parse import urlparse

IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".webp", ".heic")


def _text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def is_image_url(url: str) -> bool:
    return urlparse(url).path.lower().endswith(IMAGE_EXTENSIONS)


@dataclass
class InstagramApiPayload:
    """Fields the Instagram resolver API may return for a post."""
    media: List[str] = field(default_factory=list)
    thumbnail: Optional[str] = None
    title: Optional[str] = None

    @classmethod
    def from_json(cls, data: Any) -> "InstagramApiPayload":
        if not isinstance(data, dict):
            raise ValueError("Resolver response is not a JSON object")

        raw_media = data.get("media")
        if not isinstance(raw_media, list):
            raw_media = [raw_media]

        # Carousel posts come back as a list of strings or {"url": ...} objects
        media = []
        for item in raw_media:
            if isinstance(item, dict):
                item = item.get("url")
            value = _text(item)
            if value:
                media.append(value)

        return cls(
            media=media,
            thumbnail=_text(data.get("thumbnail")),
            title=_text(data.get("title")),
        )

    @property
    def all_images(self) -> bool:
        return bool(self.media) and all(is_image_url(u) for u in self.media)

from dataclasses import dataclass
from typing import Any, Optional


def _text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


@dataclass
class FacebookApiPayload:
    """Fields the Facebook resolver API may return for a post."""
    hd: Optional[str] = None
    sd: Optional[str] = None
    url: Optional[str] = None
    thumbnail: Optional[str] = None
    title: Optional[str] = None

    @classmethod
    def from_json(cls, data: Any) -> "FacebookApiPayload":
        if not isinstance(data, dict):
            raise ValueError("Resolver response is not a JSON object")
        # Some deployments wrap the payload in "data"
        if isinstance(data.get("data"), dict):
            data = data["data"]
        return cls(
            hd=_text(data.get("hd")),
            sd=_text(data.get("sd")),
            url=_text(data.get("url")),
            thumbnail=_text(data.get("thumb")) or _text(data.get("thumbnail")),
            title=_text(data.get("title")),
        )

    @property
    def has_media(self) -> bool:
        return any((self.hd, self.sd, self.url))

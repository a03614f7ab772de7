from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Tuple


class Platform(Enum):
    FACEBOOK = "facebook"
    INSTAGRAM = "instagram"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class MediaKind(Enum):
    VIDEO = "video"
    IMAGE = "image"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class FailureReason(Enum):
    INVALID_INPUT = "INVALID_INPUT"
    UNSUPPORTED_PLATFORM = "UNSUPPORTED_PLATFORM"
    NOT_FOUND = "NOT_FOUND"
    UPSTREAM_UNAVAILABLE = "UPSTREAM_UNAVAILABLE"


@dataclass(frozen=True)
class MediaLink:
    """A single downloadable media URL with its quality label."""
    quality: str
    url: str

    def __post_init__(self):
        if not self.url:
            raise ValueError("MediaLink url must not be empty")

    def to_dict(self) -> Dict[str, str]:
        return {"quality": self.quality, "url": self.url}


@dataclass(frozen=True)
class MediaMetadata:
    title: str
    media_kind: MediaKind
    platform: Platform
    thumbnail: str = ""  # Empty string when the source had none

    def to_dict(self) -> Dict[str, str]:
        return {
            "title": self.title,
            "thumbnail": self.thumbnail,
            "media_kind": self.media_kind.value,
            "platform": self.platform.value,
        }


@dataclass(frozen=True)
class ResolutionResult:
    """
    Successful outcome of a resolve call.

    Links are ordered best quality first. A result handed back to a caller
    always carries at least one link; an empty outcome is a ResolutionFailure.
    """
    metadata: MediaMetadata
    links: Tuple[MediaLink, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return True

    def to_dict(self) -> Dict[str, Any]:
        return {
            **self.metadata.to_dict(),
            "links": [link.to_dict() for link in self.links],
        }


@dataclass(frozen=True)
class ResolutionFailure:
    """Terminal failure of a resolve call, returned as a value."""
    reason: FailureReason
    message: str

    @property
    def ok(self) -> bool:
        return False

    def to_dict(self) -> Dict[str, str]:
        return {"error": self.message, "reason": self.reason.value}

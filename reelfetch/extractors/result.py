from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from reelfetch.core.entities import FailureReason, MediaKind, Platform


@dataclass
class ExtractResult:
    """
    Raw output of a single extraction strategy.

    Fields are either present with a value or None; the normalizer turns
    this into a ResolutionResult with defaults applied. Links are
    (quality_label, url) pairs in priority order and may still contain
    empty URLs at this stage.
    """
    platform: Platform
    source_url: str
    strategy: str
    media_kind: MediaKind = MediaKind.VIDEO
    title: Optional[str] = None
    thumbnail: Optional[str] = None
    links: List[Tuple[str, Optional[str]]] = field(default_factory=list)


@dataclass(frozen=True)
class StrategyFailure:
    """Why a single strategy gave up. Never leaves the orchestrator."""
    strategy: str
    reason: FailureReason
    message: str

    @property
    def retryable(self) -> bool:
        return self.reason is FailureReason.UPSTREAM_UNAVAILABLE

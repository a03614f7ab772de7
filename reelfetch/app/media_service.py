import logging
from typing import List, Optional, Union

from reelfetch.core.config import ResolverConfig
from reelfetch.core.entities import FailureReason, ResolutionFailure, ResolutionResult
from reelfetch.core.interfaces import NetworkAdapter
from reelfetch.extractors.normalizer import normalize
from reelfetch.extractors.page.document import PageLoader
from reelfetch.extractors.registry import StrategyRegistry, build_default_registry
from reelfetch.extractors.result import StrategyFailure
from reelfetch.sources.cleaner import clean_url
from reelfetch.sources.detector import detect_platform, is_valid_url

MESSAGES = {
    FailureReason.INVALID_INPUT: "Please enter a valid video URL.",
    FailureReason.UNSUPPORTED_PLATFORM: "Please enter a valid Facebook or Instagram post URL.",
    FailureReason.NOT_FOUND: (
        "Could not find any downloadable media for this post. It may be private, "
        "the platform may have changed its pages, or the post has no video."
    ),
}
# Same wording for the user; the reason code still tells callers it may be worth retrying
MESSAGES[FailureReason.UPSTREAM_UNAVAILABLE] = MESSAGES[FailureReason.NOT_FOUND]


class MediaService:
    """
    Service resolving a post URL to direct media links.

    RESPONSIBILITIES:
    - Orchestrate the "Detection -> Strategies -> Normalization" pipeline.
    - Return a ResolutionResult or a ResolutionFailure value to the caller.
    - It does NOT download files and keeps no state between calls.
    """

    def __init__(self, network: NetworkAdapter, config: Optional[ResolverConfig] = None, registry: Optional[StrategyRegistry] = None, logger: Optional[logging.Logger] = None):
        self.network = network
        self.config = config or ResolverConfig()
        self.registry = registry or build_default_registry(network, self.config)
        self.logger = logger or logging.getLogger(__name__)

    def _failure(self, reason: FailureReason) -> ResolutionFailure:
        return ResolutionFailure(reason=reason, message=MESSAGES[reason])

    def resolve(self, url: str) -> Union[ResolutionResult, ResolutionFailure]:
        """
        Main entry point: resolve a Facebook/Instagram post URL.

        Strategies run one after another and the first one yielding at
        least one link wins; the remaining ones are never called.
        """
        if not is_valid_url(url):
            self.logger.info("Rejected input %r: not an http(s) URL", url)
            return self._failure(FailureReason.INVALID_INPUT)

        platform = detect_platform(url, loose_instagram=self.config.loose_instagram)
        if platform is None:
            self.logger.info("Rejected %s: unsupported platform", url)
            return self._failure(FailureReason.UNSUPPORTED_PLATFORM)

        url = clean_url(url)
        pages = PageLoader(self.network, self.config)
        failures: List[StrategyFailure] = []

        for strategy in self.registry.chain_for(platform):
            self.logger.debug("Trying %s on %s", strategy.name, url)
            outcome = strategy.attempt(url, platform, pages)

            if isinstance(outcome, StrategyFailure):
                self.logger.debug("%s failed (%s): %s", strategy.name, outcome.reason.value, outcome.message)
                failures.append(outcome)
                continue

            result = normalize(outcome)
            if not result.links:
                self.logger.debug("%s returned no usable links", strategy.name)
                failures.append(StrategyFailure(strategy.name, FailureReason.NOT_FOUND, "No usable links"))
                continue

            self.logger.info("Resolved %s via %s (%d link(s))", url, strategy.name, len(result.links))
            return result

        if failures and all(f.retryable for f in failures):
            reason = FailureReason.UPSTREAM_UNAVAILABLE
        else:
            reason = FailureReason.NOT_FOUND
        self.logger.warning(
            "All %d strategies failed for %s (%s): %s",
            len(failures), url, reason.value,
            "; ".join(f"{f.strategy}: {f.message}" for f in failures),
        )
        return self._failure(reason)

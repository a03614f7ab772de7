import logging
from abc import ABC, abstractmethod
from typing import Optional, Tuple, Union

from reelfetch.core.config import ResolverConfig
from reelfetch.core.entities import FailureReason, Platform
from reelfetch.core.interfaces import NetworkAdapter
from reelfetch.infra.network.http import ContentError, NetworkError, ServerError
from .page.document import PageLoader
from .result import ExtractResult, StrategyFailure

logger = logging.getLogger(__name__)


class StrategyError(Exception):
    """The source was reachable but held no usable media."""
    pass


class BaseStrategy(ABC):
    """
    Abstract base class for all extraction strategies.

    A strategy is one self-contained technique (resolver API, meta tags,
    inline scripts, JSON-LD, ...) for turning a post URL into media links.

    CRITICAL BOUNDARIES:
    - Strategies ONLY identify media URLs and metadata.
    - Strategies do NOT download file content.
    - attempt() never raises. Every failure comes back as a StrategyFailure
      so the orchestrator can move on to the next strategy.
    """

    name: str = "base"
    platforms: Tuple[Platform, ...] = ()

    def __init__(self, network: NetworkAdapter, config: Optional[ResolverConfig] = None):
        self.network = network
        self.config = config or ResolverConfig()

    def supports(self, platform: Platform) -> bool:
        return platform in self.platforms

    def attempt(self, url: str, platform: Platform, pages: Optional[PageLoader] = None) -> Union[ExtractResult, StrategyFailure]:
        """
        Run the strategy and convert any error into a StrategyFailure.

        Args:
            url: Cleaned source URL.
            platform: Platform the URL was detected as.
            pages: Per-call page loader shared with the other strategies.
                A private one is created when omitted.

        Returns:
            ExtractResult on success, StrategyFailure otherwise.
        """
        if pages is None:
            pages = PageLoader(self.network, self.config)

        try:
            return self.extract(url, platform, pages)
        except (NetworkError, ServerError) as e:
            return self._fail(FailureReason.UPSTREAM_UNAVAILABLE, str(e))
        except (StrategyError, ContentError) as e:
            return self._fail(FailureReason.NOT_FOUND, str(e))
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            return self._fail(FailureReason.NOT_FOUND, f"Unexpected payload: {e}")
        except Exception as e:
            logger.exception("Strategy %s crashed on %s", self.name, url)
            return self._fail(FailureReason.NOT_FOUND, f"{type(e).__name__}: {e}")

    def _fail(self, reason: FailureReason, message: str) -> StrategyFailure:
        return StrategyFailure(strategy=self.name, reason=reason, message=message)

    @abstractmethod
    def extract(self, url: str, platform: Platform, pages: PageLoader) -> ExtractResult:
        """
        Extract media information from the given URL.

        May raise NetworkError, ServerError, ContentError or StrategyError;
        attempt() converts them.
        """
        pass

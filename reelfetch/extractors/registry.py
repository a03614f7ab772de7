from typing import Dict, List, Optional

from reelfetch.core.config import ResolverConfig
from reelfetch.core.entities import Platform
from reelfetch.core.interfaces import NetworkAdapter
from .base import BaseStrategy


class StrategyRegistry:
    """
    Registry of the fallback chain for each platform.

    Strategies are kept in registration order, which is the order the
    orchestrator tries them in.
    """

    def __init__(self):
        self._chains: Dict[Platform, List[BaseStrategy]] = {p: [] for p in Platform}

    def register(self, strategy: BaseStrategy, platforms: Optional[List[Platform]] = None):
        """Append a strategy to the chain of every platform it supports."""
        for platform in platforms or strategy.platforms:
            if not strategy.supports(platform):
                raise ValueError(f"{strategy.name} does not support {platform.label}")
            self._chains[platform].append(strategy)

    def chain_for(self, platform: Platform) -> List[BaseStrategy]:
        """Ordered strategies for a platform (a copy; safe to iterate)."""
        return list(self._chains.get(platform, []))


def build_default_registry(network: NetworkAdapter, config: Optional[ResolverConfig] = None) -> StrategyRegistry:
    """
    Wire the standard chains, most specific technique first.

    Facebook:  resolver API -> meta tags -> inline scripts
    Instagram: resolver API -> meta tags -> inline scripts -> JSON-LD -> og:image
    """
    from .facebook.extractor import FacebookApiStrategy
    from .instagram.extractor import InstagramApiStrategy
    from .page.extractor import (
        InlineScriptStrategy,
        JsonLdStrategy,
        MetaTagStrategy,
        OpenGraphImageStrategy,
    )

    config = config or ResolverConfig()
    registry = StrategyRegistry()

    if config.use_resolver_api:
        registry.register(FacebookApiStrategy(network, config))
        registry.register(InstagramApiStrategy(network, config))

    registry.register(MetaTagStrategy(network, config))
    registry.register(InlineScriptStrategy(network, config))
    registry.register(JsonLdStrategy(network, config))
    registry.register(OpenGraphImageStrategy(network, config))
    return registry

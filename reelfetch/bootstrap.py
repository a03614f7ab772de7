from typing import Optional

from reelfetch.app.media_service import MediaService
from reelfetch.core.config import ResolverConfig, load_config
from reelfetch.infra.network.http import HttpNetworkAdapter


def create_container(config: Optional[ResolverConfig] = None) -> dict:
    # 1. Config
    config = config or load_config()

    # 2. Infra
    http_network = HttpNetworkAdapter(user_agent=config.user_agent)

    # 3. Services
    media_service = MediaService(http_network, config=config)

    return {
        "config": config,
        "network": http_network,
        "media_service": media_service,
    }

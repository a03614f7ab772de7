from reelfetch.core.entities import MediaKind, Platform
from ..base import BaseStrategy, StrategyError
from ..page.document import PageLoader
from ..result import ExtractResult
from .models import InstagramApiPayload


class InstagramApiStrategy(BaseStrategy):
    """Asks the third-party Instagram resolver API for the post media."""

    name = "instagram_api"
    platforms = (Platform.INSTAGRAM,)

    def extract(self, url: str, platform: Platform, pages: PageLoader) -> ExtractResult:
        data = self.network.get_json(
            self.config.instagram_api_url,
            params={"url": url},
            headers={"User-Agent": self.config.user_agent},
            timeout=self.config.request_timeout,
        )
        payload = InstagramApiPayload.from_json(data)
        if not payload.media:
            raise StrategyError("Resolver API returned no media")

        if len(payload.media) == 1:
            links = [("Original", payload.media[0])]
        else:
            links = [(f"Original {i}", u) for i, u in enumerate(payload.media, start=1)]

        return ExtractResult(
            platform=platform,
            source_url=url,
            strategy=self.name,
            media_kind=MediaKind.IMAGE if payload.all_images else MediaKind.VIDEO,
            title=payload.title,
            thumbnail=payload.thumbnail,
            links=links,
        )

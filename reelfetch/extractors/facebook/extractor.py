from reelfetch.core.entities import MediaKind, Platform
from ..base import BaseStrategy, StrategyError
from ..page.document import PageLoader
from ..result import ExtractResult
from .models import FacebookApiPayload


class FacebookApiStrategy(BaseStrategy):
    """Asks the third-party Facebook resolver API for HD/SD links."""

    name = "facebook_api"
    platforms = (Platform.FACEBOOK,)

    def extract(self, url: str, platform: Platform, pages: PageLoader) -> ExtractResult:
        data = self.network.get_json(
            self.config.facebook_api_url,
            params={"url": url},
            headers={"User-Agent": self.config.user_agent},
            timeout=self.config.request_timeout,
        )
        payload = FacebookApiPayload.from_json(data)
        if not payload.has_media:
            raise StrategyError("Resolver API returned no video")

        if payload.hd or payload.sd:
            links = [("HD", payload.hd), ("SD", payload.sd)]
        else:
            links = [("Original", payload.url)]

        return ExtractResult(
            platform=platform,
            source_url=url,
            strategy=self.name,
            media_kind=MediaKind.VIDEO,
            title=payload.title,
            thumbnail=payload.thumbnail,
            links=links,
        )

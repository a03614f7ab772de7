import logging

import pytest

from reelfetch.app.media_service import MediaService
from reelfetch.core.config import ResolverConfig
from reelfetch.core.entities import (
    FailureReason,
    MediaKind,
    MediaLink,
    Platform,
    ResolutionFailure,
    ResolutionResult,
)
from reelfetch.extractors.base import BaseStrategy, StrategyError
from reelfetch.extractors.registry import StrategyRegistry, build_default_registry
from reelfetch.extractors.result import ExtractResult
from reelfetch.infra.network.http import NetworkError, ServerError

from conftest import FB_API, IG_API, FakeNetwork, build_html

FB_POST = "https://www.facebook.com/watch?v=42"
IG_POST = "https://www.instagram.com/p/Cabc123/"


class CountingStrategy(BaseStrategy):
    """Stub strategy that records invocations and returns a fixed outcome."""

    platforms = (Platform.FACEBOOK, Platform.INSTAGRAM)

    def __init__(self, name, links=None, error=None):
        super().__init__(FakeNetwork())
        self.name = name
        self.links = links
        self.error = error
        self.invocations = 0

    def extract(self, url, platform, pages):
        self.invocations += 1
        if self.error is not None:
            raise self.error
        return ExtractResult(platform=platform, source_url=url, strategy=self.name, links=self.links or [])


def service_with(*strategies, network=None):
    registry = StrategyRegistry()
    for strategy in strategies:
        registry.register(strategy)
    return MediaService(network or FakeNetwork(), registry=registry)


class TestInputRejection:
    @pytest.mark.parametrize("value", ["", "   ", "hello world", "facebook.com/watch?v=1", "ftp://fb.watch/x", None])
    def test_invalid_input_without_network(self, config, value):
        network = FakeNetwork()
        outcome = MediaService(network, config=config).resolve(value)
        assert isinstance(outcome, ResolutionFailure)
        assert outcome.reason is FailureReason.INVALID_INPUT
        assert network.calls == []

    def test_unsupported_platform_without_network(self, config):
        network = FakeNetwork()
        outcome = MediaService(network, config=config).resolve("https://www.youtube.com/watch?v=1")
        assert outcome.reason is FailureReason.UNSUPPORTED_PLATFORM
        assert network.calls == []

    def test_instagram_profile_needs_loose_mode(self, config):
        profile = "https://www.instagram.com/someone/"
        strict = MediaService(FakeNetwork(), config=config).resolve(profile)
        assert strict.reason is FailureReason.UNSUPPORTED_PLATFORM

        loose_config = ResolverConfig(facebook_api_url=FB_API, instagram_api_url=IG_API, loose_instagram=True)
        network = FakeNetwork(pages={profile: build_html({"og:image": "https://i.test/avatar.jpg"})})
        loose = MediaService(network, config=loose_config).resolve(profile)
        assert loose.ok


class TestFacebookChain:
    def test_api_success_short_circuits(self, config):
        network = FakeNetwork(json_responses={FB_API: {"hd": "A", "sd": "B"}})
        outcome = MediaService(network, config=config).resolve(FB_POST)
        assert isinstance(outcome, ResolutionResult)
        assert outcome.links == (MediaLink("HD", "A"), MediaLink("SD", "B"))
        assert outcome.metadata.title == "Facebook Video"
        assert outcome.metadata.thumbnail == ""
        # The page is never fetched
        assert network.urls_called() == [FB_API]

    def test_falls_back_to_meta_tags(self, config):
        html = build_html({
            "og:video": "https://example/video.mp4",
            "og:title": "Great clip",
            "og:image": "https://example/thumb.jpg",
        })
        network = FakeNetwork(json_responses={FB_API: ServerError(502, FB_API)}, pages={FB_POST: html})
        outcome = MediaService(network, config=config).resolve(FB_POST)
        assert outcome.links == (MediaLink("Original", "https://example/video.mp4"),)
        assert outcome.metadata.title == "Great clip"
        assert outcome.metadata.thumbnail == "https://example/thumb.jpg"
        assert outcome.metadata.media_kind is MediaKind.VIDEO

    def test_falls_back_to_inline_scripts_with_single_page_fetch(self, config):
        html = build_html(scripts=['{"hd_src":"https:\\/\\/v.test\\/hd.mp4"}'])
        network = FakeNetwork(json_responses={FB_API: {"hd": ""}}, pages={FB_POST: html})
        outcome = MediaService(network, config=config).resolve(FB_POST)
        assert outcome.links == (MediaLink("HD", "https://v.test/hd.mp4"),)
        assert network.urls_called().count(FB_POST) == 1

    def test_no_image_fallback_for_facebook(self, config):
        html = build_html({"og:image": "https://example/only-image.jpg"})
        network = FakeNetwork(pages={FB_POST: html})
        outcome = MediaService(network, config=config).resolve(FB_POST)
        assert isinstance(outcome, ResolutionFailure)
        assert outcome.reason is FailureReason.NOT_FOUND

    def test_tracking_params_removed_before_requests(self, config):
        network = FakeNetwork(json_responses={FB_API: {"hd": "A"}})
        MediaService(network, config=config).resolve(FB_POST + "&mibextid=xyz")
        assert network.calls[0][2] == {"url": FB_POST}


class TestInstagramChain:
    def test_degrades_to_image(self, config):
        html = build_html({"og:image": "https://i.test/photo.jpg"}, scripts=["var nothing = 1;"], json_ld=[{"@type": "ImageObject"}])
        network = FakeNetwork(pages={IG_POST: html})
        outcome = MediaService(network, config=config).resolve(IG_POST)
        assert isinstance(outcome, ResolutionResult)
        assert outcome.metadata.media_kind is MediaKind.IMAGE
        assert outcome.metadata.title == "Instagram Image"
        assert outcome.links == (MediaLink("Original", "https://i.test/photo.jpg"),)

    def test_json_ld_video_beats_image(self, config):
        html = build_html({"og:image": "https://i.test/cover.jpg"}, json_ld=[{"video": {"contentUrl": "https://v.test/ld.mp4"}}])
        network = FakeNetwork(json_responses={IG_API: NetworkError("timeout")}, pages={IG_POST: html})
        outcome = MediaService(network, config=config).resolve(IG_POST)
        assert outcome.metadata.media_kind is MediaKind.VIDEO
        assert outcome.links == (MediaLink("Original", "https://v.test/ld.mp4"),)
        assert outcome.metadata.thumbnail == "https://i.test/cover.jpg"

    def test_api_media(self, config):
        network = FakeNetwork(json_responses={IG_API: {"media": "https://v.test/r.mp4"}})
        outcome = MediaService(network, config=config).resolve(IG_POST)
        assert outcome.metadata.title == "Instagram Video"
        assert network.urls_called() == [IG_API]

    def test_everything_unreachable_is_upstream_unavailable(self, config):
        network = FakeNetwork(json_responses={IG_API: NetworkError("down")}, pages={IG_POST: ServerError(503, IG_POST)})
        outcome = MediaService(network, config=config).resolve(IG_POST)
        assert outcome.reason is FailureReason.UPSTREAM_UNAVAILABLE
        # Page fetch failure is not retried by later strategies
        assert network.urls_called() == [IG_API, IG_POST]

    def test_no_api_mode_scrapes_only(self):
        config = ResolverConfig(instagram_api_url=IG_API, use_resolver_api=False)
        network = FakeNetwork(pages={IG_POST: build_html({"og:video": "https://v.test/v.mp4"})})
        outcome = MediaService(network, config=config).resolve(IG_POST)
        assert outcome.ok
        assert network.urls_called() == [IG_POST]


class TestOrchestration:
    def test_first_success_stops_chain(self):
        first = CountingStrategy("first", links=[("HD", "https://v.test/a.mp4")])
        rest = [CountingStrategy(f"s{i}", links=[("HD", "https://v.test/b.mp4")]) for i in range(3)]
        outcome = service_with(first, *rest).resolve(FB_POST)
        assert outcome.links == (MediaLink("HD", "https://v.test/a.mp4"),)
        assert first.invocations == 1
        assert [s.invocations for s in rest] == [0, 0, 0]

    def test_empty_links_count_as_failure(self):
        empty = CountingStrategy("empty", links=[("HD", ""), ("SD", None)])
        good = CountingStrategy("good", links=[("SD", "https://v.test/sd.mp4")])
        outcome = service_with(empty, good).resolve(FB_POST)
        assert outcome.links == (MediaLink("SD", "https://v.test/sd.mp4"),)
        assert empty.invocations == good.invocations == 1

    def test_exhausted_mixed_failures_is_not_found(self):
        outcome = service_with(
            CountingStrategy("down", error=NetworkError("x")),
            CountingStrategy("empty", error=StrategyError("y")),
        ).resolve(FB_POST)
        assert outcome.reason is FailureReason.NOT_FOUND
        assert "private" in outcome.message

    def test_no_strategies_is_not_found(self):
        outcome = service_with().resolve(FB_POST)
        assert outcome.reason is FailureReason.NOT_FOUND

    def test_idempotent(self, config):
        html = build_html({"og:video": "https://example/video.mp4", "og:title": "T"})
        network = FakeNetwork(json_responses={FB_API: ServerError(500, FB_API)}, pages={FB_POST: html})
        service = MediaService(network, config=config)
        first, second = service.resolve(FB_POST), service.resolve(FB_POST)
        assert first == second
        assert first.to_dict() == second.to_dict()

        failing = MediaService(FakeNetwork(), config=config)
        assert failing.resolve(FB_POST) == failing.resolve(FB_POST)

    def test_injected_logger_receives_outcome(self, config, caplog):
        logger = logging.getLogger("test.reelfetch")
        network = FakeNetwork(json_responses={FB_API: {"hd": "A"}})
        with caplog.at_level(logging.INFO, logger="test.reelfetch"):
            MediaService(network, config=config, logger=logger).resolve(FB_POST)
        assert any("facebook_api" in r.getMessage() for r in caplog.records)


def test_default_registry_chains(config):
    registry = build_default_registry(FakeNetwork(), config)
    assert [s.name for s in registry.chain_for(Platform.FACEBOOK)] == ["facebook_api", "meta_tags", "inline_script"]
    assert [s.name for s in registry.chain_for(Platform.INSTAGRAM)] == [
        "instagram_api", "meta_tags", "inline_script", "json_ld", "og_image",
    ]


def test_registry_rejects_unsupported_platform():
    from reelfetch.extractors.page.extractor import JsonLdStrategy

    with pytest.raises(ValueError):
        StrategyRegistry().register(JsonLdStrategy(FakeNetwork()), platforms=[Platform.FACEBOOK])

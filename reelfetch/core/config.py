import os
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/124.0.0.0 Safari/537.36"
)

FACEBOOK_API_URL = "https://api.fbdown.net/api/download"
INSTAGRAM_API_URL = "https://downloadigram.com/wp-json/aio-dl/video/"

MIN_TIMEOUT = 10.0
MAX_TIMEOUT = 30.0
DEFAULT_TIMEOUT = 20.0

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def clamp_timeout(value: float) -> float:
    """Keep network timeouts inside the supported 10-30s window."""
    return max(MIN_TIMEOUT, min(MAX_TIMEOUT, float(value)))


@dataclass
class ResolverConfig:
    """
    Caller-owned settings for the resolution pipeline.

    Nothing here is global: build one (directly or via load_config) and
    pass it to MediaService.
    """
    facebook_api_url: str = FACEBOOK_API_URL
    instagram_api_url: str = INSTAGRAM_API_URL
    request_timeout: float = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT
    loose_instagram: bool = False  # Match any instagram.com path, not only posts
    use_resolver_api: bool = True

    def __post_init__(self):
        self.request_timeout = clamp_timeout(self.request_timeout)


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    logger.warning("Ignoring %s=%r (expected a boolean)", name, raw)
    return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r (expected a number)", name, raw)
        return default


def load_config(env_file: Optional[Union[str, Path]] = None) -> ResolverConfig:
    """
    Build a ResolverConfig from the environment.

    Args:
        env_file: Optional .env file to load first. When omitted, python-dotenv
            searches for a .env file starting at the current directory.
            Variables already set in the process environment win.

    Returns:
        ResolverConfig: Settings with defaults for anything not set.
    """
    if env_file is not None:
        load_dotenv(dotenv_path=env_file)
    else:
        load_dotenv(find_dotenv(usecwd=True))

    return ResolverConfig(
        facebook_api_url=os.getenv("REELFETCH_FACEBOOK_API_URL") or FACEBOOK_API_URL,
        instagram_api_url=os.getenv("REELFETCH_INSTAGRAM_API_URL") or INSTAGRAM_API_URL,
        request_timeout=_env_float("REELFETCH_TIMEOUT", DEFAULT_TIMEOUT),
        user_agent=os.getenv("REELFETCH_USER_AGENT") or DEFAULT_USER_AGENT,
        loose_instagram=_env_bool("REELFETCH_LOOSE_INSTAGRAM", False),
        use_resolver_api=_env_bool("REELFETCH_USE_API", True),
    )

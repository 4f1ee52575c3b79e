# tds/classifier.py

import re
from typing import Optional, Tuple

from tds.schemas import Device, RequestContext

# Search engine and SEO crawlers - these always see the original site
SEARCH_BOT_SIGNATURES: Tuple[str, ...] = (
    # Yandex
    "yandexbot",
    "yandexmobilebot",
    "yandeximages",
    "yandexvideo",
    "yandexnews",
    "yandexwebmaster",
    # Google
    "googlebot",
    "google-structured-data-testing-tool",
    # Bing / MSN
    "bingbot",
    "msnbot",
    "bingpreview",
    # Others
    "duckduckbot",
    "baiduspider",
    "sogou",
    "exabot",
    "mj12bot",
    "semrushbot",
)

# Phone-only tokens, never present in tablet UAs
PHONE_PATTERN = re.compile(r"iphone|ipod|windows phone|iemobile|blackberry|opera mini", re.IGNORECASE)
MOBILE_WORD_PATTERN = re.compile(r"\bmobile\b", re.IGNORECASE)


def is_search_bot(user_agent: str) -> bool:
    """Substring match against the crawler whitelist, case-insensitive."""
    ua = (user_agent or "").lower()
    return any(signature in ua for signature in SEARCH_BOT_SIGNATURES)


def is_tablet_ua(user_agent: str) -> bool:
    ua = (user_agent or "").lower()
    if "ipad" in ua or "tablet" in ua:
        return True

    # Android tablets omit the "Mobile" token
    return "android" in ua and "mobile" not in ua


def is_mobile_ua(user_agent: str) -> bool:
    """
    Phone detection: iOS/Android/Windows phones, tablets excluded.
    """
    if not user_agent:
        return False
    ua = user_agent.lower()

    if PHONE_PATTERN.search(user_agent):
        return True

    # Android phones almost always carry "Mobile", tablets don't
    if "android" in ua:
        return "mobile" in ua

    # Generic marker (iOS Safari and friends)
    if MOBILE_WORD_PATTERN.search(user_agent):
        return True

    return False


def classify_device(user_agent: str) -> Device:
    """
    Resolve device tag. Tablet is checked first so an Android tablet
    is never reported as mobile.

    Returns one of: tablet, mobile, desktop
    """
    if is_tablet_ua(user_agent):
        return "tablet"
    if is_mobile_ua(user_agent):
        return "mobile"
    return "desktop"


def normalize_country(country: Optional[str]) -> str:
    return (country or "").strip().upper()


def build_context(pathname: str, user_agent: str, country: Optional[str]) -> RequestContext:
    """Classify a single request. Pure - nothing is cached between requests."""
    return RequestContext(
        pathname=pathname,
        country=normalize_country(country),
        device=classify_device(user_agent),
        is_bot=is_search_bot(user_agent),
    )

# tds/dispatcher.py

import logging
from urllib.parse import urlsplit

from tds.classifier import build_context
from tds.matching import find_rule
from tds.redirect import build_redirect_url, redirect_status
from tds.schemas import DispatchResult, FallbackConfig, RequestInfo, RouteConfig

logger = logging.getLogger(__name__)


def fallback_result(fallback: FallbackConfig) -> DispatchResult:
    """Locally synthesized answer for requests no rule wants"""
    response = fallback.response
    return DispatchResult(
        status=response.status,
        headers=dict(response.headers),
        body=response.body,
    )


def dispatch(request: RequestInfo, config: RouteConfig) -> DispatchResult:
    """
    One classification, one rule lookup, one URL build.
    Neither the request nor the config is modified.
    """
    pathname = urlsplit(request.url).path or "/"
    context = build_context(pathname, request.user_agent, request.country)

    rule = find_rule(config.rules, context)

    if rule is None:
        logger.debug(
            f"No rule for {pathname} (country={context.country or '-'}, "
            f"device={context.device}, bot={context.is_bot}) - fallback"
        )
        return fallback_result(config.fallback)

    location = build_redirect_url(rule, request.url)
    status = redirect_status(rule)

    logger.debug(f"Rule {rule.id or '-'} matched {pathname} -> {status} {location}")

    return DispatchResult(
        status=status,
        headers={"location": location},
        rule_id=rule.id,
        location=location,
    )

# tds/matching.py

import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Sequence

from tds.schemas import MatchRule, RequestContext, RouteRule

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PatternOutcome:
    """Result of compiling one regex source: either a pattern or an error"""
    source: str
    regex: Optional[re.Pattern] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.regex is not None

    def search(self, value: str) -> bool:
        # A pattern that failed to compile never matches
        return self.regex is not None and self.regex.search(value) is not None


@lru_cache(maxsize=512)
def compile_pattern(source: str) -> PatternOutcome:
    """Memoized per source string; the outcome never depends on the request."""
    try:
        return PatternOutcome(source=source, regex=re.compile(source))
    except re.error as e:
        logger.debug(f"Invalid path pattern {source!r}: {e}")
        return PatternOutcome(source=source, error=str(e))


def match_path_simple(pattern: str, pathname: str) -> bool:
    """
    '/prefix/*' matches by prefix, anything else must be equal.
    """
    if not pattern:
        return False
    if pattern.endswith("*"):
        return pathname.startswith(pattern[:-1])
    return pathname == pattern


def match_regexp_strings(patterns: Optional[Sequence[str]], pathname: str) -> bool:
    # No patterns - no constraint
    if not patterns:
        return True
    return any(compile_pattern(source).search(pathname) for source in patterns)


def match_rule(match: MatchRule, pathname: str, country: str, device: str, is_bot: bool) -> bool:
    """
    Evaluate one match predicate. Constraints are checked in a fixed order
    and the first failing one rejects the rule.
    """
    # 1) simple path templates
    if match.path and not any(match_path_simple(p, pathname) for p in match.path):
        return False

    # 2) regex sources
    if not match_regexp_strings(match.pattern, pathname):
        return False

    # 3) countries
    if match.countries and country not in match.countries:
        return False

    # 4) devices
    if match.devices and "any" not in match.devices and device not in match.devices:
        return False

    # 5) bots
    if match.bot is True and not is_bot:
        return False
    if match.bot is False and is_bot:
        return False

    return True


def find_rule(rules: Sequence[RouteRule], context: RequestContext) -> Optional[RouteRule]:
    """
    Return the first rule whose predicate holds, in declared order.
    A rule that fails while being evaluated is skipped.
    """
    for index, rule in enumerate(rules):
        try:
            matched = match_rule(
                rule.match,
                context.pathname,
                context.country,
                context.device,
                context.is_bot,
            )
        except Exception as e:
            logger.warning(f"Rule {rule.id or index} skipped, evaluation failed: {e}")
            continue

        if matched:
            return rule

    return None

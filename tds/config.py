# tds/config.py

import json
import logging
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from tds.schemas import MatchRule, RouteConfig

logger = logging.getLogger(__name__)


class RouteConfigError(Exception):
    """Routes document is unreadable or invalid"""


class Settings(BaseSettings):
    # Routes document, loaded once at startup
    routes_file: str = "config/routes.json"

    # Header the edge layer puts the requester country into (Cloudflare)
    country_header: str = "cf-ipcountry"

    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    model_config = SettingsConfigDict(env_file=".env", env_prefix="TDS_", extra="ignore")


def usable_rules(rules) -> list:
    """
    Drop rules whose match block has an unexpected shape. Such a rule can
    never match, the rest of the document still loads.
    """
    result = []
    for index, rule in enumerate(rules):
        match = rule.get("match") if isinstance(rule, dict) else None
        if match is not None:
            try:
                MatchRule.model_validate(match)
            except ValidationError as e:
                rule_id = rule.get("id") or index
                logger.warning(f"Rule {rule_id} skipped, malformed match: {e.error_count()} error(s)")
                continue
        result.append(rule)
    return result


def parse_routes(raw: Union[dict, list, None]) -> RouteConfig:
    """
    Validate an already decoded routes document.
    A bad target or status fails the whole document.
    """
    if raw is None:
        raw = {}
    if isinstance(raw, dict) and isinstance(raw.get("rules"), list):
        raw = {**raw, "rules": usable_rules(raw["rules"])}
    try:
        return RouteConfig.model_validate(raw)
    except ValidationError as e:
        raise RouteConfigError(f"Routes config validation failed: {e}") from e


def load_routes(path: Optional[Union[str, Path]] = None) -> RouteConfig:
    """
    Load and validate the routes document.
    Raises on a missing file, bad JSON or an invalid structure.
    """
    routes_path = Path(path or settings.routes_file)

    if not routes_path.exists():
        raise FileNotFoundError(f"Routes config not found: {routes_path}")

    try:
        raw = json.loads(routes_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise RouteConfigError(f"Routes config is not valid JSON: {e}") from e

    return parse_routes(raw)


settings = Settings()

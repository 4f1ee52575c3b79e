# tds/schemas.py

from dataclasses import dataclass, field
from typing import Dict, Literal, Optional, Tuple, Union
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field, StrictBool, field_validator, model_validator

Device = Literal["mobile", "tablet", "desktop", "any"]

# Tagged scalar union for extraParams values; StrictBool first so JSON true/false
# never collapses into 1/0.
ParamValue = Union[StrictBool, int, float, str]

RESERVED_PREFIX = "__"
PATH_TO_PARAM_KEY = "__pathToParam"
STRIP_PREFIX_KEY = "__stripPrefix"


class _ConfigModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class MatchRule(_ConfigModel):
    """Conjunction of path, pattern, country, device and bot constraints"""

    path: Tuple[str, ...] = ()  # '/casino/*', '/go/exact'
    pattern: Tuple[str, ...] = ()  # regex sources, no /flags/
    countries: Tuple[str, ...] = ()  # ISO-3166-1 alpha-2
    devices: Tuple[Device, ...] = ()
    bot: Optional[bool] = None  # True = bots only, False = no bots, None = don't care

    @field_validator("path", "pattern", "countries", "devices", mode="before")
    @classmethod
    def none_as_empty(cls, value):
        return [] if value is None else value

    @field_validator("countries")
    @classmethod
    def uppercase_countries(cls, value: Tuple[str, ...]) -> Tuple[str, ...]:
        return tuple(country.upper() for country in value)


class PathToParam(_ConfigModel):
    """Move the first path segment (after stripPrefix) into a query parameter"""

    param_name: str = Field(alias="paramName")
    strip_prefix: str = Field(default="", alias="stripPrefix")


class RouteRule(_ConfigModel):
    id: Optional[str] = None
    match: MatchRule = Field(default_factory=MatchRule)
    target: str  # e.g. 'https://2win.click/tds/go.cgi?4'
    status: int = 302
    forward_query: bool = Field(default=False, alias="forwardQuery")
    append_path: bool = Field(default=False, alias="appendPath")
    extra_params: Dict[str, ParamValue] = Field(default_factory=dict, alias="extraParams")
    tracking_param: Optional[str] = Field(default=None, alias="trackingParam")
    tracking_value: Optional[str] = Field(default=None, alias="trackingValue")
    path_to_param: Optional[PathToParam] = Field(default=None, alias="pathToParam")

    @field_validator("match", "extra_params", mode="before")
    @classmethod
    def none_as_default(cls, value):
        return {} if value is None else value

    @field_validator("target")
    @classmethod
    def absolute_target(cls, value: str) -> str:
        parts = urlsplit(value)
        if not parts.scheme or not parts.netloc:
            raise ValueError(f"target must be an absolute URL: {value!r}")
        return value

    @field_validator("status")
    @classmethod
    def redirect_status(cls, value: int) -> int:
        if not 300 <= value <= 399:
            raise ValueError(f"status must be a redirect status (3xx), got {value}")
        return value

    @model_validator(mode="before")
    @classmethod
    def lift_reserved_params(cls, data):
        """Accept the legacy __pathToParam/__stripPrefix keys inside extraParams"""
        if not isinstance(data, dict) or data.get("pathToParam") or data.get("path_to_param"):
            return data

        extra = data.get("extraParams", data.get("extra_params")) or {}
        if not isinstance(extra, dict):
            return data

        param_name = extra.get(PATH_TO_PARAM_KEY)
        if not param_name:
            return data

        return {
            **data,
            "pathToParam": {
                "paramName": str(param_name),
                "stripPrefix": str(extra.get(STRIP_PREFIX_KEY) or ""),
            },
        }

    @property
    def query_params(self) -> Dict[str, ParamValue]:
        """extraParams without the reserved service keys"""
        return {
            key: value
            for key, value in self.extra_params.items()
            if not key.startswith(RESERVED_PREFIX)
        }


class FallbackResponse(_ConfigModel):
    status: int = 204
    headers: Dict[str, str] = Field(default_factory=dict)
    body: str = ""


class FallbackConfig(_ConfigModel):
    response: FallbackResponse = Field(default_factory=FallbackResponse)

    @field_validator("response", mode="before")
    @classmethod
    def none_as_default(cls, value):
        return {} if value is None else value


class RouteConfig(_ConfigModel):
    """Whole routes document. Built once at startup and shared read-only."""

    rules: Tuple[RouteRule, ...] = ()
    fallback: FallbackConfig = Field(default_factory=FallbackConfig)

    @field_validator("rules", "fallback", mode="before")
    @classmethod
    def none_as_default(cls, value, info):
        if value is None:
            return [] if info.field_name == "rules" else {}
        return value


@dataclass(frozen=True)
class RequestInfo:
    """What the dispatcher needs from an inbound HTTP request"""
    url: str
    user_agent: str = ""
    country: Optional[str] = None


@dataclass(frozen=True)
class RequestContext:
    """Per-request classification result"""
    pathname: str
    country: str
    device: Device
    is_bot: bool


@dataclass(frozen=True)
class DispatchResult:
    status: int
    headers: Dict[str, str] = field(default_factory=dict)
    body: str = ""
    rule_id: Optional[str] = None
    location: Optional[str] = None

    @property
    def is_redirect(self) -> bool:
        return self.location is not None

# tds/redirect.py

from typing import Iterator, List, Optional, Tuple
from urllib.parse import quote_plus, unquote_plus, urlsplit, urlunsplit

from tds.schemas import ParamValue, PathToParam, RouteRule

DEFAULT_REDIRECT_STATUS = 302


class QueryString:
    """
    Ordered query parameters with `set` (replace, never append) semantics.

    Bare keys such as the `4` in `go.cgi?4` keep their shape on output.
    """

    def __init__(self, pairs: Optional[List[Tuple[str, Optional[str]]]] = None):
        self._pairs: List[Tuple[str, Optional[str]]] = list(pairs or [])

    @classmethod
    def parse(cls, query: str) -> "QueryString":
        pairs = []
        for part in query.split("&"):
            if not part:
                continue
            if "=" in part:
                key, value = part.split("=", 1)
                pairs.append((unquote_plus(key), unquote_plus(value)))
            else:
                pairs.append((unquote_plus(part), None))
        return cls(pairs)

    def set(self, key: str, value: Optional[str]) -> None:
        """Replace the first `key` and drop any later duplicates, or append."""
        result = []
        replaced = False
        for existing_key, existing_value in self._pairs:
            if existing_key != key:
                result.append((existing_key, existing_value))
            elif not replaced:
                result.append((key, value))
                replaced = True
        if not replaced:
            result.append((key, value))
        self._pairs = result

    def get(self, key: str) -> Optional[str]:
        for existing_key, value in self._pairs:
            if existing_key == key:
                return value
        return None

    def __iter__(self) -> Iterator[Tuple[str, Optional[str]]]:
        return iter(list(self._pairs))

    def __len__(self) -> int:
        return len(self._pairs)

    def __str__(self) -> str:
        parts = []
        for key, value in self._pairs:
            if value is None:
                parts.append(quote_plus(key, safe="*"))
            else:
                parts.append(f"{quote_plus(key, safe='*')}={quote_plus(value, safe='*')}")
        return "&".join(parts)


def format_param_value(value: ParamValue) -> str:
    """String form of an extraParams value, as it appears in the query."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def join_path(base_path: str, extra_path: str) -> str:
    """Join with exactly one slash between the two parts."""
    if not extra_path:
        return base_path
    return f"{base_path.rstrip('/')}/{extra_path.lstrip('/')}"


def first_path_segment(pathname: str, strip_prefix: str = "") -> Optional[str]:
    """
    '/casino/888starz/x' with strip_prefix '/casino/' -> '888starz'
    """
    path = pathname or "/"
    if strip_prefix and path.startswith(strip_prefix):
        path = path[len(strip_prefix):]
    segments = [segment for segment in path.split("/") if segment]
    return segments[0] if segments else None


def apply_path_to_param(query: QueryString, pathname: str, options: Optional[PathToParam]) -> None:
    if options is None or not options.param_name:
        return
    segment = first_path_segment(pathname, options.strip_prefix)
    if segment:
        query.set(options.param_name, segment)


def build_redirect_url(rule: RouteRule, request_url: str) -> str:
    """
    Compose the destination URL for a matched rule.

    Steps run in a fixed order and later steps overwrite earlier ones
    on the same key: appendPath, forwardQuery, extraParams, pathToParam,
    tracking parameter.
    """
    target = urlsplit(rule.target)
    source = urlsplit(request_url)
    source_path = source.path or "/"

    path = target.path or "/"
    query = QueryString.parse(target.query)

    # 1) original path glued onto the target path
    if rule.append_path:
        path = join_path(path, source_path)

    # 2) original query parameters
    if rule.forward_query:
        for key, value in QueryString.parse(source.query):
            query.set(key, value)

    # 3) extra params, service keys excluded
    for key, value in rule.query_params.items():
        query.set(key, format_param_value(value))

    # 4) first path segment moved into a parameter (?bonus=SEGMENT)
    apply_path_to_param(query, source_path, rule.path_to_param)

    # 5) tracking goes last so nothing above can overwrite it
    if rule.tracking_param and rule.tracking_value:
        query.set(rule.tracking_param, rule.tracking_value)

    return urlunsplit((target.scheme, target.netloc, path, str(query), target.fragment))


def redirect_status(rule: RouteRule) -> int:
    return rule.status or DEFAULT_REDIRECT_STATUS

# tds/routes.py

from urllib.parse import quote

from fastapi import APIRouter, Request, Response
from fastapi.responses import RedirectResponse

from tds.config import settings
from tds.dispatcher import dispatch
from tds.schemas import DispatchResult, RequestInfo, RouteConfig

router = APIRouter()

METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def raw_request_url(request: Request) -> str:
    """
    Request URL with the path exactly as the client sent it.

    scope["path"] is already percent-decoded, so an encoded '?', '#' or '/'
    would change the pathname and query once the URL is split again.
    """
    raw_path = request.scope.get("raw_path")
    if raw_path:
        path = raw_path.split(b"?", 1)[0].decode("latin-1")
    else:
        path = quote(request.scope.get("path") or "/")

    url = f"{request.url.scheme}://{request.url.netloc}{path}"
    query = request.scope.get("query_string", b"").decode("latin-1")
    return f"{url}?{query}" if query else url


def request_info(request: Request) -> RequestInfo:
    return RequestInfo(
        url=raw_request_url(request),
        user_agent=request.headers.get("user-agent", ""),
        country=request.headers.get(settings.country_header),
    )


def to_response(result: DispatchResult) -> Response:
    if result.is_redirect:
        return RedirectResponse(result.location, status_code=result.status)
    return Response(content=result.body, status_code=result.status, headers=result.headers)


@router.api_route("/{path:path}", methods=METHODS, include_in_schema=False)
async def route_request(request: Request) -> Response:
    """
    Every inbound request, whatever the method or path, goes through
    the dispatcher: redirect on a matching rule, fallback otherwise.
    """
    config: RouteConfig = request.app.state.routes
    return to_response(dispatch(request_info(request), config))

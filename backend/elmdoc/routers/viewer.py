from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import Response

from ..config import ViewerConfig
from ..schemas import NOT_FOUND_BODY, RouteKind
from ..services.assets import read_asset
from ..services.docs import DocsNotFound, load_docs_file
from ..services.index import build_index
from ..services.resolver import classify_path

router = APIRouter()

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def _config(request: Request) -> ViewerConfig:
    return request.app.state.config


def raw_pathname(request: Request) -> str:
    """Path as sent on the wire: still percent-encoded, query dropped."""
    raw = request.scope.get("raw_path")
    if raw is None:
        return request.url.path
    return raw.split(b"?", 1)[0].decode("latin-1")


def _reply(content, media_type: str, status_code: int = 200) -> Response:
    # Exact content-type, no charset appended
    return Response(content=content, status_code=status_code, headers={"content-type": media_type})


@router.api_route("/{full_path:path}", methods=ALL_METHODS, include_in_schema=False)
async def dispatch(request: Request, full_path: str) -> Response:
    config = _config(request)
    path = raw_pathname(request)
    kind = classify_path(path)

    if kind is RouteKind.DOCS:
        try:
            docs_file = await load_docs_file(config, path)
        except DocsNotFound:
            return _reply(NOT_FOUND_BODY, "text/plain", status_code=404)
        return _reply(docs_file.content, docs_file.media_type)

    if kind in (RouteKind.SCRIPT, RouteKind.STYLESHEET):
        content, media_type = read_asset(config, kind)
        return _reply(content, media_type)

    return _reply(build_index(config), "text/html")

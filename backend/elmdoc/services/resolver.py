from __future__ import annotations

import os
from pathlib import Path
from typing import List

from ..schemas import DOCS_PREFIX, SCRIPT_PATH, STYLESHEET_PATH, DocsRequest, RouteKind


DOCS_SEGMENT_COUNT = 6


class InvalidDocsPath(ValueError):
    """Raised when a docs path does not have the author/package/version/file shape."""

    def __init__(self, path: str, segments: List[str]) -> None:
        super().__init__(f"Invalid number of segments in {path!r}: {segments!r}")
        self.path = path
        self.segments = segments


class PathOutsideRoot(ValueError):
    """Raised when a docs request would resolve outside the package cache."""


def classify_path(path: str) -> RouteKind:
    """Pick the handler for a request path. Method and query string play no part."""
    if path.startswith(DOCS_PREFIX):
        return RouteKind.DOCS
    if path == SCRIPT_PATH:
        return RouteKind.SCRIPT
    if path == STYLESHEET_PATH:
        return RouteKind.STYLESHEET
    return RouteKind.INDEX


def parse_docs_path(path: str) -> DocsRequest:
    segments = path.split("/")
    if len(segments) != DOCS_SEGMENT_COUNT:
        raise InvalidDocsPath(path, segments)
    _, _, author, package, version, file = segments
    return DocsRequest(author=author, package=package, version=version, file=file)


def resolve_docs_file(root: Path, request: DocsRequest, *, strict: bool = True) -> Path:
    """Join the request onto the cache root.

    With ``strict`` the normalized result must stay under ``root``; otherwise
    the segments are joined as-is, ``..`` included.
    """

    target = Path(os.path.join(root, request.author, request.package, request.version, request.file))
    if not strict:
        return target
    base = Path(os.path.abspath(root))
    normalized = Path(os.path.abspath(target))
    if normalized != base and base not in normalized.parents:
        raise PathOutsideRoot(f"{target} escapes {base}")
    return normalized

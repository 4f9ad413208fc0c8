from __future__ import annotations

from pathlib import Path
from typing import Tuple

from ..config import ViewerConfig
from ..schemas import RouteKind

ASSET_MEDIA_TYPES = {
    RouteKind.SCRIPT: "text/javascript",
    RouteKind.STYLESHEET: "text/css",
}


def asset_path(config: ViewerConfig, kind: RouteKind) -> Path:
    if kind is RouteKind.SCRIPT:
        return config.script_path
    if kind is RouteKind.STYLESHEET:
        return config.stylesheet_path
    raise ValueError(f"{kind} is not a bundled asset")


def read_asset(config: ViewerConfig, kind: RouteKind) -> Tuple[bytes, str]:
    """Read a bundled asset from disk. Not cached; a missing file raises."""
    return asset_path(config, kind).read_bytes(), ASSET_MEDIA_TYPES[kind]

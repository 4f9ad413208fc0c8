from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from ..config import ViewerConfig

LOGGER = logging.getLogger(__name__)

INDEX_TEMPLATE = """<html>
<head><link rel="stylesheet" href="/style.css"></head>
<body>
  <script src="/elm.js"></script>
  <script>Elm.Main.init({{flags: {flags}}});</script>
</body>
</html>"""


class ManifestError(RuntimeError):
    """Raised when the project manifest is missing or is not valid JSON."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Cannot use manifest {path}: {reason}")
        self.path = path
        self.reason = reason


def load_manifest(path: Path) -> Any:
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise ManifestError(path, exc.strerror or str(exc)) from exc
    try:
        return json.loads(raw)
    except ValueError as exc:
        raise ManifestError(path, f"invalid JSON ({exc})") from exc


def compact_json(document: Any) -> str:
    return json.dumps(document, separators=(",", ":"), ensure_ascii=False)


def render_index(document: Any) -> str:
    return INDEX_TEMPLATE.format(flags=compact_json(document))


def build_index(config: ViewerConfig) -> str:
    """Render the SPA shell from the manifest as it is on disk right now."""
    return render_index(load_manifest(config.manifest_path))

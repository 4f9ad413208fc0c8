from __future__ import annotations

import logging
from dataclasses import dataclass

import aiofiles

from ..config import ViewerConfig
from ..schemas import DocsRequest
from .resolver import InvalidDocsPath, PathOutsideRoot, parse_docs_path, resolve_docs_file

LOGGER = logging.getLogger(__name__)


class DocsNotFound(LookupError):
    """Raised when a docs request cannot be answered with file contents."""


@dataclass
class DocsFile:
    request: DocsRequest
    content: bytes

    @property
    def media_type(self) -> str:
        return self.request.media_type


async def load_docs_file(config: ViewerConfig, path: str) -> DocsFile:
    """Read the cached docs file named by ``path``.

    Every failure (bad shape, escape from the cache root, unreadable file)
    is logged and collapsed into :class:`DocsNotFound`.
    """

    try:
        request = parse_docs_path(path)
    except InvalidDocsPath as exc:
        LOGGER.error("[docs] %s", exc)
        raise DocsNotFound(path) from exc

    try:
        target = resolve_docs_file(config.packages_root, request, strict=config.strict_paths)
    except PathOutsideRoot as exc:
        LOGGER.error("[docs] refusing %s: %s", path, exc)
        raise DocsNotFound(path) from exc

    try:
        async with aiofiles.open(target, "rb") as handle:
            content = await handle.read()
    except (OSError, ValueError) as exc:
        LOGGER.error("[docs] %s", exc)
        raise DocsNotFound(path) from exc

    LOGGER.debug("[docs] served %s (%d bytes)", target, len(content))
    return DocsFile(request=request, content=content)

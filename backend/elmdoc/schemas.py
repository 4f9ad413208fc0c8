from __future__ import annotations

from enum import Enum

from pydantic import BaseModel

DOCS_PREFIX = "/~docs/"
SCRIPT_PATH = "/elm.js"
STYLESHEET_PATH = "/style.css"
NOT_FOUND_BODY = "Resource not found"


class RouteKind(str, Enum):
    DOCS = "docs"
    SCRIPT = "script"
    STYLESHEET = "stylesheet"
    INDEX = "index"


class DocsRequest(BaseModel):
    author: str
    package: str
    version: str
    file: str

    @property
    def media_type(self) -> str:
        if self.file.endswith(".json"):
            return "application/json"
        return "text/plain"

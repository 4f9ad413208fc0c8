from __future__ import annotations

from dataclasses import dataclass, replace
from functools import lru_cache
from pathlib import Path
from typing import Dict, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DIR = Path(__file__).resolve().parent
STATIC_DIR = PACKAGE_DIR / "static"
DEFAULT_PORT = 4040


@dataclass(frozen=True)
class ServerVariant:
    """Cache layout and CLI surface of one released revision of the viewer."""

    schema_version: str
    packages_segment: str
    supports_port_flag: bool
    supports_auto_open: bool


VARIANTS: Dict[str, ServerVariant] = {
    "0.19.1": ServerVariant("0.19.1", "packages", supports_port_flag=True, supports_auto_open=True),
    "0.19.0": ServerVariant("0.19.0", "package", supports_port_flag=False, supports_auto_open=False),
}
DEFAULT_VARIANT = "0.19.1"


class ConfigError(ValueError):
    """Raised when settings cannot be turned into a usable configuration."""


class Settings(BaseSettings):
    """Environment-driven runtime configuration."""

    elm_home: Optional[str] = Field(default=None, alias="ELM_HOME")
    port: int = Field(default=DEFAULT_PORT, alias="ELM_DOC_PORT")
    host: str = Field(default="127.0.0.1", alias="ELM_DOC_HOST")
    variant: str = Field(default=DEFAULT_VARIANT, alias="ELM_DOC_VARIANT")
    manifest_name: str = Field(default="elm.json", alias="ELM_DOC_MANIFEST")
    strict_paths: bool = Field(default=True, alias="ELM_DOC_STRICT_PATHS")
    log_level: str = Field(default="INFO", alias="ELM_DOC_LOG_LEVEL")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", case_sensitive=False)

    @property
    def resolved_elm_home(self) -> Path:
        if self.elm_home:
            return Path(self.elm_home)
        return Path.home() / ".elm"


@lru_cache
def get_settings() -> Settings:
    return Settings()


@dataclass(frozen=True)
class ViewerConfig:
    """Everything the request handlers need, computed once at startup."""

    variant: ServerVariant
    elm_home: Path
    manifest_path: Path
    static_dir: Path = STATIC_DIR
    host: str = "127.0.0.1"
    port: int = DEFAULT_PORT
    open_browser: bool = True
    strict_paths: bool = True

    @property
    def packages_root(self) -> Path:
        return self.elm_home / self.variant.schema_version / self.variant.packages_segment

    @property
    def script_path(self) -> Path:
        return self.static_dir / "elm.js"

    @property
    def stylesheet_path(self) -> Path:
        return self.static_dir / "style.css"

    @property
    def url(self) -> str:
        return f"http://localhost:{self.port}"

    def with_overrides(self, **changes) -> "ViewerConfig":
        return replace(self, **changes)


def resolve_variant(name: str) -> ServerVariant:
    try:
        return VARIANTS[name]
    except KeyError:
        known = ", ".join(sorted(VARIANTS))
        raise ConfigError(f"unknown variant {name!r} (expected one of: {known})") from None


def build_config(settings: Settings | None = None, *, cwd: Path | None = None, **overrides) -> ViewerConfig:
    """Freeze settings into a :class:`ViewerConfig`.

    The manifest path is anchored to ``cwd`` (the process working directory
    by default) here, so later ``chdir`` calls do not move it.
    """

    settings = settings or get_settings()
    variant = overrides.pop("variant", None) or resolve_variant(settings.variant)
    base = Path(cwd) if cwd is not None else Path.cwd()
    config = ViewerConfig(
        variant=variant,
        elm_home=settings.resolved_elm_home,
        manifest_path=(base / settings.manifest_name).resolve(),
        host=settings.host,
        port=settings.port,
        open_browser=variant.supports_auto_open,
        strict_paths=settings.strict_paths,
    )
    if overrides:
        config = config.with_overrides(**overrides)
    return config

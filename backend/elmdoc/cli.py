from __future__ import annotations

import argparse
import errno
import logging
import socket
import sys
import webbrowser
from typing import List, Optional

import uvicorn

from .config import VARIANTS, ConfigError, ServerVariant, Settings, ViewerConfig, build_config, get_settings, resolve_variant
from .main import configure_logging, create_app
from .services.index import ManifestError, load_manifest

LOGGER = logging.getLogger(__name__)


class PortInUseError(OSError):
    """Raised when the listening port is already bound by another process."""


def _variant_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument(
        "--variant",
        choices=sorted(VARIANTS),
        default=settings.variant,
        help="package cache layout to read docs from (default: %(default)s)",
    )
    return parser


def build_parser(variant: ServerVariant, settings: Settings) -> argparse.ArgumentParser:
    """Full CLI parser; flags the variant does not support are left out."""
    epilog = ["examples:", "  elm-doc              Listen on port %d" % settings.port]
    parser = argparse.ArgumentParser(
        prog="elm-doc",
        description="Browse the documentation of the packages in your local Elm cache.",
        parents=[_variant_parser(settings)],
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    if variant.supports_port_flag:
        parser.add_argument("--port", type=int, default=settings.port, help="port to listen on (default: %(default)s)")
        epilog.append("  elm-doc --port=4343  Listen on port 4343")
    if variant.supports_auto_open:
        parser.add_argument("--closed", action="store_true", help="do not open a browser tab")
        epilog[1] += " and open a browser"
        epilog.append("  elm-doc --closed     Prevent the browser from being opened")
    parser.epilog = "\n".join(epilog)
    return parser


def port_in_use_message(config: ViewerConfig) -> str:
    if config.variant.supports_port_flag:
        return "That port is already in use. Please choose a different port using `--port`"
    return "That port is already in use. Please choose a different port using ELM_DOC_PORT"


def bind_socket(host: str, port: int) -> socket.socket:
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    if sys.platform.startswith("linux"):
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    try:
        sock.bind((host, port))
    except OSError as exc:
        sock.close()
        if exc.errno == errno.EADDRINUSE:
            raise PortInUseError(exc.errno, exc.strerror) from exc
        raise
    sock.listen(128)
    return sock


def main(argv: Optional[List[str]] = None) -> int:
    settings = get_settings()
    configure_logging(settings.log_level)

    known, _ = _variant_parser(settings).parse_known_args(argv)
    try:
        variant = resolve_variant(known.variant)
    except ConfigError as exc:
        print(exc, file=sys.stderr)
        return 1
    args = build_parser(variant, settings).parse_args(argv)

    overrides = {"variant": variant, "open_browser": variant.supports_auto_open and not getattr(args, "closed", False)}
    if variant.supports_port_flag:
        overrides["port"] = args.port
    config = build_config(settings, **overrides)

    try:
        load_manifest(config.manifest_path)
    except ManifestError as exc:
        print(exc, file=sys.stderr)
        return 1

    try:
        sock = bind_socket(config.host, config.port)
    except PortInUseError:
        print(port_in_use_message(config), file=sys.stderr)
        return 1

    LOGGER.info("[cli] Listening on port %d", config.port)
    if config.open_browser:
        webbrowser.open(config.url)

    server = uvicorn.Server(uvicorn.Config(create_app(config), log_level=settings.log_level.lower()))
    try:
        server.run(sockets=[sock])
    finally:
        sock.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""Launch the chat client API under Uvicorn."""

import argparse
import logging

import uvicorn

from .config import get_settings

APP_IMPORT_PATH = "mcp_client.app:app"


def _build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="MCP chat client API server")
    parser.add_argument(
        "--host",
        default=settings.server_host,
        help=f"Interface to listen on (default: {settings.server_host})",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=settings.server_port,
        help=f"Port to listen on (default: {settings.server_port})",
    )
    parser.add_argument("--reload", action="store_true", help="Restart on source changes")
    return parser


def _quiet_server_logs() -> None:
    # Chat turns are logged by the app itself; per-request access lines add nothing
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("uvicorn").setLevel(logging.INFO)
    # File watcher chatter during --reload
    logging.getLogger("watchfiles.main").setLevel(logging.WARNING)


def main() -> None:
    args = _build_parser().parse_args()
    _quiet_server_logs()

    # Import string works for both modes; --reload requires it
    uvicorn.run(
        APP_IMPORT_PATH,
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level="info",
        access_log=False,
    )


if __name__ == "__main__":  # pragma: no cover - CLI invocation guard
    main()

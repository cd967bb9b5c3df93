from __future__ import annotations

import logging
import os

logger = logging.getLogger("mcp_client")

_QUIET_LOGGERS = ("httpx", "httpcore")


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once; ``MCP_CLIENT_LOG_LEVEL`` overrides the INFO default."""
    if logging.getLogger().handlers:
        return

    resolved = (level or os.getenv("MCP_CLIENT_LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, resolved, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

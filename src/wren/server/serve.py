"""Serve a wren App with pounce.

Pounce's ``run()`` takes an import string, but wren has a live ``App``
object, so ``pounce.Server`` is used directly with the ASGI callable.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from wren.app import App

logger = logging.getLogger("wren.server")


def run_server(
    app: App,
    host: str,
    port: int,
    *,
    reload: bool = False,
    log_level: str = "info",
) -> None:
    """Start a single-worker pounce server bound to *host*:*port*.

    Blocks until the server stops. Bind failures propagate as ``OSError``.

    Args:
        app: ASGI callable (wren App instance).
        host: Bind host address.
        port: Bind port number.
        reload: Enable auto-reload on file changes.
        log_level: Server log level name.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = ServerConfig(
        host=host,
        port=port,
        workers=1,
        reload=reload,
        log_level=log_level,
    )
    logger.info("Listening on http://%s:%d", host, port)
    Server(config, app).run()

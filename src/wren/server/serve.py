"""Serve a wren App with pounce.

Pounce's ``run()`` takes an import string, but callers usually hold a live
``App``. We use ``pounce.Server`` directly with the ASGI callable and pass
the import string along only so reload can re-import it.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from wren.app import App

logger = logging.getLogger("wren.server")


def configure_logging(level: str) -> None:
    """Route ``wren.*`` loggers to stderr at *level* (e.g. ``"info"``)."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def run_server(
    app: App,
    host: str,
    port: int,
    *,
    workers: int = 1,
    reload: bool = False,
    log_level: str = "info",
    app_path: str | None = None,
) -> None:
    """Start a pounce server for *app* and block until it stops.

    Args:
        app: The wren App (an ASGI callable).
        host: Bind host address.
        port: Bind port number.
        workers: Worker count; forced to 1 when *reload* is on.
        reload: Restart on file changes (development).
        log_level: Level for both pounce and the ``wren`` loggers.
        app_path: Optional ``"module:attribute"`` import string used by
            pounce to re-import the app on reload.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    configure_logging(log_level)

    config = ServerConfig(
        host=host,
        port=port,
        workers=1 if reload else workers,
        reload=reload,
        log_level=log_level,
    )
    logger.info("Serving %d route(s) on http://%s:%d", len(app.routes), host, port)
    server = Server(config, app, app_path=app_path)
    server.run()

#!/usr/bin/env python3
"""
Main entrypoint for the event browser web server.
"""
import logging

from .config import Config
from .logging_config import setup_logging
from .web import AppContext, create_app, find_free_port

logger = logging.getLogger(__name__)


def main() -> None:
    """Build the application once and serve it."""
    config = Config()
    setup_logging(config.log_level)

    ctx = AppContext.from_config(config)
    # Ensure DB schema exists before serving requests
    ctx.database.ensure_schema()

    app = create_app(ctx)
    port = find_free_port(config.host, config.port)
    logger.info("Server starting on http://%s:%d", config.host, port)
    app.run(host=config.host, port=port, debug=config.debug, use_reloader=False)


if __name__ == "__main__":
    main()

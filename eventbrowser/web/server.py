"""
Flask server for the event browser.
"""
import logging
import socket

from flask import Flask

from .context import AppContext
from .routes import register_routes

logger = logging.getLogger(__name__)


def find_free_port(host: str = "127.0.0.1", preferred: int = 8080) -> int:
    """Try preferred port, fall back if unavailable."""
    for port in (preferred, 8080, 5050, 5000):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            try:
                s.bind((host, port))
                return port
            except OSError:
                logger.debug("Port %d busy", port)
                continue
    raise RuntimeError(f"No free port found ({preferred}/8080/5050/5000 busy)")


def create_app(ctx: AppContext) -> Flask:
    """
    Create the Flask app.

    Args:
        ctx: Collaborators built once at startup and shared by all requests
    """
    app = Flask(__name__)
    register_routes(app, ctx)
    return app

"""
Routes for the event table page and its fragment.
"""
import logging
from typing import Any

from flask import Flask, Response, request

from ..errors import DataAccessError, RenderingError
from .context import AppContext

logger = logging.getLogger(__name__)

FAILURE_BODY = "Failed to load events"


def register_routes(app: Flask, ctx: AppContext) -> None:
    """Register the page and fragment routes with the Flask app."""

    @app.route("/")
    def index() -> Any: # pyright: ignore[reportUnusedFunction]
        """Serve the full page; the table loads itself from /events."""
        try:
            return Response(ctx.renderer.render_index(), mimetype='text/html')
        except RenderingError:
            logger.exception("Failed to render index page")
            return Response(FAILURE_BODY, status=500, mimetype='text/plain')

    @app.route("/events", methods=['GET', 'POST'])
    def events() -> Any: # pyright: ignore[reportUnusedFunction]
        """Serve the table fragment for the requested page, columns and filters."""
        params = request.values
        try:
            result = ctx.browse_service.browse(params)
            html = ctx.renderer.render(
                result.request.columns,
                result.events,
                result.paging,
                result.request.filters,
            )
        except DataAccessError:
            logger.exception("Event store failure")
            return Response(FAILURE_BODY, status=500, mimetype='text/plain')
        except RenderingError:
            logger.exception("Failed to render events fragment")
            return Response(FAILURE_BODY, status=500, mimetype='text/plain')
        return Response(html, mimetype='text/html')

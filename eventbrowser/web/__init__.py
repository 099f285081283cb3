"""Web interface."""
from .context import AppContext
from .rendering import FragmentRenderer
from .server import create_app, find_free_port

__all__ = ['AppContext', 'FragmentRenderer', 'create_app', 'find_free_port']

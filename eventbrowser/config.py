import os
import json
import logging
from typing import Any, Dict

logger = logging.getLogger(__name__)

DB_PATH: str = os.path.expanduser(os.environ.get("EVENTBROWSER_DB", "./events.db"))
HOST: str = os.environ.get("EVENTBROWSER_HOST", "127.0.0.1")
PORT: int = int(os.environ.get("EVENTBROWSER_PORT", "8080"))
LOG_LEVEL: str = os.environ.get("EVENTBROWSER_LOG_LEVEL", "INFO")

# Fixed number of rows per page; offsets depend on it, so it is not user-configurable
EVENTS_PER_PAGE: int = 50

# Seconds sqlite3 waits on a locked database before failing the query
DB_TIMEOUT: float = 5.0

# User configuration file path
USER_CONFIG_PATH: str = os.path.expanduser(
    os.environ.get("EVENTBROWSER_CONFIG", "~/.config/eventbrowser/settings.json")
)

# Debug mode - Flask debug pages and verbose logging
DEBUG_MODE: bool = os.environ.get("EVENTBROWSER_DEBUG", "0") == "1"


# --- Dynamic Configuration Class ---

class Config:
    """
    Runtime settings for the web server.

    Values come from the optional JSON settings file and fall back to the
    module-level defaults (which already honour environment overrides).
    """

    def __init__(self, config_path: str = USER_CONFIG_PATH):
        self.config_path = config_path
        self._user_config: Dict[str, Any] = {}

        self.db_path: str = DB_PATH
        self.host: str = HOST
        self.port: int = PORT
        self.log_level: str = LOG_LEVEL
        self.debug: bool = DEBUG_MODE
        self.events_per_page: int = EVENTS_PER_PAGE

        self.reload()

    def _load_user_config(self) -> Dict[str, Any]:
        """Load user configuration from file."""
        if os.path.exists(self.config_path):
            try:
                with open(self.config_path, 'r') as f:
                    data = json.load(f)
            except (json.JSONDecodeError, IOError) as e:
                logger.warning("Ignoring unreadable config file %s: %s", self.config_path, e)
                return {}
            if isinstance(data, dict):
                return data
            logger.warning("Ignoring config file %s: expected a JSON object", self.config_path)
        return {}

    def reload(self) -> None:
        """Reload configuration from disk, updating this object's attributes."""
        self._user_config = self._load_user_config()

        self.db_path = os.path.expanduser(self._user_config.get('db_path', DB_PATH))
        self.host = self._user_config.get('host', HOST)
        self.port = int(self._user_config.get('port', PORT))
        self.log_level = str(self._user_config.get('log_level', LOG_LEVEL)).upper()
        self.debug = bool(self._user_config.get('debug', DEBUG_MODE))

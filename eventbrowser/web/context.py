"""Application context built once at startup and handed to the routes."""
from dataclasses import dataclass
from typing import Optional

from ..config import Config
from ..db import Database, EventRepository
from ..services import BrowseService
from .rendering import FragmentRenderer


@dataclass
class AppContext:
    """Collaborators shared by every request; none of them hold request state."""
    database: Database
    repository: EventRepository
    browse_service: BrowseService
    renderer: FragmentRenderer

    @classmethod
    def from_config(cls, config: Config,
                    renderer: Optional[FragmentRenderer] = None) -> 'AppContext':
        database = Database(config.db_path)
        repository = EventRepository(database)
        return cls(
            database=database,
            repository=repository,
            browse_service=BrowseService(repository, config.events_per_page),
            renderer=renderer or FragmentRenderer(),
        )

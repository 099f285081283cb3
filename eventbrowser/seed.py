#!/usr/bin/env python3
"""
Fill the event store with random events for local browsing.
"""
import argparse
import datetime
import logging
import random
import sys
from typing import List, Optional

from .config import Config
from .db import Database, EventRepository
from .errors import DataAccessError
from .logging_config import setup_logging
from .models import Event

logger = logging.getLogger(__name__)

SEVERITIES = ("Low", "Medium", "High")
# Generated events fall within the last week, on whole-hour offsets
MAX_AGE_HOURS = 7 * 24


def generate_random_event(rng: random.Random,
                          now: Optional[datetime.datetime] = None) -> Event:
    """Build one random event."""
    if now is None:
        now = datetime.datetime.now(datetime.timezone.utc)
    return Event(
        name=f"Event {rng.randrange(1000)}",
        description=f"This is a random event description {rng.randrange(1000)}",
        timestamp=now - datetime.timedelta(hours=rng.randrange(MAX_AGE_HOURS)),
        source=f"Source {rng.randrange(5)}",
        severity=rng.choice(SEVERITIES),
    )


def seed(repository: EventRepository, count: int, rng: random.Random) -> int:
    """
    Insert random events, continuing past individual failures.

    Returns:
        Number of events inserted
    """
    inserted = 0
    for _ in range(count):
        event = generate_random_event(rng)
        try:
            repository.insert(event)
        except DataAccessError as e:
            logger.error("Error inserting event: %s", e)
            continue
        inserted += 1
        logger.debug("Inserted event: %s", event.name)
    return inserted


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Insert random events into the event store.")
    parser.add_argument("count", type=int, help="number of events to insert")
    parser.add_argument("--db", help="path to the SQLite database (default: configured path)")
    parser.add_argument("--seed", type=int, help="random seed for reproducible data")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    config = Config()
    setup_logging(config.log_level)

    if args.count < 0:
        logger.error("Invalid number of events: %d", args.count)
        return 1

    database = Database(args.db or config.db_path)
    try:
        database.ensure_schema()
    except DataAccessError as e:
        logger.error("%s", e)
        return 1

    inserted = seed(EventRepository(database), args.count, random.Random(args.seed))
    logger.info("Inserted %d events into %s", inserted, database.path)
    return 0


if __name__ == "__main__":
    sys.exit(main())

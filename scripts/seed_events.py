#!/usr/bin/env python3
"""Load events from a JSON file into the database.

Usage:
    python scripts/seed_events.py --file events.json

The file must contain a JSON array of event objects. Each one goes through
the same validation as the API; rejected events are logged and skipped.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

# Add project root to Python path
sys.path.append(str(Path(__file__).parent.parent))

from eventhub.config.environment import IS_PRODUCTION_ENVIRONMENT  # noqa: F401
from eventhub.db import db
from eventhub.errors import DomainError
from eventhub.services import create_event
from eventhub.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)

def seed_events(path: Path) -> int:
    """Create every event in the file and return how many were stored."""
    candidates = json.loads(path.read_text(encoding='utf-8'))
    if not isinstance(candidates, list):
        raise ValueError(f"{path} must contain a JSON array of events")

    db.init_db()

    created = 0
    for index, candidate in enumerate(candidates):
        if not isinstance(candidate, dict):
            logger.warning(f"Skipping entry {index}: not an object")
            continue
        try:
            event = create_event(db, candidate)
            created += 1
            logger.info(f"Stored '{event.slug}'")
        except DomainError as e:
            logger.warning(f"Skipping entry {index} ({candidate.get('title')!r}): {e}")

    logger.info(f"Seeded {created} of {len(candidates)} events")
    return created

def main():
    parser = argparse.ArgumentParser(description="Seed events from a JSON file")
    parser.add_argument('--file', required=True, type=Path, help="Path to a JSON array of events")
    args = parser.parse_args()

    setup_logging()
    try:
        seed_events(args.file)
    finally:
        db.dispose()

if __name__ == "__main__":
    main()

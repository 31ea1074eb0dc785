#!/usr/bin/env python3
"""Probe the configured DATABASE_URL and report whether it is reachable."""

import sys
import logging
from pathlib import Path

# Add project root to Python path
sys.path.append(str(Path(__file__).parent.parent))

from eventhub.config.environment import IS_PRODUCTION_ENVIRONMENT  # noqa: F401
from eventhub.db import Database, DatabaseError

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

def check_connection() -> bool:
    database = Database()
    try:
        engine = database.connect()
        logger.info(f"Successfully connected to {engine.url.render_as_string(hide_password=True)}")
        return True
    except ValueError as e:
        logger.error(str(e))
        return False
    except DatabaseError as e:
        logger.error(f"Failed to connect to database: {e}")
        return False
    finally:
        database.dispose()

if __name__ == "__main__":
    success = check_connection()
    sys.exit(0 if success else 1)

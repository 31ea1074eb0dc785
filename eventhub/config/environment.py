"""Environment configuration module.

Loads the .env file and exposes whether the event service runs in
production. Settings read later (database URL, admin key, CORS origins)
come from the process environment populated here, both for the API and
for the maintenance scripts.

In production, variables should be set in the platform's environment
configuration rather than a .env file.
"""

import os
import logging
from dotenv import load_dotenv

# Values already in the process environment win over .env entries
load_dotenv()

env_setting = os.environ.get('ENVIRONMENT', '').lower()
IS_PRODUCTION_ENVIRONMENT = env_setting == 'production'

if env_setting not in ['development', 'production']:
    logging.warning(
        f"Environment setting '{env_setting}' is invalid or not specified. "
        "Expected 'development' or 'production'. Defaulting to development environment."
    )

__all__ = ['IS_PRODUCTION_ENVIRONMENT']

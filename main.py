"""Main application entry point."""

import os

from eventhub.config.environment import IS_PRODUCTION_ENVIRONMENT
from eventhub.api.app import app

if __name__ == "__main__":
    import uvicorn

    port = int(os.environ.get('PORT', 8000))
    if not IS_PRODUCTION_ENVIRONMENT:
        # Development mode - reload requires the string reference
        uvicorn.run(
            "eventhub.api.app:app",
            host="127.0.0.1",
            port=port,
            reload=True,
            log_level="debug"
        )
    else:
        # Production mode - use string reference for proper multi-worker support
        uvicorn.run(
            "eventhub.api.app:app",  # String reference required for multiple workers
            host="0.0.0.0",
            port=port,
            reload=False,
            workers=int(os.environ.get('WEB_CONCURRENCY', 4)),
            log_level="info",
            proxy_headers=True,
            forwarded_allow_ips="*"
        )

#!/usr/bin/env python3
"""Start the forum API under uvicorn with Logfire configured first."""

import sys

import logfire
import uvicorn

from forum.config import Settings
from forum.util.observability import configure_logfire


def main() -> int:
    """Serve the API, reporting startup failures to Logfire."""
    settings = Settings()

    # The app module expects Logfire to be configured before import
    configure_logfire(settings)

    logfire.info(
        "Starting forum API", environment=settings.environment, port=settings.port
    )
    try:
        uvicorn.run(
            "forum.interface.api.app:app",
            host="0.0.0.0",
            port=settings.port,
            reload=settings.environment == "development",
            log_level="debug" if settings.debug else "info",
        )
    except Exception as e:
        logfire.error(
            "Forum API failed to start",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Entry point for the documentation viewer API server."""

import structlog
import uvicorn

from lumadocs.app import create_app
from lumadocs.config import Settings
from lumadocs.logging import configure_logging

logger = structlog.get_logger()


def main() -> None:
    """Entry point for python -m lumadocs.

    uvicorn handles SIGTERM/SIGINT and runs the lifespan shutdown.
    """
    settings = Settings()
    configure_logging(debug=settings.debug)

    app = create_app(settings)
    logger.info("server_starting", host=settings.host, port=settings.port)
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level="warning",
        access_log=False,
    )


if __name__ == "__main__":
    main()

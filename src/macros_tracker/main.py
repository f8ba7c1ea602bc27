"""Process entry point serving the local command API."""

import logging

import uvicorn

from macros_tracker.api.app import create_app
from macros_tracker.containers import build_container

logger = logging.getLogger(__name__)


def main() -> None:
    """Load the tracker and serve it until interrupted."""
    container = build_container()
    app = create_app(container)
    logger.info(
        "Serving Macros Tracker on %s:%d",
        container.settings.host,
        container.settings.port,
    )
    uvicorn.run(app, host=container.settings.host, port=container.settings.port)


if __name__ == "__main__":
    main()

from __future__ import annotations

import logging

import uvicorn

from htmx_tutorial.app import create_app
from htmx_tutorial.config import load_app_config
from htmx_tutorial.logs import configure_logging

logger = logging.getLogger(__name__)


def main() -> None:
    config = load_app_config()
    configure_logging(config.logging)

    host = config.network.bind_host
    port = config.network.port
    logger.info("Server starting on %s:%s", host, port)

    uvicorn.run(create_app(config), host=host, port=port, log_config=None)


if __name__ == "__main__":
    main()

"""Entry point for the Smart Cashless Hub API.

Launches the FastAPI application with Uvicorn.  Host and port come
from the ``HOST`` and ``PORT`` environment variables (defaults
``0.0.0.0`` and ``3001``); see ``cashless_hub_api/app/core/config.py``
for the remaining settings.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from cashless_hub_api.app.core.config import settings
from cashless_hub_api.app.main import app


async def main() -> None:
    """Serve the API until interrupted."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
        # keep the handlers installed by setup_logging
        log_config=None,
    )
    server = Server(config)
    logging.getLogger(__name__).info("API listening on http://%s:%s/api/v1", settings.host, settings.port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass

"""Entry point for the Blog API.

Serves ``blog_api.app.main:app`` with Uvicorn.  Host and port come
from the ``HOST`` and ``PORT`` environment variables (defaults
``0.0.0.0`` and ``3000``); see ``blog_api/app/core/config.py`` for the
full list of settings.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from blog_api.app.core.config import settings
from blog_api.app.main import app


logger = logging.getLogger("blog_api")


async def main() -> None:
    """Run the API server until interrupted."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        # Keep the handlers installed by configure_logging.
        log_config=None,
    )
    server = Server(config)
    logger.info("Server is running on http://localhost:%s", settings.port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass

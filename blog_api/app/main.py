"""
Main entrypoint for the Blog API.

This module assembles the FastAPI application: it sets up logging,
creates the ``Store`` the repositories share, installs the error
handlers and request logging, and includes the routers.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app`` so it can be served
directly, e.g.::

    uvicorn blog_api.app.main:app --reload
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator, Awaitable, Callable, Optional

from fastapi import FastAPI, Request, Response

from .api.router import router
from .core.config import Settings, settings as default_settings
from .core.db import Store
from .core.errors import install_exception_handlers
from .core.logging_config import configure_logging


logger = logging.getLogger(__name__)


def install_logging_middleware(app: FastAPI) -> None:
    """Log method, path, status and duration of every request."""

    @app.middleware("http")
    async def _log_request(
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "%s %s -> %s (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
        )
        return response


def create_app(settings: Optional[Settings] = None, store: Optional[Store] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use; defaults to the environment-derived
        ``core.config.settings``.
    store : Optional[Store]
        Store to inject into the repositories.  Built from ``settings``
        when omitted.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.  The database schema
        is created when the application starts.
    """
    settings = settings or default_settings
    # Initialise logging before anything else so later setup can log.
    configure_logging(settings)

    store = store or Store.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        store.init_db()
        yield

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store

    install_exception_handlers(app)
    install_logging_middleware(app)
    app.include_router(router)
    return app


# Create the application instance at import time so that ASGI servers
# can find it as ``blog_api.app.main:app``.
app = create_app()

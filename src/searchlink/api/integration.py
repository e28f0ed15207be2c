"""FastAPI integration — Lifespan wiring and status-code mapping for host services.

Usage::

    from fastapi import FastAPI
    from searchlink.api import register_exception_handlers, searchlink_lifespan

    app = FastAPI(lifespan=searchlink_lifespan())
    register_exception_handlers(app)
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from searchlink import __version__
from searchlink.config.settings import Settings, get_settings
from searchlink.core.exceptions import PayloadValidationError, StatusError
from searchlink.deps import set_search_provider
from searchlink.observability.logging import setup_logging
from searchlink.search.client import SearchClientProvider

logger = logging.getLogger(__name__)


def searchlink_lifespan(
    settings: Settings | None = None,
) -> Callable[[FastAPI], AbstractAsyncContextManager[None]]:
    """Build a FastAPI lifespan that owns the search client provider.

    On startup it configures logging and installs a fresh provider as the
    default; the client itself is still built lazily on first use. On shutdown
    it closes the client (if one was built) and clears the default.

    Args:
        settings: Settings to use. If None, loads from environment.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        cfg = settings or get_settings()
        setup_logging(cfg.observability)
        logger.info("Starting searchlink v%s (search host %s)", __version__, cfg.search.host)

        provider = SearchClientProvider(cfg.search)
        set_search_provider(provider)
        app.state.search_provider = provider
        yield

        await provider.shutdown()
        set_search_provider(None)
        logger.info("searchlink shutdown complete")

    return lifespan


async def _status_error_handler(request: Request, exc: StatusError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


async def _payload_error_handler(request: Request, exc: PayloadValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": str(exc), "field": exc.field})


def register_exception_handlers(app: FastAPI) -> None:
    """Map ``StatusError`` to its status code and ``PayloadValidationError`` to 400."""
    app.add_exception_handler(StatusError, _status_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(PayloadValidationError, _payload_error_handler)  # type: ignore[arg-type]

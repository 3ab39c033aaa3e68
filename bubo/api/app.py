from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .middleware import request_logging_middleware, security_headers_middleware
from .routes import router
from ..core.facade import AgentFacade
from ..tools.toolkit import Toolkit

logger = logging.getLogger(__name__)


def create_app(facade: AgentFacade, toolkit: Optional[Toolkit] = None) -> FastAPI:
    """Build the HTTP app around an already bootstrapped facade and toolkit."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        if toolkit is not None:
            toolkit.close()
            logger.info("Toolkit closed")

    app = FastAPI(title="BuboAgent", version="1.0.0", lifespan=lifespan)
    app.state.facade = facade
    app.state.toolkit = toolkit

    # Middleware: request logging + CORS + security headers (outermost last,
    # so CORS preflight answers carry the headers too)
    app.middleware("http")(request_logging_middleware)
    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])
    app.middleware("http")(security_headers_middleware)

    app.include_router(router)
    return app

import socket
from contextlib import asynccontextmanager
from typing import Final

import uvicorn
from fastapi import FastAPI, Request
from sqlalchemy.exc import SQLAlchemyError

from .config import settings
from .domain.exceptions import DomainError
from .infrastructure.database.database import (
    dispose_async_engine,
    get_async_engine,
    init_async_db,
)
from .logging_config import get_logger, setup_logging
from .logging_utils import log_system_info
from .middleware import request_context_middleware
from .presentation.api_routes import api_router
from .presentation.error_handlers import handle_domain_error, handle_unexpected_error


@asynccontextmanager
async def lifespan(_app: FastAPI):
    # Setup logging first
    setup_logging()
    logger = get_logger(__name__)

    await init_async_db(get_async_engine())
    logger.info("Database initialized successfully")

    log_system_info(socket.gethostname(), settings.debug, settings.database_url)

    yield

    await dispose_async_engine()
    logger.info("Application shutdown completed")


app: Final = FastAPI(
    title=settings.app_name,
    version=settings.version,
    debug=settings.debug,
    lifespan=lifespan,
    description="""
**Cart Manager** - adds products to a shopping cart while enforcing stock and
per-product quantity limits.

A request is checked in a fixed order: the product must exist, must be in
stock, and the cart may not hold more than the product's maximum quantity
afterwards. Refused requests leave the cart unchanged and return the error
message meant for the user.
    """.strip(),
    openapi_tags=[
        {
            "name": "cart",
            "description": "Add products to the cart and inspect its contents",
        },
    ],
)

app.middleware("http")(request_context_middleware)


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    """Global handler for domain-specific errors."""
    logger = get_logger(__name__)
    logger.warning(
        "Domain error occurred",
        error_type=type(exc).__name__,
        error_message=str(exc),
        path=request.url.path,
        method=request.method,
    )
    return handle_domain_error(exc, request)


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    """Global handler for database errors."""
    logger = get_logger(__name__)
    logger.error(
        "Database error occurred",
        error_type=type(exc).__name__,
        error_message=str(exc),
        path=request.url.path,
        method=request.method,
        exc_info=True,
    )
    return handle_unexpected_error(
        request, "A database error occurred. Please try again."
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Global handler for unexpected errors."""
    logger = get_logger(__name__)
    logger.error(
        "Unexpected error occurred",
        error_type=type(exc).__name__,
        error_message=str(exc),
        path=request.url.path,
        method=request.method,
        exc_info=True,
    )
    return handle_unexpected_error(
        request, "An unexpected error occurred. Please try again."
    )


app.include_router(api_router)


def run() -> None:
    """Serve the API with uvicorn on the configured host and port."""
    uvicorn.run(
        "cart_manager.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
    )

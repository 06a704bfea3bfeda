# src/bartercoin/main.py
"""Main entry point for the BarterCoin application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from bartercoin.api.v1 import (
    coins_router,
    listings_router,
    messages_router,
    notifications_router,
    profiles_router,
    reviews_router,
    trades_router,
)
from bartercoin.core.errors import Conflict, InternalError, MarketError, ValidationError
from bartercoin.core.settings import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Peer-to-peer bartering marketplace API",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(profiles_router, prefix="/api/v1")
app.include_router(listings_router, prefix="/api/v1")
app.include_router(trades_router, prefix="/api/v1")
app.include_router(coins_router, prefix="/api/v1")
app.include_router(messages_router, prefix="/api/v1")
app.include_router(notifications_router, prefix="/api/v1")
app.include_router(reviews_router, prefix="/api/v1")


def _error_response(error: MarketError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if error.status_code == 401 else None
    return JSONResponse(
        status_code=error.status_code,
        content={"detail": error.message, "error": error.kind},
        headers=headers,
    )


@app.exception_handler(MarketError)
async def handle_market_error(request: Request, exc: MarketError) -> JSONResponse:
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return _error_response(exc)


@app.exception_handler(RequestValidationError)
async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    first = exc.errors()[0] if exc.errors() else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    return _error_response(ValidationError(f"{location}: {message}" if location else message))


@app.exception_handler(IntegrityError)
async def handle_integrity_error(request: Request, exc: IntegrityError) -> JSONResponse:
    logger.warning("%s %s hit a constraint: %s", request.method, request.url.path, exc.orig)
    return _error_response(Conflict("Request conflicts with the current state"))


@app.exception_handler(SQLAlchemyError)
async def handle_store_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("%s %s store failure", request.method, request.url.path, exc_info=exc)
    return _error_response(InternalError("Internal server error"))


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "description": "Peer-to-peer bartering marketplace API",
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("bartercoin.main:app", host="0.0.0.0", port=8000, reload=settings.debug)

"""
Item Ledger API - Main Application.

FastAPI application exposing the item lifecycle over HTTP.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api import __version__
from api.dependencies import build_ledger
from api.models import ErrorResponse
from domain.errors import (
    ConcurrentModification,
    DirectTransferRejected,
    InsufficientPayment,
    InvalidInput,
    LedgerError,
    NotFound,
    StateGuardError,
    TransferFailed,
    Unauthorized,
)
from services.settings import load_settings

settings = load_settings()
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Create FastAPI application
app = FastAPI(
    title="Item Ledger API",
    description="REST API for listing, buying, shipping and receiving items",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# One ledger for the lifetime of the process
app.state.ledger = build_ledger(settings)

# Most specific classes first
_STATUS_BY_ERROR = (
    (InvalidInput, 400),
    (InsufficientPayment, 402),
    (Unauthorized, 403),
    (NotFound, 404),
    (DirectTransferRejected, 403),
    (StateGuardError, 409),
    (ConcurrentModification, 409),
    (TransferFailed, 502),
)


def status_for(exc: LedgerError) -> int:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return 400


@app.exception_handler(LedgerError)
async def ledger_error_handler(request: Request, exc: LedgerError) -> JSONResponse:
    status_code = status_for(exc)
    body = ErrorResponse(error=exc.kind, detail=str(exc), status_code=status_code)
    return JSONResponse(status_code=status_code, content=body.model_dump())


@app.get("/health", tags=["Health"])
def health_check():
    """
    Health check endpoint.

    Returns the API status and version.
    """
    return {
        "status": "healthy",
        "version": __version__,
        "service": "item-ledger-api",
        "store": settings.store,
    }


@app.get("/", tags=["Root"])
def root():
    """
    Root endpoint with API information.
    """
    return {
        "message": "Item Ledger API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health"
    }


# Import and include routers
from api.routers import items, ledger

app.include_router(items.router, prefix="/api/v1", tags=["Items"])
app.include_router(ledger.router, prefix="/api/v1", tags=["Ledger"])

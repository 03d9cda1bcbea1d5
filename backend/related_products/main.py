"""Related Products Validator — HTTP service.

Main FastAPI application with lifespan management, CORS, and global error handling.
Run with: uvicorn related_products.main:app
"""

import logging
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from related_products import __version__
from related_products.api.router import api_router
from related_products.config import get_settings
from related_products.validators.errors import ConfigurationError
from related_products.validators.rulesets import get_all_rule_sets

# Configure structured logging
structlog.configure(
    processors=[
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.dev.ConsoleRenderer() if get_settings().DEBUG else structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.make_filtering_bound_logger(
        logging.getLevelName(get_settings().LOG_LEVEL.upper())
    ),
)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown lifecycle."""
    settings = get_settings()

    # ── Startup ──
    logger.info("app_starting", debug=settings.DEBUG, default_rule_set=settings.DEFAULT_RULE_SET)

    rule_sets = get_all_rule_sets()
    if settings.DEFAULT_RULE_SET not in rule_sets:
        logger.warning("default_rule_set_missing", name=settings.DEFAULT_RULE_SET, available=rule_sets)

    logger.info("app_started", rule_sets=rule_sets)

    yield

    # ── Shutdown ──
    logger.info("app_stopped")


# ── Create Application ──

app = FastAPI(
    title="Related Products Validator",
    description=(
        "Rule-based validation of related-product listings. "
        "Page drivers submit what they extracted; the service returns "
        "a per-item and per-section pass/fail report."
    ),
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)


# ── Middleware ──

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Global Exception Handlers ──

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch-all error handler for unhandled exceptions."""
    logger.error(
        "unhandled_exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        error_type=type(exc).__name__,
    )
    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_server_error",
            "message": "An unexpected error occurred. Please try again.",
        },
    )


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    """Handle malformed rule sets and snapshot values."""
    return JSONResponse(
        status_code=422,
        content={"error": "configuration_error", "message": str(exc), "field": exc.field},
    )


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    """Handle validation errors."""
    return JSONResponse(
        status_code=422,
        content={"error": "validation_error", "message": str(exc)},
    )


# ── Routes ──

app.include_router(api_router, prefix="/api/v1")


# ── Root endpoint ──

@app.get("/")
async def root():
    """Root endpoint — API info."""
    return {
        "name": "Related Products Validator",
        "version": __version__,
        "description": "Rule-based validation of related-product listings",
        "docs": "/docs",
        "health": "/api/v1/health",
    }

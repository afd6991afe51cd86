import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from string_analyzer.config import settings
from string_analyzer.errors import StringAnalyzerError
from string_analyzer.logging import RequestLoggingMiddleware, init_logging
from string_analyzer.routes import router
from string_analyzer.store import EntryStore

logger = logging.getLogger("string_analyzer")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("%s started with %d stored strings", settings.APP_NAME, len(app.state.store))
    try:
        yield
    finally:
        app.state.store.clear()
        logger.info("%s shutting down; in-memory store discarded", settings.APP_NAME)


def jsonable_errors(errors):
    """Drop the non-serializable ``ctx``/``input`` parts pydantic attaches."""
    return [{k: v for k, v in err.items() if k in ("type", "loc", "msg")} for err in errors]


def create_app(store: Optional[EntryStore] = None) -> FastAPI:
    """Build the application around ``store`` (a fresh one when omitted)."""
    init_logging()

    app = FastAPI(
        title=settings.APP_NAME,
        version="1.0.0",
        description=(
            "Analyze strings and query them back.\n\n"
            "Features:\n"
            "- Length, palindrome, word count, unique characters and frequency map\n"
            "- Structured filtering on those properties\n"
            "- Best-effort natural language filtering"
        ),
        lifespan=lifespan,
    )
    app.state.store = store if store is not None else EntryStore()

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ALLOW_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(router)

    # -------------------------------
    # Unified error response handlers
    # -------------------------------
    @app.exception_handler(StringAnalyzerError)
    async def analyzer_error_handler(request: Request, exc: StringAnalyzerError):
        logger.warning(
            "%s: %s %s -> %s | %s",
            type(exc).__name__,
            request.method,
            request.url.path,
            exc.status_code,
            exc.message,
        )
        body = {"error": exc.message}
        if exc.details:
            body["details"] = exc.details
        return JSONResponse(status_code=exc.status_code, content=body)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        logger.error(
            "HTTPException: %s %s -> %s | detail=%s",
            request.method,
            request.url.path,
            exc.status_code,
            exc.detail,
        )
        body = {"error": exc.detail if isinstance(exc.detail, str) else "Error"}
        return JSONResponse(status_code=exc.status_code, content=body, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        # Missing body or malformed JSON -> 400, wrong type -> 422
        missing = any(err.get("type") in {"missing", "field_required"} for err in errors)
        json_invalid = any(
            (err.get("type") in {"json_invalid", "value_error.jsondecode"}) or
            ("json decode error" in str(err.get("msg", "")).lower())
            for err in errors
        )
        status = 400 if (missing or json_invalid) else 422
        logger.error(
            "ValidationError: %s %s -> %s | errors=%s",
            request.method,
            request.url.path,
            status,
            errors,
        )
        return JSONResponse(
            status_code=status,
            content={"error": "Validation failed", "details": jsonable_errors(errors)},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception: %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    return app


app = create_app()

"""FastAPI application for the certificates API.

Serves the same two operations as the Lambda functions in ``functions/``:
    POST /generateCertificate
    GET  /verifyCertificate/{id}

Run offline with: IS_OFFLINE=true uvicorn main:app --reload
"""

import logging
from contextlib import asynccontextmanager

import fastapi
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from core.config import get_settings
from core.dependencies import build_dependencies
from core.logger import configure_logging
from core.middleware import RequestContextMiddleware
from routes import certificates_router, health_router

configure_logging()
logger = logging.getLogger(__name__)

INVALID_REQUEST_MESSAGE = "Invalid request."


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler for unhandled exceptions."""
    logger.exception(
        "unhandled.exception",
        extra={
            "exc_type": type(exc).__name__,
            "path": request.url.path,
            "method": request.method,
        },
    )
    return JSONResponse(
        status_code=500,
        content={"message": "An unexpected error occurred. Please try again."},
    )


async def validation_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """Malformed or incomplete input is a 400 with a structured message."""
    if not isinstance(exc, RequestValidationError):
        return JSONResponse(status_code=500, content={"message": "Unexpected error"})

    logger.warning(
        "request.validation_error",
        extra={
            "path": request.url.path,
            "method": request.method,
            "error_count": len(exc.errors()),
        },
    )
    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={"message": INVALID_REQUEST_MESSAGE, "errors": errors},
    )


@asynccontextmanager
async def lifespan(app: fastapi.FastAPI):
    """Build the record store, object store and renderer once at startup."""
    settings = get_settings()
    if getattr(app.state, "dependencies", None) is None:
        app.state.dependencies = build_dependencies(settings)
    logger.info(
        "init.complete",
        extra={
            "offline": settings.is_offline,
            "table": settings.certificates_table,
            "bucket": settings.certificates_bucket,
        },
    )
    yield


_settings = get_settings()

app = fastapi.FastAPI(
    title="Certificates API",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs" if _settings.enable_docs or _settings.debug else None,
    redoc_url="/redoc" if _settings.enable_docs or _settings.debug else None,
    openapi_url=("/openapi.json" if _settings.enable_docs or _settings.debug else None),
)

app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)

app.add_middleware(RequestContextMiddleware)

app.include_router(health_router)
app.include_router(certificates_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=3000)

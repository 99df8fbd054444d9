"""FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from microscroll.application.common.unit_of_work import ConcurrentUpdateError
from microscroll.config import configure_logging, get_settings
from microscroll.database import create_tables, dispose_engine, initialize_database
from microscroll.exceptions import MicroscrollError
from microscroll.infrastructure.common.rate_limit import limiter
from microscroll.infrastructure.common.schemas import error_response
from microscroll.infrastructure.study.routers import analytics, study

settings = get_settings()
configure_logging(settings.ENVIRONMENT, settings.LOG_LEVEL)

logger = logging.getLogger(__name__)

_CODE_BY_STATUS = {
    status.HTTP_400_BAD_REQUEST: "VALIDATION_ERROR",
    status.HTTP_401_UNAUTHORIZED: "UNAUTHORIZED",
    status.HTTP_403_FORBIDDEN: "FORBIDDEN",
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
    status.HTTP_409_CONFLICT: "CONFLICT",
    status.HTTP_429_TOO_MANY_REQUESTS: "RATE_LIMIT",
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the engine at startup and dispose it at shutdown."""
    initialize_database(settings)
    if settings.CREATE_TABLES_ON_STARTUP:
        create_tables()
    logger.info(f"{settings.PROJECT_NAME} {settings.VERSION} started ({settings.ENVIRONMENT})")
    yield
    dispose_engine()


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(MicroscrollError)
async def microscroll_error_handler(request: Request, exc: MicroscrollError) -> JSONResponse:
    return error_response(exc.code, exc.message, exc.status_code)


@app.exception_handler(ConcurrentUpdateError)
async def concurrent_update_handler(request: Request, exc: ConcurrentUpdateError) -> JSONResponse:
    logger.warning(f"Unresolved concurrent update on {request.url.path}: {exc!s}")
    return error_response(
        "CONFLICT", "The resource was modified concurrently", status.HTTP_409_CONFLICT
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
    else:
        message = "Invalid request"
    return error_response("VALIDATION_ERROR", message, status.HTTP_400_BAD_REQUEST)


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    return error_response(
        "RATE_LIMIT", f"Rate limit exceeded: {exc.detail}", status.HTTP_429_TOO_MANY_REQUESTS
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    code = _CODE_BY_STATUS.get(exc.status_code, "INTERNAL_ERROR")
    return error_response(code, str(exc.detail), exc.status_code)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc!s}", exc_info=True)
    return error_response(
        "INTERNAL_ERROR",
        "An unexpected error occurred. Please try again later.",
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


app.include_router(study.router, prefix=settings.API_V1_PREFIX)
app.include_router(analytics.router, prefix=settings.API_V1_PREFIX)


@app.get("/health", tags=["health"])
def health() -> dict[str, str]:
    return {"status": "ok", "version": settings.VERSION}

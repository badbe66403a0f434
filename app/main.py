"""FastAPI application entrypoint. No business logic; only wiring, middleware and error boundaries."""

from dotenv import load_dotenv

load_dotenv()

import logging

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.sessions import SessionMiddleware

from app.api.routes import router
from app.api.routes.auth import enforce_route_access
from app.core.config import settings
from app.services.errors import AccountError

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Something went wrong. Please try again later."

app = FastAPI(
    title="Order Desk",
    version="0.1.0",
    docs_url="/docs" if settings.APP_ENV == "dev" else None,
    redoc_url=None,
    dependencies=[Depends(enforce_route_access)],
)

app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SESSION_SECRET.get_secret_value(),
    session_cookie=settings.SESSION_COOKIE_NAME,
    max_age=settings.SESSION_MAX_AGE_SECONDS,
    same_site="lax",
    https_only=settings.SESSION_HTTPS_ONLY,
)

app.include_router(router)


@app.exception_handler(AccountError)
async def account_error_handler(request: Request, exc: AccountError) -> JSONResponse:
    """Recoverable, user-facing failures (not found, duplicate username, blocked delete...)."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"code": exc.code, "error": exc.message},
    )


@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Database failures: log the detail, tell the caller only to retry."""
    logger.error("Storage error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=503,
        content={"code": "unavailable", "error": GENERIC_ERROR_MESSAGE},
    )


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"code": "internal_error", "error": GENERIC_ERROR_MESSAGE},
    )


@app.get("/")
def root() -> dict[str, str]:
    """Root route; minimal payload for discovery (signed-in callers only)."""
    return {"message": "Order Desk"}

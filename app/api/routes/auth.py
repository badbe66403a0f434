"""Login, logout and registration endpoints plus the session/authorization dependencies."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Form, HTTPException, Request, status
from fastapi.responses import JSONResponse, RedirectResponse
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import get_db
from app.schemas.auth import Principal
from app.services.account_store import AccountStore, SqlAccountStore
from app.services.authentication import principal_for, verify_credentials
from app.services.authorization import Decision, classify_route, decide
from app.services.errors import AccountError, Forbidden, InvalidCredentials
from app.services.registration import register

logger = logging.getLogger(__name__)
router = APIRouter()

# Session key holding the signed-in account's id.
SESSION_ACCOUNT_KEY = "account_id"

LOGIN_PATH = "/login"
LOGIN_ERROR_MESSAGE = "Invalid username or password"
LOGOUT_MESSAGE = "You have been successfully logged out"


def get_account_store(db: Annotated[Session, Depends(get_db)]) -> AccountStore:
    """Dependency: account store bound to this request's DB session."""
    return SqlAccountStore(db)


def get_optional_principal(
    request: Request,
    store: Annotated[AccountStore, Depends(get_account_store)],
) -> Principal | None:
    """
    Dependency: principal for the session cookie, or None for anonymous callers.

    The account is re-read on every request, so a deleted or disabled account
    loses its session immediately.
    """
    account_id = request.session.get(SESSION_ACCOUNT_KEY)
    if account_id is None:
        return None
    try:
        account = store.find_by_id(int(account_id))
    except (TypeError, ValueError):
        account = None
    if account is None or not account.enabled:
        request.session.clear()
        return None
    return principal_for(account)


def enforce_route_access(
    request: Request,
    principal: Annotated[Principal | None, Depends(get_optional_principal)],
) -> None:
    """App-wide dependency: run the authorization gate before any handler."""
    route_class = classify_route(request.url.path)
    role = principal.role if principal is not None else None
    if decide(role, route_class) == Decision.ALLOW:
        return
    if principal is None:
        raise HTTPException(
            status_code=status.HTTP_303_SEE_OTHER,
            headers={"Location": LOGIN_PATH},
        )
    logger.warning(
        "Denied %s %s for username=%r role=%s",
        request.method,
        request.url.path,
        principal.username,
        principal.role.value,
    )
    raise Forbidden()


def get_current_principal(
    principal: Annotated[Principal | None, Depends(get_optional_principal)],
) -> Principal:
    """Dependency: require a signed-in principal. Raises 401 if missing."""
    if principal is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"code": "unauthorized", "message": "Authentication required."},
        )
    return principal


@router.get("/login")
def login_view(error: str | None = None, logout: str | None = None) -> dict:
    """Login page model. ?error and ?logout select the banner to show."""
    return {
        "view": "login",
        "error": LOGIN_ERROR_MESSAGE if error is not None else None,
        "message": LOGOUT_MESSAGE if logout is not None else None,
    }


@router.post("/login")
def login(
    request: Request,
    store: Annotated[AccountStore, Depends(get_account_store)],
    username: Annotated[str, Form()] = "",
    password: Annotated[str, Form()] = "",
) -> RedirectResponse:
    """
    Form login. On success the session holds the account id and the caller is
    redirected to the landing page; on any failure back to /login?error.
    """
    try:
        account = verify_credentials(store, username, password)
    except InvalidCredentials:
        return RedirectResponse(url=f"{LOGIN_PATH}?error", status_code=status.HTTP_303_SEE_OTHER)
    request.session.clear()
    request.session[SESSION_ACCOUNT_KEY] = account.id
    return RedirectResponse(url=settings.DEFAULT_LANDING_PATH, status_code=status.HTTP_303_SEE_OTHER)


@router.api_route("/logout", methods=["GET", "POST"])
def logout(request: Request) -> RedirectResponse:
    """Drop the session and return to the login page."""
    request.session.clear()
    return RedirectResponse(url=f"{LOGIN_PATH}?logout", status_code=status.HTTP_303_SEE_OTHER)


@router.get("/register")
def register_view() -> dict:
    """Registration page model."""
    return {"view": "register", "error": None}


@router.post("/register", response_model=None)
def register_submit(
    store: Annotated[AccountStore, Depends(get_account_store)],
    username: Annotated[str, Form()] = "",
    password: Annotated[str, Form()] = "",
    confirm_password: Annotated[str, Form(alias="confirmPassword")] = "",
) -> RedirectResponse | JSONResponse:
    """Create a USER account, then redirect to /login. Failures re-show the form with the reason."""
    try:
        register(store, username, password, confirm_password)
    except AccountError as e:
        return JSONResponse(
            status_code=e.status_code,
            content={"view": "register", "code": e.code, "error": e.message},
        )
    return RedirectResponse(url=LOGIN_PATH, status_code=status.HTTP_303_SEE_OTHER)

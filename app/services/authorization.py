"""Route-class access decisions. Pure functions; the HTTP layer calls decide() on every request."""

from enum import Enum

from app.schemas.auth import Role


class RouteClass(str, Enum):
    """Declared sensitivity tier of a route."""

    PUBLIC = "public"
    AUTHENTICATED_ONLY = "authenticated_only"
    ADMIN_ONLY = "admin_only"


class Decision(str, Enum):
    ALLOW = "allow"
    DENY = "deny"


# Exact public paths and public prefixes (login/registration pages, static assets, health check).
PUBLIC_PATHS = frozenset({"/login", "/logout", "/register", "/health"})
PUBLIC_PREFIXES = ("/static/", "/health/")

ADMIN_PATH = "/admin"


def classify_route(path: str) -> RouteClass:
    """Map a request path to its declared route class. Anything undeclared is AUTHENTICATED_ONLY."""
    normalized = path.rstrip("/") or "/"
    if normalized in PUBLIC_PATHS or path.startswith(PUBLIC_PREFIXES):
        return RouteClass.PUBLIC
    if normalized == ADMIN_PATH or normalized.startswith(ADMIN_PATH + "/"):
        return RouteClass.ADMIN_ONLY
    return RouteClass.AUTHENTICATED_ONLY


def decide(role: Role | None, route_class: RouteClass) -> Decision:
    """
    Allow or deny a request. role is None for anonymous callers.

    PUBLIC: always allowed. ADMIN_ONLY: admins only. AUTHENTICATED_ONLY: any
    signed-in role; admins get nothing extra here.
    """
    if route_class == RouteClass.PUBLIC:
        return Decision.ALLOW
    if route_class == RouteClass.ADMIN_ONLY:
        return Decision.ALLOW if role == Role.ADMIN else Decision.DENY
    return Decision.ALLOW if role is not None else Decision.DENY

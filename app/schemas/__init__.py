"""Pydantic request/response schemas."""

from app.schemas.auth import (
    Account,
    AccountDraft,
    AccountPublic,
    Principal,
    Role,
    UserUpdateRequest,
    UsersListResponse,
)
from app.schemas.health import HealthResponse
from app.schemas.order import (
    OrderCreate,
    OrderRead,
    OrdersListResponse,
    OrderUpdate,
)

__all__ = [
    "Account",
    "AccountDraft",
    "AccountPublic",
    "HealthResponse",
    "OrderCreate",
    "OrderRead",
    "OrderUpdate",
    "OrdersListResponse",
    "Principal",
    "Role",
    "UserUpdateRequest",
    "UsersListResponse",
]

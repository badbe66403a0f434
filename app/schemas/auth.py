"""Account, principal and admin request/response schemas."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Role(str, Enum):
    """Closed set of account roles. Stored lowercase."""

    USER = "user"
    ADMIN = "admin"


class Account(BaseModel):
    """Stored credential + role record. Internal only: carries the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    password_hash: str
    role: Role
    enabled: bool = True


class AccountDraft(BaseModel):
    """Create request for the account store. Any id set here is ignored on insert."""

    username: str
    password_hash: str = Field(..., min_length=1)
    role: Role = Role.USER
    enabled: bool = True
    id: int | None = None


class AccountPublic(BaseModel):
    """Account projection safe to show to callers (no password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    role: Role
    enabled: bool


class Principal(BaseModel):
    """Authenticated identity for one session: username and role only."""

    model_config = ConfigDict(frozen=True)

    username: str
    role: Role


class UserUpdateRequest(BaseModel):
    """Admin edit of an account. The password cannot be changed through this path."""

    username: str = Field(..., min_length=1, max_length=255, description="New username")
    role: Role = Field(..., description="New role")
    enabled: bool | None = Field(default=None, description="Enable or disable login")

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("username must not be blank")
        return v.strip()


class UsersListResponse(BaseModel):
    """Response for GET /admin/users."""

    users: list[AccountPublic]


def to_public(account: Account) -> AccountPublic:
    """Drop the hash from an account record."""
    return AccountPublic(
        id=account.id,
        username=account.username,
        role=account.role,
        enabled=account.enabled,
    )

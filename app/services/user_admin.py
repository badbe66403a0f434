"""Admin management of accounts: list, view, edit username/role/enabled, delete."""

import logging

from app.schemas.auth import AccountPublic, Role, to_public
from app.services.account_store import AccountStore
from app.services.errors import MissingFields, NotFound

logger = logging.getLogger(__name__)


def list_accounts(store: AccountStore) -> list[AccountPublic]:
    return [to_public(a) for a in store.get_all()]


def get_account(store: AccountStore, account_id: int) -> AccountPublic:
    account = store.find_by_id(account_id)
    if account is None:
        raise NotFound("User not found")
    return to_public(account)


def update_account(
    store: AccountStore,
    account_id: int,
    username: str,
    role: Role,
    enabled: bool | None = None,
) -> AccountPublic:
    """
    Change username and role (and optionally enabled) on an existing account.

    The password hash is carried over from the stored record; this path has
    no way to set it. Raises MissingFields for a blank username, NotFound or
    DuplicateUsername.
    """
    username = (username or "").strip()
    if not username:
        raise MissingFields("Username is required")
    existing = store.find_by_id(account_id)
    if existing is None:
        raise NotFound("User not found")
    changes: dict = {"username": username, "role": role}
    if enabled is not None:
        changes["enabled"] = enabled
    updated = store.update(existing.model_copy(update=changes))
    logger.info(
        "Updated account id=%s username=%r role=%s enabled=%s",
        updated.id,
        updated.username,
        updated.role.value,
        updated.enabled,
    )
    return to_public(updated)


def delete_account(store: AccountStore, account_id: int) -> None:
    """Delete an account. Raises NotFound if absent, ConstraintViolation if orders reference it."""
    if store.find_by_id(account_id) is None:
        raise NotFound("User not found")
    if not store.delete_by_id(account_id):
        raise NotFound("User not found")
    logger.info("Deleted account id=%s", account_id)

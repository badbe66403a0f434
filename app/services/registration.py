"""Self-service registration: validate the form, hash the password, create a USER account."""

import logging

from app.core.security import hash_password, password_fits_bcrypt
from app.schemas.auth import AccountDraft, AccountPublic, Role, to_public
from app.services.account_store import AccountStore
from app.services.errors import (
    DuplicateUsername,
    MissingFields,
    PasswordMismatch,
    PasswordTooLong,
    UsernameTaken,
)

logger = logging.getLogger(__name__)


def register(
    store: AccountStore,
    username: str | None,
    password: str | None,
    confirm_password: str | None,
) -> AccountPublic:
    """
    Create an enabled USER account.

    Checks run in order and the first failure is raised: MissingFields,
    PasswordMismatch, PasswordTooLong, UsernameTaken. The username
    pre-check is only a fast path; the store's atomic create is what guarantees uniqueness, and a
    losing concurrent create is reported as UsernameTaken too.
    """
    username = (username or "").strip()
    if not username or not password:
        raise MissingFields()
    if password != confirm_password:
        raise PasswordMismatch()
    if not password_fits_bcrypt(password):
        raise PasswordTooLong()
    if store.find_by_username(username) is not None:
        raise UsernameTaken()

    # Hash before touching the store again; create() may serialize on a lock.
    draft = AccountDraft(
        username=username,
        password_hash=hash_password(password),
        role=Role.USER,
        enabled=True,
    )
    try:
        account = store.create(draft)
    except DuplicateUsername as e:
        raise UsernameTaken() from e

    logger.info("Registered account id=%s username=%r", account.id, account.username)
    return to_public(account)

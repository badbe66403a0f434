"""Login: turn submitted credentials into a Principal or a generic InvalidCredentials."""

import logging
from functools import lru_cache

from app.core.security import hash_password, verify_password
from app.schemas.auth import Account, Principal
from app.services.account_store import AccountStore
from app.services.errors import InvalidCredentials

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    """Digest verified against when the username is unknown, so both paths pay the bcrypt cost."""
    return hash_password("orderdesk-no-such-user")


def _reject(username: str) -> InvalidCredentials:
    logger.warning("Login rejected for username=%r", username)
    return InvalidCredentials()


def verify_credentials(store: AccountStore, username: str, password: str) -> Account:
    """
    Look up username and check password; return the stored account on success.

    Unknown username, wrong password and disabled account all raise the same
    InvalidCredentials; callers cannot tell them apart.
    """
    account = store.find_by_username(username) if username else None
    if account is None:
        verify_password(password or "", _dummy_hash())
        raise _reject(username)
    if not verify_password(password or "", account.password_hash):
        raise _reject(username)
    if not account.enabled:
        raise _reject(username)
    logger.info("Login succeeded for username=%r role=%s", account.username, account.role.value)
    return account


def authenticate(store: AccountStore, username: str, password: str) -> Principal:
    """Verify credentials and return the session principal (username and role, no hash)."""
    account = verify_credentials(store, username, password)
    return principal_for(account)


def principal_for(account: Account) -> Principal:
    return Principal(username=account.username, role=account.role)

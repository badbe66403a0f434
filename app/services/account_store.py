"""Account store: username -> account record, with uniqueness enforced atomically.

SqlAccountStore is the production backend (UNIQUE index on users.username,
FK from orders.created_by). InMemoryAccountStore implements the same contract
behind a lock and is used by tests and scripts that do not need a database.
"""

import logging
import threading
from typing import Protocol

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models import User
from app.schemas.auth import Account, AccountDraft
from app.services.errors import ConstraintViolation, DuplicateUsername, NotFound

logger = logging.getLogger(__name__)


class AccountStore(Protocol):
    """Persistence contract for accounts."""

    def find_by_username(self, username: str) -> Account | None: ...

    def find_by_id(self, account_id: int) -> Account | None: ...

    def create(self, draft: AccountDraft) -> Account: ...

    def update(self, account: Account) -> Account: ...

    def delete_by_id(self, account_id: int) -> bool: ...

    def get_all(self) -> list[Account]: ...


def _to_account(row: User) -> Account:
    return Account.model_validate(row)


class SqlAccountStore:
    """AccountStore backed by the users table. Commits on every write."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def find_by_username(self, username: str) -> Account | None:
        row = self.db.query(User).filter(User.username == username).first()
        return _to_account(row) if row is not None else None

    def find_by_id(self, account_id: int) -> Account | None:
        row = self.db.get(User, account_id)
        return _to_account(row) if row is not None else None

    def create(self, draft: AccountDraft) -> Account:
        """
        Insert a new account and return it with its assigned id.

        draft.id is never written. A concurrent insert of the same username
        is rejected by the UNIQUE index and reported as DuplicateUsername.
        """
        row = User(
            username=draft.username,
            password_hash=draft.password_hash,
            role=draft.role.value,
            enabled=draft.enabled,
        )
        self.db.add(row)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateUsername() from e
        self.db.refresh(row)
        return _to_account(row)

    def update(self, account: Account) -> Account:
        """Write username, role and enabled for account.id. The stored hash is never touched."""
        row = self.db.get(User, account.id)
        if row is None:
            raise NotFound("User not found")
        row.username = account.username
        row.role = account.role.value
        row.enabled = account.enabled
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateUsername() from e
        self.db.refresh(row)
        return _to_account(row)

    def delete_by_id(self, account_id: int) -> bool:
        """Delete permanently. Returns False if no row existed; ConstraintViolation if referenced."""
        try:
            deleted = (
                self.db.query(User)
                .filter(User.id == account_id)
                .delete(synchronize_session=False)
            )
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning("Delete of account id=%s blocked by dependent rows", account_id)
            raise ConstraintViolation() from e
        return deleted > 0

    def get_all(self) -> list[Account]:
        rows = self.db.query(User).order_by(User.id).all()
        return [_to_account(r) for r in rows]


class InMemoryAccountStore:
    """
    Thread-safe AccountStore kept in a dict.

    All reads and writes happen under one lock, so create's check-and-insert
    is atomic. add_reference() simulates dependent rows (e.g. orders) that
    block deletion.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._accounts: dict[int, Account] = {}
        self._references: dict[int, int] = {}
        self._next_id = 1

    def _id_for_username(self, username: str) -> int | None:
        for account_id, account in self._accounts.items():
            if account.username == username:
                return account_id
        return None

    def find_by_username(self, username: str) -> Account | None:
        with self._lock:
            account_id = self._id_for_username(username)
            return self._accounts[account_id].model_copy() if account_id is not None else None

    def find_by_id(self, account_id: int) -> Account | None:
        with self._lock:
            account = self._accounts.get(account_id)
            return account.model_copy() if account is not None else None

    def create(self, draft: AccountDraft) -> Account:
        with self._lock:
            if self._id_for_username(draft.username) is not None:
                raise DuplicateUsername()
            account = Account(
                id=self._next_id,
                username=draft.username,
                password_hash=draft.password_hash,
                role=draft.role,
                enabled=draft.enabled,
            )
            self._accounts[account.id] = account
            self._next_id += 1
            return account.model_copy()

    def update(self, account: Account) -> Account:
        with self._lock:
            existing = self._accounts.get(account.id)
            if existing is None:
                raise NotFound("User not found")
            holder = self._id_for_username(account.username)
            if holder is not None and holder != account.id:
                raise DuplicateUsername()
            updated = existing.model_copy(
                update={
                    "username": account.username,
                    "role": account.role,
                    "enabled": account.enabled,
                }
            )
            self._accounts[account.id] = updated
            return updated.model_copy()

    def delete_by_id(self, account_id: int) -> bool:
        with self._lock:
            if account_id not in self._accounts:
                return False
            if self._references.get(account_id, 0) > 0:
                raise ConstraintViolation()
            del self._accounts[account_id]
            return True

    def get_all(self) -> list[Account]:
        with self._lock:
            return [self._accounts[k].model_copy() for k in sorted(self._accounts)]

    def add_reference(self, account_id: int) -> None:
        """Record one dependent row pointing at account_id."""
        with self._lock:
            self._references[account_id] = self._references.get(account_id, 0) + 1

"""
Create an account (e.g. the first admin; registration only creates users). Run from project root:
  python -m app.scripts.create_user USERNAME PASSWORD [role]
Example:
  python -m app.scripts.create_user admin your-secure-password admin
"""
import argparse
import logging
import sys

from app.core.database import SessionLocal
from app.core.security import hash_password, password_fits_bcrypt
from app.schemas.auth import AccountDraft, Role
from app.services.account_store import SqlAccountStore
from app.services.errors import DuplicateUsername

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create an Order Desk account.")
    parser.add_argument("username", help="Username (1-255 chars)")
    parser.add_argument("password", help="Password (non-empty)")
    parser.add_argument("role", nargs="?", default=Role.USER.value, choices=[r.value for r in Role])
    args = parser.parse_args(argv)

    username = args.username.strip()
    if not username or len(username) > 255:
        print("Invalid username length.", file=sys.stderr)
        return 1
    if not args.password:
        print("Password must not be empty.", file=sys.stderr)
        return 1
    if not password_fits_bcrypt(args.password):
        print("Password must be at most 72 bytes.", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        store = SqlAccountStore(db)
        account = store.create(
            AccountDraft(
                username=username,
                password_hash=hash_password(args.password),
                role=Role(args.role),
            )
        )
    except DuplicateUsername:
        print(f"User '{username}' already exists.", file=sys.stderr)
        return 1
    finally:
        db.close()
    logger.info("Created account id=%s username=%r role=%s", account.id, account.username, account.role.value)
    print(f"Created user '{username}' with role '{args.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""User-facing failures raised by the account, auth and order services.

Every error carries a stable ``code`` and an HTTP ``status_code`` so the
boundary handler in app.main can render it without knowing the subclass.
"""


class AccountError(Exception):
    """Base for recoverable failures that are shown to the caller."""

    code = "error"
    status_code = 400
    default_message = "Request could not be completed."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class MissingFields(AccountError):
    code = "missing_fields"
    default_message = "Username and password are required"


class PasswordMismatch(AccountError):
    code = "password_mismatch"
    default_message = "Passwords do not match"


class UsernameTaken(AccountError):
    code = "username_taken"
    status_code = 409
    default_message = "Username already exists"


class InvalidCredentials(AccountError):
    """Covers unknown username, wrong password and disabled account alike."""

    code = "invalid_credentials"
    status_code = 401
    default_message = "Invalid username or password"


class NotFound(AccountError):
    code = "not_found"
    status_code = 404
    default_message = "Not found"


class ConstraintViolation(AccountError):
    code = "constraint_violation"
    status_code = 409
    default_message = "Cannot delete due to database constraints"


class DuplicateUsername(AccountError):
    code = "duplicate_username"
    status_code = 409
    default_message = "Username already exists or invalid data"


class PasswordTooLong(AccountError):
    """bcrypt only reads 72 bytes; longer passwords would collide on their prefix."""

    code = "password_too_long"
    default_message = "Password must be at most 72 bytes"


class Forbidden(AccountError):
    code = "forbidden"
    status_code = 403
    default_message = "Admin access required."

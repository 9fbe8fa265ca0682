"""Password hashing, credential policy, and session token generation."""

import hashlib
import re
import secrets
from functools import lru_cache

import bcrypt

from portal.core.config import settings

# Min/max lengths and character sets for account fields (input validation).
USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_]{3,20}$")
NAME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z '\-]{0,49}$")
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128
# bcrypt only reads the first 72 bytes of its input.
PASSWORD_MAX_BYTES = 72

# 32 random bytes = 256 bits of entropy in each session id.
SESSION_TOKEN_BYTES = 32


def hash_password(plain_password: str, rounds: int | None = None) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    pw_bytes = plain_password.encode("utf-8")
    if len(pw_bytes) > PASSWORD_MAX_BYTES:
        raise ValueError(f"Password exceeds {PASSWORD_MAX_BYTES} bytes")
    cost = rounds if rounds is not None else settings.BCRYPT_ROUNDS
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=cost)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")
    if len(pw_bytes) > PASSWORD_MAX_BYTES:
        # Never stored, so it cannot match; comparing a prefix would accept it.
        return False
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


@lru_cache(maxsize=4)
def _dummy_hash(rounds: int) -> str:
    return hash_password(secrets.token_urlsafe(16), rounds=rounds)


def warm_password_checks() -> None:
    """Build the dummy hash up front so the first unknown-user login costs one bcrypt check."""
    _dummy_hash(settings.BCRYPT_ROUNDS)


def burn_password_check(plain_password: str) -> None:
    """Spend the same bcrypt work as a real check when no account matched."""
    verify_password(plain_password, _dummy_hash(settings.BCRYPT_ROUNDS))


def password_policy_error(password: str) -> str | None:
    """Return why a password is too weak, or None when it is acceptable."""
    if not (PASSWORD_MIN_LEN <= len(password) <= PASSWORD_MAX_LEN):
        return f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters long."
    if len(password.encode("utf-8")) > PASSWORD_MAX_BYTES:
        return f"Password must be at most {PASSWORD_MAX_BYTES} bytes when UTF-8 encoded."
    if not any(c.isalpha() for c in password):
        return "Password must include a letter."
    if not any(c.isdigit() for c in password):
        return "Password must include a number."
    if all(c.isalnum() for c in password):
        return "Password must include a special character."
    return None


def normalize_email(email: str) -> str:
    return email.strip().lower()


def generate_session_token() -> str:
    """Return a new unguessable session id for the cookie."""
    return secrets.token_urlsafe(SESSION_TOKEN_BYTES)


def hash_session_token(token: str) -> str:
    """
    Digest of a session id as stored server-side.
    The raw cookie value is never persisted, so a leaked table cannot be replayed.
    """
    return hashlib.sha256(token.encode("utf-8")).hexdigest()

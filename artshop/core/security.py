"""Password and security-answer hashing, JWT creation/verification."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from artshop.core.config import settings
from artshop.core.errors import InvalidTokenError, TokenExpiredError

# Bcrypt cost (rounds). Must stay fixed or existing digests stop verifying.
BCRYPT_ROUNDS = 10

# bcrypt only looks at the first 72 bytes of its input.
BCRYPT_MAX_BYTES = 72

# Session tokens are valid for exactly seven days; there is no refresh.
TOKEN_LIFETIME = timedelta(days=7)

PASSWORD_MIN_LEN = 6

ROLE_USER = "user"
ROLE_ADMIN = "admin"
ROLES = (ROLE_USER, ROLE_ADMIN)

# The only recovery questions an account may register; matched exactly.
SECURITY_QUESTIONS = (
    "What is your mother's maiden name?",
    "What was the name of your first pet?",
    "What city were you born in?",
    "What is your favorite book?",
    "What was your childhood nickname?",
)


@dataclass(frozen=True)
class TokenClaims:
    """Identity carried by a verified session token."""

    user_id: int
    email: str
    role: str


def exceeds_bcrypt_limit(value: str) -> bool:
    """bcrypt ignores input past 72 bytes; such values are rejected, never truncated."""
    return len(value.encode("utf-8")) > BCRYPT_MAX_BYTES


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    if exceeds_bcrypt_limit(plain_password):
        raise ValueError(f"Value exceeds bcrypt's {BCRYPT_MAX_BYTES}-byte limit")
    return bcrypt.hashpw(
        plain_password.encode("utf-8"), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    ).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """
    Verify a plain password against a stored hash.

    Candidates longer than 72 bytes cannot match anything hash_password stored.
    Errors from bcrypt (e.g. a corrupted digest) are not a mismatch; they propagate.
    """
    if exceeds_bcrypt_limit(plain_password):
        return False
    return bcrypt.checkpw(plain_password.encode("utf-8"), hashed.encode("utf-8"))


def normalize_answer(answer: str) -> str:
    """Security answers compare case- and surrounding-whitespace-insensitively."""
    return answer.strip().lower()


def hash_answer(answer: str) -> str:
    return hash_password(normalize_answer(answer))


def verify_answer(answer: str, hashed: str) -> bool:
    return verify_password(normalize_answer(answer), hashed)


def create_access_token(
    user_id: int,
    email: str,
    role: str,
    now: datetime | None = None,
) -> str:
    """Create a signed JWT with userId, email, role, iat and a 7-day exp."""
    issued_at = now or datetime.now(UTC)
    payload: dict[str, Any] = {
        "userId": user_id,
        "email": email,
        "role": role,
        "iat": issued_at,
        "exp": issued_at + TOKEN_LIFETIME,
    }
    secret = settings.JWT_SECRET.get_secret_value()
    return jwt.encode(
        payload,
        secret,
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_access_token(token: str | None) -> TokenClaims:
    """
    Decode and validate a session token.

    Raises TokenExpiredError when exp has passed and InvalidTokenError for
    anything else (empty token, bad signature, malformed token or claims).
    """
    if not token:
        raise InvalidTokenError()
    secret = settings.JWT_SECRET.get_secret_value()
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["exp", "iat"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise TokenExpiredError() from e
    except jwt.PyJWTError as e:
        raise InvalidTokenError() from e

    user_id = payload.get("userId")
    email = payload.get("email")
    role = payload.get("role")
    # bool is an int subclass; reject it explicitly.
    if not isinstance(user_id, int) or isinstance(user_id, bool):
        raise InvalidTokenError()
    if not isinstance(email, str) or not isinstance(role, str) or role not in ROLES:
        raise InvalidTokenError()
    return TokenClaims(user_id=user_id, email=email, role=role)

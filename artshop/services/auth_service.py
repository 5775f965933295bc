"""Registration and login: validate input, consult the store, hash, issue tokens."""

import logging
from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError

from artshop.core.errors import (
    DuplicateEmailError,
    DuplicateUsernameError,
    InvalidCredentialsError,
    InvalidSecurityQuestionError,
    ValidationFailedError,
)
from artshop.core.security import (
    BCRYPT_MAX_BYTES,
    ROLE_USER,
    SECURITY_QUESTIONS,
    create_access_token,
    exceeds_bcrypt_limit,
    hash_answer,
    hash_password,
    normalize_answer,
    verify_password,
)
from artshop.models import User
from artshop.services.user_store import UserStore, normalize_email

logger = logging.getLogger(__name__)


@dataclass
class AuthResult:
    user: User
    token: str


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _optional(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value.strip()


def issue_token(user: User) -> str:
    return create_access_token(user_id=user.id, email=user.email, role=user.role or ROLE_USER)


class AuthService:
    """Account registration and login against an explicit UserStore."""

    def __init__(self, store: UserStore) -> None:
        self.store = store

    def register(
        self,
        username: str,
        email: str,
        password: str,
        security_question: str,
        security_answer: str,
        full_name: str | None = None,
        phone: str | None = None,
    ) -> AuthResult:
        """
        Create a 'user' account with a recovery question and return it with a token.

        Raises ValidationFailedError, DuplicateEmailError,
        InvalidSecurityQuestionError or DuplicateUsernameError.
        """
        if any(
            _is_blank(v)
            for v in (username, email, password, security_question, security_answer)
        ):
            raise ValidationFailedError(
                "Please provide username, email, password, security question and answer"
            )
        if exceeds_bcrypt_limit(password) or exceeds_bcrypt_limit(
            normalize_answer(security_answer)
        ):
            raise ValidationFailedError(
                f"Password and security answer must be at most {BCRYPT_MAX_BYTES} bytes"
            )

        email = normalize_email(email)
        username = username.strip()
        if self.store.get_by_email(email) is not None:
            logger.info("Registration rejected: email already registered")
            raise DuplicateEmailError()
        if security_question not in SECURITY_QUESTIONS:
            raise InvalidSecurityQuestionError()
        if self.store.get_by_username(username) is not None:
            raise DuplicateUsernameError()

        user = User(
            username=username,
            email=email,
            password_hash=hash_password(password),
            full_name=_optional(full_name),
            phone=_optional(phone),
            role=ROLE_USER,
            security_question=security_question,
            security_answer=hash_answer(security_answer),
        )
        try:
            user = self.store.add(user)
        except IntegrityError as e:
            # Lost a race with a concurrent sign-up; report which key collided.
            if self.store.get_by_email(email) is not None:
                raise DuplicateEmailError() from e
            raise DuplicateUsernameError() from e

        logger.info("User registered", extra={"user_id": user.id, "role": user.role})
        return AuthResult(user=user, token=issue_token(user))

    def login(self, email: str, password: str) -> AuthResult:
        """
        Verify email and password and return the account with a fresh token.

        Unknown email and wrong password both raise InvalidCredentialsError.
        """
        if _is_blank(email) or _is_blank(password):
            raise ValidationFailedError("Please provide email and password")

        user = self.store.get_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            logger.warning("Login failed: invalid credentials")
            raise InvalidCredentialsError()

        logger.info("Login successful", extra={"user_id": user.id, "role": user.role})
        return AuthResult(user=user, token=issue_token(user))

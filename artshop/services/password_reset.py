"""Security-question password recovery.

A reset is a single stateless request: the caller proves identity with the
question chosen at registration plus its answer, and supplies the new password
in the same call. No intermediate reset token is issued.
"""

import logging

from artshop.core.errors import (
    AccountNotFoundError,
    InvalidSecurityQuestionError,
    NoRecoverySetError,
    ValidationFailedError,
    WrongAnswerError,
    WrongQuestionError,
)
from artshop.core.security import (
    BCRYPT_MAX_BYTES,
    PASSWORD_MIN_LEN,
    SECURITY_QUESTIONS,
    exceeds_bcrypt_limit,
    hash_answer,
    hash_password,
    normalize_answer,
    verify_answer,
)
from artshop.services.user_store import UserStore

logger = logging.getLogger(__name__)


def list_security_questions() -> list[str]:
    return list(SECURITY_QUESTIONS)


def _require(*values: object) -> None:
    for v in values:
        if v is None or (isinstance(v, str) and not v.strip()):
            raise ValidationFailedError("All fields are required")


class PasswordResetService:
    """Reset passwords and manage recovery questions against an explicit UserStore."""

    def __init__(self, store: UserStore) -> None:
        self.store = store

    def reset_password(
        self,
        email: str,
        security_question: str,
        security_answer: str,
        new_password: str,
    ) -> None:
        """
        Overwrite the password of the account identified by email.

        Checks run in order: input, account exists, recovery configured,
        question matches the registered one, answer verifies. Only then is the
        new password hashed and committed.
        """
        _require(email, security_question, security_answer, new_password)
        if len(new_password) < PASSWORD_MIN_LEN:
            raise ValidationFailedError(
                f"Password must be at least {PASSWORD_MIN_LEN} characters long"
            )
        if exceeds_bcrypt_limit(new_password):
            raise ValidationFailedError(
                f"Password must be at most {BCRYPT_MAX_BYTES} bytes"
            )
        if security_question not in SECURITY_QUESTIONS:
            raise InvalidSecurityQuestionError()

        user = self.store.get_by_email(email)
        if user is None:
            logger.info("Password reset rejected: account not found")
            raise AccountNotFoundError()
        if not user.has_recovery:
            logger.info("Password reset rejected: no recovery set", extra={"user_id": user.id})
            raise NoRecoverySetError()
        if user.security_question != security_question:
            logger.warning("Password reset rejected: wrong question", extra={"user_id": user.id})
            raise WrongQuestionError()
        if not verify_answer(security_answer, user.security_answer):
            logger.warning("Password reset rejected: wrong answer", extra={"user_id": user.id})
            raise WrongAnswerError()

        user.password_hash = hash_password(new_password)
        self.store.save(user)
        logger.info("Password reset successful", extra={"user_id": user.id})

    def update_security_question(
        self,
        user_id: int,
        security_question: str,
        security_answer: str,
    ) -> None:
        """Set or replace the recovery question and (hashed, normalized) answer."""
        _require(user_id, security_question, security_answer)
        if exceeds_bcrypt_limit(normalize_answer(security_answer)):
            raise ValidationFailedError(
                f"Security answer must be at most {BCRYPT_MAX_BYTES} bytes"
            )
        if security_question not in SECURITY_QUESTIONS:
            raise InvalidSecurityQuestionError()

        user = self.store.get_by_id(user_id)
        if user is None:
            raise AccountNotFoundError("No account found with this id")

        user.security_question = security_question
        user.security_answer = hash_answer(security_answer)
        self.store.save(user)
        logger.info("Security question updated", extra={"user_id": user.id})

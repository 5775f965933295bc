"""Domain errors for authentication, password reset and authorization.

Every error carries a stable machine-readable ``code`` and the HTTP status the
API boundary answers with. Handlers in ``artshop.main`` turn them into the
uniform ``{"success": false, "message": ..., "code": ...}`` body.
"""


class ArtshopError(Exception):
    """Base class for errors surfaced to API callers."""

    code = "INTERNAL"
    status_code = 500
    default_message = "Something went wrong."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationFailedError(ArtshopError):
    code = "VALIDATION_ERROR"
    status_code = 400
    default_message = "Missing or invalid input."


class DuplicateEmailError(ArtshopError):
    code = "DUPLICATE_EMAIL"
    status_code = 400
    default_message = "User with this email already exists"


class DuplicateUsernameError(ArtshopError):
    code = "DUPLICATE_USERNAME"
    status_code = 400
    default_message = "User with this username already exists"


class InvalidSecurityQuestionError(ArtshopError):
    code = "INVALID_SECURITY_QUESTION"
    status_code = 400
    default_message = "Invalid security question"


class InvalidCredentialsError(ArtshopError):
    """Login failure; deliberately does not say whether email or password was wrong."""

    code = "INVALID_CREDENTIALS"
    status_code = 400
    default_message = "Invalid email or password"


class AccountNotFoundError(ArtshopError):
    code = "ACCOUNT_NOT_FOUND"
    status_code = 404
    default_message = "No account found with this email address"


class NoRecoverySetError(ArtshopError):
    code = "NO_RECOVERY_SET"
    status_code = 400
    default_message = (
        "This account does not have a security question set. "
        "Please sign up again or contact support."
    )


class WrongQuestionError(ArtshopError):
    code = "WRONG_QUESTION"
    status_code = 400
    default_message = (
        "This is not the security question you chose during registration. "
        "Please select the correct one."
    )


class WrongAnswerError(ArtshopError):
    code = "WRONG_ANSWER"
    status_code = 401
    default_message = "Incorrect security answer"


class NoTokenError(ArtshopError):
    code = "NO_TOKEN"
    status_code = 401
    default_message = "Access denied. No token provided."


class TokenExpiredError(ArtshopError):
    code = "EXPIRED_TOKEN"
    status_code = 401
    default_message = "Token has expired. Please login again."


class InvalidTokenError(ArtshopError):
    code = "INVALID_TOKEN"
    status_code = 401
    default_message = "Invalid token."


class ForbiddenRoleError(ArtshopError):
    code = "FORBIDDEN_ROLE"
    status_code = 403
    default_message = "Access denied. Admin only."


class ForbiddenError(ArtshopError):
    """Authenticated caller acting on an account that is not theirs."""

    code = "FORBIDDEN"
    status_code = 403
    default_message = "Access denied."

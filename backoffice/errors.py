"""Error taxonomy for the back-office core.

Every error carries the HTTP status it maps to and a message that is safe to
show to the caller. The exception handlers in ``backoffice.main`` render them
into the ``{"status": "error", "message": ...}`` envelope.
"""


class BackofficeError(Exception):
    """Base class for all errors raised by the core."""

    status_code: int = 500
    message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


# ---------------------------------------------------------------------------
# Authentication / authorization
# ---------------------------------------------------------------------------


class AuthError(BackofficeError):
    status_code = 401
    message = "Authentication failed"


class MissingCredential(AuthError):
    message = "You are not logged in! Please log in to get access."


class InvalidToken(AuthError):
    message = "Invalid or expired token. Please log in again."


class PrincipalGone(AuthError):
    message = "The user belonging to this token no longer exists."


class IncorrectCredentials(AuthError):
    message = "Incorrect username/email or password"


class IncorrectPassword(AuthError):
    message = "Your current password is wrong."


class AccountInactive(AuthError):
    status_code = 403
    message = "Your account is inactive!"


class AccountBlocked(AuthError):
    status_code = 403
    message = "Your account is blocked!"


class Forbidden(AuthError):
    status_code = 403
    message = "You do not have permission to perform this action."


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class ValidationError(BackofficeError):
    status_code = 400
    message = "Invalid request"


class WeakPassword(ValidationError):
    message = (
        "Password must be minimum eight characters, at least one uppercase letter, "
        "one lowercase letter, one number and one special character."
    )


class BadDateOfBirth(ValidationError):
    message = "Date of birth is invalid"


class IncompleteIdentity(ValidationError):
    message = "Please provide a full identity."


class BadIdentityNumber(ValidationError):
    message = "Identity number must be 9 or 12 characters in length."


class BadRegistrationDate(ValidationError):
    message = "Date of registration is invalid"


class IncompleteAccount(ValidationError):
    message = "Please provide username and email!"


class InvalidEmail(ValidationError):
    message = "Email address is invalid"


class FieldTooLong(ValidationError):
    message = "One or more fields are too long"


class NotAnImage(ValidationError):
    message = "Not an image! Please upload only images."


class UploadTooLarge(ValidationError):
    status_code = 413
    message = "Uploaded file is too large"


class UnknownStatus(ValidationError):
    message = "Status is not valid!"


class InvalidStatusTransition(ValidationError):
    message = "Status change is not allowed"


class DuplicateAccount(ValidationError):
    message = "An account with this username or email already exists"


# ---------------------------------------------------------------------------
# Token / resolution (internal to the access gate)
# ---------------------------------------------------------------------------


class TokenError(BackofficeError):
    status_code = 401
    message = "Invalid token"


class MalformedToken(TokenError):
    pass


class ExpiredToken(TokenError):
    message = "Token has expired"


class ResolveError(BackofficeError):
    status_code = 401
    message = "Principal could not be resolved"


class PrincipalNotFound(ResolveError):
    pass


# ---------------------------------------------------------------------------
# Lookups and storage
# ---------------------------------------------------------------------------


class RecordNotFound(BackofficeError):
    status_code = 404
    message = "Record not found"


class StoreError(BackofficeError):
    status_code = 503
    message = "Storage is unavailable, please retry later"
    retryable = False


class StoreTimeout(StoreError):
    message = "Storage did not respond in time, please retry"
    retryable = True


class StoreUnavailable(StoreError):
    pass

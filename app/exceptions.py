"""Domain errors for the auth workflows.

Each error carries the numeric ``code`` and HTTP ``status_code`` that the API
reports to clients. Workflows that need a different code for the same failure
(e.g. an unknown email on login vs. forgot-password) pass overrides.
"""


class AuthError(Exception):
    """Base class for errors translated into ``{code, message}`` responses."""

    status_code: int = 500
    code: int = -100
    message: str = "An unexpected error occurred"

    def __init__(self, message: str | None = None, *, code: int | None = None, status_code: int | None = None) -> None:
        if message is not None:
            self.message = message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class DuplicateEmailError(AuthError):
    status_code = 400
    code = -2
    message = "A user with this email already exists"


class TeamNotFoundError(AuthError):
    status_code = 404
    code = -3
    message = "The specified team does not exist"


class UserNotFoundError(AuthError):
    status_code = 401
    code = -25
    message = "User does not exist"


class InvalidCredentialsError(AuthError):
    status_code = 401
    code = -5
    message = "Invalid credentials"


class InvalidTokenError(AuthError):
    status_code = 404
    code = -3
    message = "Invalid token"


class ExpiredTokenError(AuthError):
    status_code = 400
    code = -4
    message = "Reset link has expired. Please request a new one."


class InvalidPasswordError(AuthError):
    status_code = 400
    code = -6
    message = "Password must be at most 72 bytes"


class StoreUnavailableError(AuthError):
    status_code = 500
    code = -100
    message = "The service is temporarily unavailable"

class AuthError(Exception):
    """Base for errors surfaced to the caller as ``{success: false, error}``."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AuthError):
    status_code = 400


class AuthenticationError(AuthError):
    status_code = 401


class AuthorizationError(AuthError):
    status_code = 403


INVALID_CREDENTIALS = "Invalid credentials"
NOT_AUTHORIZED = "Not authorized to access this route"
MISSING_CREDENTIALS = "Please provide an email and password"
WRONG_CURRENT_PASSWORD = "Current password is incorrect"
DUPLICATE_EMAIL = "Duplicate field value entered"

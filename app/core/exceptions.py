"""
Domain Exceptions - Business-rule failures raised by the service layer

Services raise these untouched; app.main maps them to HTTP responses.
"""

from typing import Dict, Optional

class AppError(Exception):
    """Base class for errors that carry their own HTTP status"""

    status_code = 500
    error = "Internal Server Error"
    headers: Optional[Dict[str, str]] = None

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

class NotFoundError(AppError):
    """Referenced user or task does not exist"""

    status_code = 404
    error = "Not Found"

class ConflictError(AppError):
    """Uniqueness violation - names the offending field"""

    status_code = 409
    error = "Conflict"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field

class InvalidCredentialsError(AppError):
    """Password did not match (password change)"""

    status_code = 400
    error = "Invalid Credentials"

class AuthenticationFailedError(InvalidCredentialsError):
    """Login failure - same message whether or not the account exists"""

    status_code = 401
    error = "Authentication Failed"

class AuthenticationRequiredError(AppError):
    """No authenticated identity on a route that needs one"""

    status_code = 401
    error = "Unauthorized"
    headers = {"WWW-Authenticate": "Bearer"}

class ForbiddenError(AppError):
    """Role or ownership policy violation"""

    status_code = 403
    error = "Forbidden"

class FieldValidationError(AppError):
    """Malformed field-level input, reported as a field -> message map"""

    status_code = 400
    error = "Validation Error"

    def __init__(self, errors: Dict[str, str]):
        super().__init__("; ".join(f"{field}: {message}" for field, message in errors.items()))
        self.errors = errors

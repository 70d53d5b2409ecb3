"""
Application error taxonomy.

Services raise these; the handlers registered in main.py render them as
{"error": message, "code": code} with the class's HTTP status.
"""

from typing import Optional


class AppError(Exception):
    status_code: int = 500
    code: str = "internal_error"
    message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, code: Optional[str] = None):
        self.message = message or self.message
        self.code = code or self.code
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error": self.message, "code": self.code}


class ValidationError(AppError):
    status_code = 400
    code = "validation_error"
    message = "Invalid request"


class AuthenticationError(AppError):
    status_code = 401
    code = "not_authenticated"
    message = "Not authenticated"


class AuthorizationError(AppError):
    status_code = 403
    code = "forbidden"
    message = "Not allowed"


class NotFoundError(AppError):
    status_code = 404
    code = "not_found"
    message = "Resource not found"


class ConflictError(AppError):
    # Conflicts are reported as 400 to match the rest of the client contract
    status_code = 400
    code = "conflict"
    message = "Conflict"


class InternalError(AppError):
    pass

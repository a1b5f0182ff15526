"""Domain exceptions.

The core raises these and knows nothing about HTTP. The web layer maps
them to status codes in training.web.errors.
"""

from __future__ import annotations


class TrainingError(Exception):
    """Base class for all domain errors."""

    message = "Server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.message
        super().__init__(self.message)


# =============================================================================
# VALIDATION
# =============================================================================


class ValidationError(TrainingError):
    """Raised when input fails validation.

    Carries a list of field-level problems, each {"field", "message"}.
    """

    message = "Validation failed"

    def __init__(self, errors: list[dict[str, str]]):
        self.errors = errors
        super().__init__()


class DuplicateEmailError(TrainingError):
    """Raised when registering an email that already has an account."""

    message = "User already exists"

    def __init__(self, email: str):
        self.email = email
        super().__init__()


# =============================================================================
# AUTHENTICATION
# =============================================================================


class AuthenticationError(TrainingError):
    """Base class for credential and token failures."""


class InvalidCredentialsError(AuthenticationError):
    message = "Invalid credentials"


class MissingTokenError(AuthenticationError):
    message = "Access token required"


class InvalidTokenError(AuthenticationError):
    """Bad signature, malformed or expired token."""

    message = "Invalid token"


# =============================================================================
# LOOKUPS
# =============================================================================


class NotFoundError(TrainingError):
    """Base class for unknown identifiers."""

    message = "Not found"


class UserNotFoundError(NotFoundError):
    def __init__(self, user_id: int):
        self.user_id = user_id
        super().__init__("User not found")


class ProgressNotFoundError(NotFoundError):
    def __init__(self, user_id: int):
        self.user_id = user_id
        super().__init__("Progress not found")


class CourseNotFoundError(NotFoundError):
    def __init__(self, course_id: str):
        self.course_id = course_id
        super().__init__("Module not found")


class StepNotFoundError(NotFoundError):
    def __init__(self, course_id: str, step_id: object):
        self.course_id = course_id
        self.step_id = step_id
        super().__init__("Step not found")


class TrainingModuleNotFoundError(NotFoundError):
    """Raised by the module catalog for an unknown module id."""

    def __init__(self, module_id: str):
        self.module_id = module_id
        super().__init__("Module not found")


class ProgressExistsError(TrainingError):
    """Raised when creating a second progress record for one user."""

    def __init__(self, user_id: int):
        self.user_id = user_id
        super().__init__(f"Progress record already exists for user {user_id}")

"""Domain exceptions raised by the service layer.

Services raise these; the API layer maps each family to an HTTP status.
They all derive from ValueError so callers that only care about "the
request was rejected" can catch that.
"""
from typing import Optional


class InvalidInputError(ValueError):
    """Input failed validation before anything was written."""

    def __init__(self, errors):
        if isinstance(errors, str):
            errors = [errors]
        self.errors = list(errors)
        super().__init__(f"Validation failed: {', '.join(self.errors)}")


class NotFoundError(ValueError):
    pass


class UserNotFoundError(NotFoundError):
    def __init__(self, user_id):
        self.user_id = user_id
        super().__init__("User not found")


class SessionNotFoundError(NotFoundError):
    def __init__(self, session_id):
        self.session_id = session_id
        super().__init__("Session not found")


class WaiverRequestNotFoundError(NotFoundError):
    def __init__(self):
        super().__init__("Waiver request not found")


class StateError(ValueError):
    """The record is in a state that does not allow the operation."""


class NotCheckedInError(StateError):
    def __init__(self, user_id):
        self.user_id = user_id
        super().__init__("Volunteer is not checked in")


class AlreadyCheckedInError(StateError):
    def __init__(self, user_id):
        self.user_id = user_id
        super().__init__("Volunteer is already checked in")


class WaiverRequiredError(StateError):
    def __init__(self, user_id, waiver_state):
        self.user_id = user_id
        self.waiver_state = waiver_state
        super().__init__("A signed waiver is required before checking in")


class WaiverRequestExpiredError(StateError):
    def __init__(self):
        super().__init__("This waiver link has expired or was already used")


class AuthenticationError(Exception):
    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)


class AccountLockedError(AuthenticationError):
    def __init__(self, retry_after_seconds: int, message: Optional[str] = None):
        self.retry_after_seconds = retry_after_seconds
        minutes = max(1, -(-retry_after_seconds // 60))
        super().__init__(
            message or f"Too many failed attempts. Try again in {minutes} minutes."
        )

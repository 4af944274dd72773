"""
Application Errors

Every failure the auth flow can surface to a user is one of these. Views turn
the first three into flashes; SessionError and NotFoundError become HTTP
errors.
"""


class PortalError(Exception):
    """Base class for application errors."""

    default_message = 'Unexpected error'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(PortalError):
    """Submitted form data is invalid."""
    default_message = 'Invalid form data'


class ConflictError(PortalError):
    """A live record already uses this unique value."""
    default_message = 'User already exists'


class AuthError(PortalError):
    """Credentials did not match a user."""
    default_message = 'Invalid username or password'


class SessionError(PortalError):
    """The session store could not be read or written."""
    default_message = 'Session store unavailable'
    status_code = 500


class NotFoundError(PortalError):
    """A referenced record does not exist."""
    default_message = 'Record not found'
    status_code = 401

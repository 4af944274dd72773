"""
Account Services

Registration and credential checks. Views translate the errors raised here
into flashes and redirects.
"""

import logging

from flask import current_app
from werkzeug.security import check_password_hash, generate_password_hash

from portal.errors import AuthError, ConflictError, ValidationError
from portal.services import users

logger = logging.getLogger(__name__)


def validate_credentials(username, password):
    min_length = current_app.config.get('MIN_CREDENTIAL_LENGTH', 5)
    if len(username or '') < min_length or len(password or '') < min_length:
        raise ValidationError(
            f'Username and Password must be {min_length} characters or greater'
        )


def register(username, password):
    """Create a new account.

    Raises:
        ValidationError: username or password too short.
        ConflictError: a live user already has this username.
    """
    validate_credentials(username, password)

    if users.find_by_username(username) is not None:
        raise ConflictError('User already exists')

    hashed_password = generate_password_hash(password, method='pbkdf2:sha256')
    return users.create_user(username, hashed_password)


def authenticate(username, password):
    """Return the user matching both credentials or raise AuthError."""
    user = users.find_by_username(username or '')
    if user is None or not check_password_hash(user.password, password or ''):
        logger.info('Failed login attempt for %r', username)
        raise AuthError('Invalid username or password')
    return user

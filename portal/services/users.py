"""
User Store

Lookups and writes for user records. Soft-deleted users are invisible here.
"""

import logging

from sqlalchemy.exc import IntegrityError

from portal.errors import ConflictError, NotFoundError
from portal.extensions import db
from portal.models import User

logger = logging.getLogger(__name__)


def find_by_username(username):
    return User.live().filter_by(username=username).first()


def get_user(user_id):
    """Return the live user with ``user_id`` or raise NotFoundError."""
    try:
        user_id = int(user_id)
    except (TypeError, ValueError):
        raise NotFoundError(f'Invalid user id {user_id!r}')

    user = User.live().filter_by(id=user_id).first()
    if user is None:
        raise NotFoundError(f'User {user_id} not found')
    return user


def create_user(username, password_hash):
    """Insert a user. Raises ConflictError if the username is taken."""
    user = User(username=username, password=password_hash)
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ConflictError('User already exists')
    logger.info('Created user %s (id=%s)', user.username, user.id)
    return user


def list_users():
    return User.live().order_by(User.id).all()

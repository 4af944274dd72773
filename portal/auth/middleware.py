"""
Current-User Resolver

The same resolver backs the per-request middleware and the on-demand
``get_current_user`` helper. The middleware annotates requests with the
resolved user; it never requires one.
"""

import logging

from flask import abort, g, request

from portal.errors import NotFoundError, SessionError
from portal.extensions import sessions
from portal.services import get_user

logger = logging.getLogger(__name__)

USER_ID_KEY = 'user_id'


def resolve_current_user(session):
    """Return the user referenced by ``session`` or None when anonymous.

    Raises:
        NotFoundError: the session points at a user that no longer exists.
    """
    user_id = session.get(USER_ID_KEY)
    if user_id is None:
        return None
    return get_user(user_id)


def get_current_user(req=None):
    """On-demand resolution for handlers. Never raises."""
    try:
        return resolve_current_user(sessions.get(req or request))
    except SessionError as e:
        logger.error('Error fetching session: %s', e)
    except NotFoundError as e:
        logger.info('User not found: %s', e)
    return None


def load_current_user():
    """before_request hook: attach the session's user to ``g.user``."""
    g.user = None
    try:
        session = sessions.get(request)
    except SessionError:
        abort(500)

    try:
        g.user = resolve_current_user(session)
    except NotFoundError as e:
        logger.warning('User not found: %s', e)
        session.delete(USER_ID_KEY)
        try:
            session.save()
        except SessionError as save_error:
            logger.error('Error saving session: %s', save_error)
        abort(e.status_code)

    if g.user is None:
        logger.debug('Anonymous request to %s', request.path)
    else:
        logger.debug('User found and set: %s', g.user.username)


def init_app(app, login_manager):
    app.before_request(load_current_user)

    @login_manager.request_loader
    def load_user_from_request(req):
        return g.get('user')

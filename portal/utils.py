"""
View helpers shared by the blueprints
"""

import logging

from flask import render_template, request

from portal.errors import SessionError
from portal.extensions import sessions
from portal.sessions import flash, drain

logger = logging.getLogger(__name__)


def flash_message(message, category='info'):
    """Queue a notice on the current request's session."""
    try:
        session = sessions.get(request)
    except SessionError as e:
        logger.error('Error fetching session: %s', e)
        return False
    return flash(session, message, category)


def render_page(template, **context):
    """Render ``template`` with the session's pending flashes drained into it."""
    try:
        context['flashes'] = drain(sessions.get(request))
    except SessionError as e:
        logger.error('Error fetching session: %s', e)
        context['flashes'] = []
    return render_template(template, **context)

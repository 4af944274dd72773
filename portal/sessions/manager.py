"""
Session Manager

Server-side sessions stored in the ``sessions`` table. The browser only holds
an opaque token in a cookie; the session contents never leave the database.

A session is loaded lazily the first time a request asks for it and cached
for the rest of that request. Changes are only persisted by ``save()``.
"""

import copy
import logging
import secrets
from datetime import datetime, timedelta, timezone

from flask import current_app, g, request as current_request
from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError

from portal.errors import SessionError

logger = logging.getLogger(__name__)

_SESSION_KEY = '_portal_session'
_DESTROYED_KEY = '_portal_session_destroyed'


def utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Session:
    """One client's session as seen by the current request."""

    def __init__(self, manager, sid, data=None, expires_at=None, is_new=True):
        self._manager = manager
        self.id = sid
        self._data = data if data is not None else {}
        self.expires_at = expires_at
        self.is_new = is_new
        self.destroyed = False

    def get(self, key, default=None):
        return self._data.get(key, default)

    def set(self, key, value):
        self._data[key] = value

    def delete(self, key):
        self._data.pop(key, None)

    def __contains__(self, key):
        return key in self._data

    @property
    def persisted(self):
        """True once the session exists in the store and is not destroyed."""
        return not self.is_new and not self.destroyed

    def save(self):
        if self.destroyed:
            raise SessionError('Session has been destroyed')
        self._manager.save(self)

    def destroy(self):
        self._manager.destroy(self)

    def regenerate(self):
        self._manager.regenerate(self)

    def __repr__(self):
        state = 'new' if self.is_new else 'stored'
        if self.destroyed:
            state = 'destroyed'
        return f'<Session {self.id[:8]}... {state}>'


class SessionManager:
    """Flask extension handing out server-side sessions per request."""

    def __init__(self, app=None):
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        app.config.setdefault('SESSION_TOKEN_COOKIE', 'session_token')
        app.config.setdefault('SESSION_LIFETIME', timedelta(hours=24))
        app.after_request(self._write_cookie)
        app.teardown_request(self._forget)
        app.extensions['portal_sessions'] = self

    @property
    def cookie_name(self):
        return current_app.config['SESSION_TOKEN_COOKIE']

    @property
    def lifetime(self):
        return current_app.config['SESSION_LIFETIME']

    def get(self, request=None):
        """Return the session for ``request``, creating an empty one if needed.

        Raises:
            SessionError: the backing store could not be read.
        """
        session = g.get(_SESSION_KEY)
        if session is not None:
            return session

        request = request if request is not None else current_request
        token = None
        if not g.get(_DESTROYED_KEY, False):
            token = request.cookies.get(self.cookie_name)

        session = self._load(token) if token else None
        if session is None:
            session = Session(self, secrets.token_urlsafe(32))
        setattr(g, _SESSION_KEY, session)
        return session

    def _load(self, token):
        from portal.extensions import db
        from portal.models import SessionRecord

        try:
            record = db.session.get(SessionRecord, token)
            if record is None:
                return None
            if record.expires_at <= utcnow():
                logger.debug('Session %s... expired at %s', token[:8], record.expires_at)
                db.session.delete(record)
                db.session.commit()
                return None
            data = copy.deepcopy(record.data or {})
            return Session(self, record.id, data, record.expires_at, is_new=False)
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.exception('Error fetching session: %s', e)
            raise SessionError('Could not load session') from e

    def save(self, session):
        """Persist ``session`` and push its expiry forward.

        Raises:
            SessionError: the backing store rejected the write.
        """
        from portal.extensions import db
        from portal.models import SessionRecord

        expires_at = utcnow() + self.lifetime
        try:
            record = db.session.get(SessionRecord, session.id)
            if record is None:
                record = SessionRecord(id=session.id)
                db.session.add(record)
            record.data = copy.deepcopy(session._data)
            record.expires_at = expires_at
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            raise SessionError('Could not save session') from e

        session.is_new = False
        session.expires_at = expires_at

    def destroy(self, session):
        """Delete ``session`` from the store.

        Later calls to ``get`` in the same request return a fresh session
        with a new token instead of the destroyed one.
        """
        from portal.extensions import db
        from portal.models import SessionRecord

        if not session.is_new:
            try:
                db.session.execute(delete(SessionRecord).where(SessionRecord.id == session.id))
                db.session.commit()
            except SQLAlchemyError as e:
                db.session.rollback()
                raise SessionError('Could not destroy session') from e

        session._data.clear()
        session.destroyed = True
        if g.get(_SESSION_KEY) is session:
            g.pop(_SESSION_KEY)
        setattr(g, _DESTROYED_KEY, True)

    def regenerate(self, session):
        """Move ``session`` to a new token and drop the row under the old one.

        The contents are kept in memory; call ``save()`` to store them under
        the new token.
        """
        from portal.extensions import db
        from portal.models import SessionRecord

        if not session.is_new:
            try:
                db.session.execute(delete(SessionRecord).where(SessionRecord.id == session.id))
                db.session.commit()
            except SQLAlchemyError as e:
                db.session.rollback()
                raise SessionError('Could not regenerate session') from e

        session.id = secrets.token_urlsafe(32)
        session.is_new = True

    def purge_expired(self):
        """Remove every expired session row. Returns the number deleted."""
        from portal.extensions import db
        from portal.models import SessionRecord

        try:
            result = db.session.execute(
                delete(SessionRecord).where(SessionRecord.expires_at <= utcnow())
            )
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            raise SessionError('Could not purge sessions') from e
        logger.info('Purged %d expired sessions', result.rowcount)
        return result.rowcount

    def _write_cookie(self, response):
        session = g.get(_SESSION_KEY)
        if session is not None and session.persisted:
            response.set_cookie(
                self.cookie_name, session.id,
                expires=session.expires_at, httponly=True, samesite='Lax',
            )
        elif g.get(_DESTROYED_KEY, False):
            response.delete_cookie(self.cookie_name, httponly=True, samesite='Lax')
        return response

    def _forget(self, exc=None):
        g.pop(_SESSION_KEY, None)
        g.pop(_DESTROYED_KEY, None)

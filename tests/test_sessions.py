from datetime import datetime, timedelta, timezone

import pytest

from portal.errors import SessionError
from portal.extensions import db, sessions
from portal.models import SessionRecord


def _now():
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _cookie(token):
    return {'Cookie': f'session_token={token}'}


def _stored_session(app, **data):
    with app.test_request_context('/'):
        session = sessions.get()
        for key, value in data.items():
            session.set(key, value)
        session.save()
        return session.id


def test_session_is_created_lazily(app):
    with app.test_request_context('/'):
        session = sessions.get()
        assert session.is_new
        assert sessions.get() is session
        assert db.session.query(SessionRecord).count() == 0


def test_save_persists_and_cookie_reloads(app):
    token = _stored_session(app, user_id=7)

    with app.test_request_context('/', headers=_cookie(token)):
        session = sessions.get()
        assert not session.is_new
        assert session.id == token
        assert session.get('user_id') == 7


def test_unsaved_changes_are_lost(app):
    token = _stored_session(app, user_id=7)

    with app.test_request_context('/', headers=_cookie(token)):
        sessions.get().set('user_id', 8)

    with app.test_request_context('/', headers=_cookie(token)):
        assert sessions.get().get('user_id') == 7


def test_unknown_token_starts_new_session(app):
    with app.test_request_context('/', headers=_cookie('no-such-token')):
        session = sessions.get()
        assert session.is_new
        assert session.id != 'no-such-token'


def test_destroy_removes_record_and_hands_out_fresh_session(app):
    token = _stored_session(app, user_id=7)

    with app.test_request_context('/', headers=_cookie(token)):
        session = sessions.get()
        session.destroy()
        assert session.destroyed
        assert db.session.get(SessionRecord, token) is None

        fresh = sessions.get()
        assert fresh is not session
        assert fresh.id != token
        assert fresh.get('user_id') is None

        with pytest.raises(SessionError):
            session.save()


def test_expired_session_is_discarded(app):
    with app.app_context():
        db.session.add(SessionRecord(
            id='stale', data={'user_id': 1},
            expires_at=_now() - timedelta(minutes=1),
        ))
        db.session.commit()

    with app.test_request_context('/', headers=_cookie('stale')):
        session = sessions.get()
        assert session.is_new
        assert session.get('user_id') is None
        assert db.session.get(SessionRecord, 'stale') is None


def test_purge_expired(app):
    live = _stored_session(app, user_id=1)
    with app.app_context():
        db.session.add(SessionRecord(
            id='old', data={}, expires_at=_now() - timedelta(hours=1),
        ))
        db.session.commit()

        assert sessions.purge_expired() == 1
        assert db.session.get(SessionRecord, live) is not None


def test_store_failure_raises_session_error(app):
    token = _stored_session(app, user_id=1)
    with app.app_context():
        SessionRecord.__table__.drop(db.engine)

    with app.test_request_context('/', headers=_cookie(token)):
        with pytest.raises(SessionError):
            sessions.get()

    with app.test_request_context('/'):
        session = sessions.get()
        session.set('user_id', 1)
        with pytest.raises(SessionError):
            session.save()


def test_cookie_issued_only_once_persisted(client):
    client.get('/')
    assert client.get_cookie('session_token') is None

    client.post('/login', data={'username': 'nobody', 'password': 'wrong'})
    cookie = client.get_cookie('session_token')
    assert cookie is not None
    assert cookie.http_only


def test_regenerate_moves_contents_to_new_token(app):
    token = _stored_session(app, user_id=7)

    with app.test_request_context('/', headers=_cookie(token)):
        session = sessions.get()
        session.regenerate()
        assert session.id != token
        assert session.is_new
        assert session.get('user_id') == 7
        assert db.session.get(SessionRecord, token) is None

        session.save()
        assert db.session.get(SessionRecord, session.id).data == {'user_id': 7}

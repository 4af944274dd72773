import pytest

from portal import create_app
from portal.config import TestConfig
from portal.extensions import db
from portal.services import register


@pytest.fixture()
def app():
    app = create_app(TestConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def make_user(app):
    """Register a user directly through the account service, return its id."""
    def _make(username='alice', password='pass1'):
        with app.app_context():
            return register(username, password).id
    return _make


@pytest.fixture()
def login(client):
    def _login(username='alice', password='pass1'):
        return client.post('/login', data={'username': username, 'password': password})
    return _login

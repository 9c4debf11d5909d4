import os
import sys
import pytest

# Ensure the backend root (containing the `scorehub` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from scorehub import create_app, db


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    JWT_SECRET = 'test-jwt-secret-that-is-at-least-32-bytes'
    JWT_EXPIRES_SEC = 3600
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Cheapest cost bcrypt accepts; production uses 10
    BCRYPT_LOG_ROUNDS = 4
    BCRYPT_HANDLE_LONG_PASSWORDS = True
    CORS_ORIGINS = []


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        # Ensure models are imported so tables are created
        import scorehub.models  # noqa: F401
        db.create_all()
    # No context is held open here: test-client requests would otherwise share
    # one app context (and its `g`) across requests
    yield application
    with application.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def app_ctx(flask_app):
    with flask_app.app_context():
        yield


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def accounts(flask_app, app_ctx):
    return flask_app.extensions['accounts']


def register(client, login, password='pw1'):
    res = client.post('/register', json={'login': login, 'password': password})
    assert res.status_code == 201
    return res.get_json()['player_id']

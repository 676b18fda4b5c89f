import os
import sys
import pytest

# Ensure the backend root (containing the `freebee` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from freebee import create_app, db, socketio
from freebee.services.puzzles.sessions import reset_sessions


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    BCRYPT_LOG_ROUNDS = 4
    PUZZLE_SOURCE_URL = 'https://puzzles.example.test/today'
    PUZZLE_FETCH_TIMEOUT_SEC = 5
    MESSAGE_DURATION_MS = 2000
    POINTS_IN_MS = 200
    POINTS_OUT_MS = 400
    MAX_LIVE_SESSIONS = 1000


# "applying" uses all seven letters; center is "a"
PUZZLE_DATA = {
    'letters': 'aplying',
    'center': 'a',
    'wordlist': ['applying', 'gain', 'paying', 'plain', 'align', 'pain'],
    'total': 33,
}

OTHER_PUZZLE_DATA = {
    'letters': 'tenrpay',
    'center': 'e',
    'wordlist': ['repeat', 'enter', 'parent', 'tree', 'entry'],
    'total': 23,
}


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        # Ensure models are imported so tables are created
        import freebee.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()
    reset_sessions()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def puzzle_data():
    return dict(PUZZLE_DATA, wordlist=list(PUZZLE_DATA['wordlist']))


@pytest.fixture()
def other_puzzle_data():
    return dict(OTHER_PUZZLE_DATA, wordlist=list(OTHER_PUZZLE_DATA['wordlist']))


@pytest.fixture()
def loaded_puzzle(client, puzzle_data):
    res = client.post('/api/puzzle', json=puzzle_data)
    assert res.status_code == 201
    return res.get_json()


@pytest.fixture()
def sio_client(flask_app, client):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=client,
        namespace='/ws'
    )
    yield test_client
    try:
        test_client.disconnect(namespace='/ws')
    except Exception:
        pass

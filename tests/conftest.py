import os
import sys
import importlib
import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
os.environ.setdefault('APP_ENV', 'testing')
os.environ.setdefault('KV_BACKEND', 'memory')

from models import db
from app.storage.kv import MemoryStore
import extensions


def load_app(monkeypatch, **env):
    """Build a fresh app after applying ``env`` (a value of None unsets it)."""
    monkeypatch.setenv('APP_ENV', 'testing')
    for key, value in env.items():
        if value is None:
            monkeypatch.delenv(key, raising=False)
        else:
            monkeypatch.setenv(key, value)
    if 'app.config' in sys.modules:
        del sys.modules['app.config']
    config = importlib.import_module('app.config')
    from app import create_app
    return create_app(config.get_config_class())


@pytest.fixture(scope='session')
def app_instance():
    from app import create_app
    app = create_app()
    app.config.update(
        TESTING=True,
        SQLALCHEMY_TRACK_MODIFICATIONS=False
    )
    return app


@pytest.fixture(scope='function')
def app(app_instance):
    with app_instance.app_context():
        db.drop_all()
        db.create_all()
        app_instance.extensions.pop('kv_memory', None)
        extensions.limiter.reset()
        yield app_instance
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    return app.test_client()


@pytest.fixture()
def store():
    return MemoryStore()


@pytest.fixture()
def device():
    return {'X-Device-ID': 'device-test-1'}


def login_stub(client, role='customer', **extra):
    r = client.post('/__auth/login_stub', json={'role': role, **extra})
    assert r.status_code == 200
    return r.get_json()['data']


def bearer(token):
    return {'Authorization': f'Bearer {token}'}

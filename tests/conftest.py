import pytest

from smartbin.auth import AuthService
from smartbin.config import TestingConfig
from smartbin.core.app import create_app, db
from smartbin.ledger import Ledger, MemoryAccountStore, SQLAlchemyAccountStore


@pytest.fixture
def app():
    """Create and configure a test Flask app instance on in-memory SQLite"""
    flask_app = create_app(TestingConfig)

    yield flask_app

    with flask_app.app_context():
        db.session.remove()
        try:
            db.drop_all()
        except Exception:
            pass  # Ignore teardown errors in test environment


@pytest.fixture
def client(app):
    """Create a test client for the app"""
    return app.test_client()


@pytest.fixture
def services(app):
    return app.extensions['smartbin']


@pytest.fixture(params=['memory', 'sql'])
def store(request):
    """Each ledger test runs against both store implementations"""
    if request.param == 'memory':
        yield MemoryAccountStore()
        return

    flask_app = request.getfixturevalue('app')
    with flask_app.app_context():
        yield SQLAlchemyAccountStore(db)
        db.session.remove()


@pytest.fixture
def ledger(store):
    return Ledger(store)


@pytest.fixture
def auth(store):
    return AuthService(store, secret_key=TestingConfig.SECRET_KEY)


@pytest.fixture
def alice(auth):
    """Registered account with zero balances"""
    return auth.register('Alice', 'a@x.com', 'pw')


@pytest.fixture
def register_user(client):
    """Register an account through the API"""
    def _register(name='Alice', email='a@x.com', password='pw'):
        response = client.post('/api/register', json={
            'name': name,
            'email': email,
            'password': password,
        })
        assert response.get_json()['status'] == 'ok'
        return email
    return _register


@pytest.fixture
def auth_headers(client, register_user):
    """Token header for a freshly registered account"""
    def _headers(name='Alice', email='a@x.com', password='pw'):
        register_user(name, email, password)
        response = client.post('/api/login', json={'email': email, 'password': password})
        token = response.get_json()['token']
        return {'x-access-token': token}
    return _headers

import pytest
from flask_jwt_extended import create_access_token

from config import Config
from mantra_tracker import create_app, db
from mantra_tracker.models.user import User


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_ENGINE_OPTIONS = {
        'connect_args': {'check_same_thread': False}
    }
    JWT_SECRET_KEY = 'test-jwt-secret-with-enough-length-for-hs256'


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def _make_user(email, name, password='password123'):
    user = User(email=email, name=name)
    user.set_password(password)
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture
def user(app):
    return _make_user('asha@example.com', 'Asha')


@pytest.fixture
def other_user(app):
    return _make_user('ravi@example.com', 'Ravi')


@pytest.fixture
def auth_headers(user):
    token = create_access_token(identity=str(user.id))
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def other_auth_headers(other_user):
    token = create_access_token(identity=str(other_user.id))
    return {'Authorization': f'Bearer {token}'}

"""Shared pytest fixtures for the API test suite.

Fixture overview
----------------
app           : fresh application on an in-memory SQLite database
client        : Flask test client bound to ``app``
make_user     : factory that inserts a user and returns its id
user / admin  : ids of a regular account and an admin account
auth_headers  : builds an ``Authorization`` header for a user id
user_headers / admin_headers: ready-made headers for the two accounts
"""

import os

os.environ['FLASK_ENV'] = 'testing'

import pytest

from app import create_app
from extensions import db
from models import User
from utils.security import generate_token, hash_password, reset_rate_limits

USER_PASSWORD = 'secret123'


@pytest.fixture
def app():
    app = create_app('testing')
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture(autouse=True)
def _clear_rate_limits():
    reset_rate_limits()
    yield
    reset_rate_limits()


@pytest.fixture
def make_user(app):
    def _make(name='Jane Doe', email='jane@example.com', password=USER_PASSWORD, role='user', **extra):
        with app.app_context():
            user = User(
                name=name,
                email=email,
                password_hash=hash_password(password) if password else None,
                role=role,
                **extra
            )
            db.session.add(user)
            db.session.commit()
            return user.id
    return _make


@pytest.fixture
def user(make_user):
    return make_user()


@pytest.fixture
def admin(make_user):
    return make_user(name='Site Admin', email='admin@example.com', role='admin')


@pytest.fixture
def auth_headers(app):
    def _headers(user_id):
        with app.app_context():
            return {'Authorization': f'Bearer {generate_token(user_id)}'}
    return _headers


@pytest.fixture
def user_headers(user, auth_headers):
    return auth_headers(user)


@pytest.fixture
def admin_headers(admin, auth_headers):
    return auth_headers(admin)


@pytest.fixture
def blog_payload():
    def _payload(**overrides):
        payload = {
            'title': 'Building a 3D Portfolio',
            'content': 'Long form content about three.js scenes.',
            'excerpt': 'How the portfolio scene was built.',
            'categories': ['web', '3d'],
            'tags': ['threejs'],
            'isPublished': True,
        }
        payload.update(overrides)
        return payload
    return _payload


@pytest.fixture
def project_payload():
    def _payload(**overrides):
        payload = {
            'title': 'Portfolio Site',
            'description': 'A full stack portfolio.',
            'shortDescription': 'Full stack portfolio',
            'technologies': ['React', 'Flask'],
            'category': 'web',
        }
        payload.update(overrides)
        return payload
    return _payload


@pytest.fixture
def course_payload():
    def _payload(**overrides):
        payload = {
            'title': 'Intro to Three.js',
            'description': 'Learn 3D on the web.',
            'shortDescription': '3D on the web',
            'thumbnail': 'https://example.com/thumb.png',
            'price': 49,
            'duration': '6 hours',
            'level': 'beginner',
            'category': 'web',
            'isPublished': True,
        }
        payload.update(overrides)
        return payload
    return _payload

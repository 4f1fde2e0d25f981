"""Test configuration and fixtures."""

import os
import tempfile
from pathlib import Path

import pytest

from flask.testing import FlaskClient

from houseplanfiles import create_app
from houseplanfiles.auth import issue_token
from houseplanfiles.extensions import db as _db
from houseplanfiles.models import User


class _IsolatedContextClient(FlaskClient):
    """Run each request in its own app context, as a real server would.

    The ``app`` fixture keeps one app context pushed for the test body;
    without this, Flask reuses it for every request and ``g`` (including
    Flask-Login's cached user) leaks between requests.
    """

    def open(self, *args, **kwargs):
        with self.application.app_context():
            response = super().open(*args, **kwargs)
        # The request committed through its own session; drop the test
        # body's cached rows so later reads see the stored state.
        _db.session.expire_all()
        return response


@pytest.fixture
def app(tmp_path):
    """Create application for testing."""
    db_fd, db_path = tempfile.mkstemp(suffix='.db')
    os.close(db_fd)

    app = create_app('testing', {
        'SQLALCHEMY_DATABASE_URI': f'sqlite:///{db_path}',
        'SQLALCHEMY_ENGINE_OPTIONS': {},
        'UPLOAD_FOLDER': str(tmp_path / 'uploads'),
        'ADMIN_EMAIL': 'admin@example.com',
    })
    app.test_client_class = _IsolatedContextClient

    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()
        _db.engine.dispose()

    Path(db_path).unlink(missing_ok=True)


@pytest.fixture
def client(app):
    """Test client for making requests."""
    return app.test_client()


@pytest.fixture
def runner(app):
    """CLI test runner."""
    return app.test_cli_runner()


@pytest.fixture
def db(app):
    """Database handle bound to the test app."""
    return _db


@pytest.fixture
def make_user(app):
    """Create a user and return ``{id, email, token, headers}``.

    Plain values only: request teardown removes the session, so ORM
    instances would be detached by the time a test inspects them.
    """
    counter = {'n': 0}

    def _make(role=User.ROLE_USER, name=None, email=None, password='secret123', **fields):
        counter['n'] += 1
        email = email or f"{role}{counter['n']}@example.com"
        user = User(name=name or f"{role.title()} {counter['n']}", email=email, role=role, **fields)
        user.set_password(password)
        _db.session.add(user)
        _db.session.commit()
        token = issue_token(user)
        return {
            'id': user.id,
            'email': email,
            'password': password,
            'token': token,
            'headers': {'Authorization': f'Bearer {token}'},
        }

    return _make


@pytest.fixture
def admin(make_user):
    return make_user(User.ROLE_ADMIN, name='Site Admin')


@pytest.fixture
def customer(make_user):
    return make_user(User.ROLE_USER, name='Asha Customer')


@pytest.fixture
def seller(make_user):
    return make_user(User.ROLE_SELLER, name='Ravi Seller', business_name='Ravi Tiles')

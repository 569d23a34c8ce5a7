# tests/conftest.py
"""
Shared fixtures for the pytest test suite.

The app runs against in-memory SQLite. Tables are created and dropped around
every test that asks for db_session, so ids always start at 1.
"""
import os

# Must be set before config is imported
os.environ['FLASK_ENV'] = 'testing'

import pytest
from app import create_app
from extensions import db
from contact_database import Contact


def create_test_contact(**kwargs):
    """
    Helper function to create unsaved contacts with default values.
    """
    defaults = {
        'full_name': 'Ann Lee',
        'email': 'ann@example.com',
        'phone': '555-0100',
        'message': 'Hi'
    }
    defaults.update(kwargs)
    return Contact(**defaults)


@pytest.fixture(scope='module')
def app():
    """
    A Flask application for a test module, with its app context pushed.
    """
    app = create_app(config_name='testing')

    with app.app_context():
        yield app


@pytest.fixture(scope='module')
def client(app):
    """A test client for the Flask application."""
    return app.test_client()


@pytest.fixture(scope='function')
def db_session(app):
    """
    A session on a freshly created schema, torn down after the test.
    """
    db.create_all()

    yield db.session

    db.session.remove()
    db.drop_all()

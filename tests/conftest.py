import pytest
from sqlalchemy import event
from sqlalchemy.engine import Engine

from app import create_app
from config.config import TestingConfig
from extensions import db
from services.context import Actor
from tests.factories import login, make_user


@event.listens_for(Engine, "connect")
def enforce_foreign_keys(dbapi_connection, connection_record):
    # SQLite leaves FK checks off unless asked; production MySQL enforces them
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.drop_all()


@pytest.fixture
def ctx(app):
    """Application context for tests that call the services directly."""
    with app.app_context():
        yield app
        db.session.remove()


@pytest.fixture
def actor(ctx):
    return Actor.from_user(make_user())


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(app, client):
    with app.app_context():
        make_user("admin@example.com", role="admin")
    response = login(client, "admin@example.com")
    assert response.status_code == 200
    return client


@pytest.fixture
def student_client(app, client):
    with app.app_context():
        make_user("learner@example.com", role="student")
    response = login(client, "learner@example.com")
    assert response.status_code == 200
    return client

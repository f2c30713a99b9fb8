"""Shared pytest fixtures: an app on in-memory SQLite with seeded users and fields."""

import base64

import pytest

from metrifi import create_app
from metrifi.extensions import db
from metrifi.models.application_password import ApplicationPassword
from metrifi.models.field import FieldDefinition
from metrifi.models.user import User

EDITOR_PASSWORD = "abcd EFGH ijkl MNOP qrst"
READER_PASSWORD = "zyxw vuts rqpo nmlk jihg"
CONTENT_BLOCKS_KEY = "field_64f0c0ffee123"


def basic_auth(username, password):
    token = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    return {"Authorization": f"Basic {token}"}


def _add_user(username, role, password, is_active=True):
    user = User()
    user.username = username
    user.email = f"{username}@example.test"
    user.role = role
    user.is_active = is_active
    db.session.add(user)
    db.session.flush()

    app_password = ApplicationPassword()
    app_password.user_id = user.id
    app_password.name = "tests"
    app_password.set_password(password)
    db.session.add(app_password)
    return user


@pytest.fixture
def app():
    app = create_app("testing")

    with app.app_context():
        db.create_all()

        _add_user("editor", "editor", EDITOR_PASSWORD)
        _add_user("reader", "subscriber", READER_PASSWORD)
        _add_user("former", "editor", EDITOR_PASSWORD, is_active=False)

        definition = FieldDefinition()
        definition.name = "content_blocks"
        definition.key = CONTENT_BLOCKS_KEY
        definition.label = "Content Blocks"
        db.session.add(definition)
        db.session.commit()

        yield app

        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def editor_headers():
    return basic_auth("editor", EDITOR_PASSWORD)


@pytest.fixture
def reader_headers():
    return basic_auth("reader", READER_PASSWORD)

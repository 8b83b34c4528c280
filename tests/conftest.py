import mongomock
import pytest

from app import create_app
from config import TestingConfig
from models.roles import Role
from models.users import User
from utils import activity_logger
from utils.db import mongo
from utils.seed import ROLES


@pytest.fixture
def db(monkeypatch):
    """A fresh in-memory database behind the global ``mongo`` handle."""
    database = mongomock.MongoClient().db
    monkeypatch.setattr(mongo, "db", database, raising=False)
    yield database
    # let queued audit writes land before the database goes away
    activity_logger.shutdown()


@pytest.fixture
def app(db, monkeypatch):
    application = create_app(TestingConfig)
    # init_app points mongo.db at the configured server; swap the fake back in
    monkeypatch.setattr(mongo, "db", db, raising=False)
    return application


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def roles(db):
    for role in ROLES:
        Role.collection().insert_one(role.to_dict())
    return {role.role_id: role for role in ROLES}


@pytest.fixture
def make_user(db):
    def _make_user(email, role_id="employee", department="it", status="active", **fields):
        user = User(
            email=email,
            password=fields.pop("password", "Secret123"),
            first_name=fields.pop("first_name", email.split("@")[0].title()),
            role_id=role_id,
            department=department,
            position=fields.pop("position", "Engineer"),
            status=status,
            **fields,
        )
        return str(user.save().inserted_id)
    return _make_user


@pytest.fixture
def login(client):
    def _login(user_id):
        with client.session_transaction() as session:
            session["user_id"] = user_id
    return _login

import mongomock
import pytest

from app import create_app
from config import TestingConfig
from seeds.access import seed_access
from utils.db import mongo

ADMIN_LOGIN = {"username": TestingConfig.ADMIN_USERNAME, "password": TestingConfig.ADMIN_PASSWORD}


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    # in-memory database in place of the real server
    mongo.cx = mongomock.MongoClient()
    mongo.db = mongo.cx["school_admin_test"]
    with app.app_context():
        seed_access(app.config)
    yield app


@pytest.fixture
def db(app):
    return mongo.db


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(client):
    response = client.post("/users/login", json=ADMIN_LOGIN)
    assert response.status_code == 200, response.get_json()
    return client


def login(app, username, password):
    """A fresh test client signed in as username."""
    client = app.test_client()
    response = client.post("/users/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.get_json()
    return client


@pytest.fixture
def login_as(app):
    return lambda username, password: login(app, username, password)

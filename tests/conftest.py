import pytest
from fastapi.testclient import TestClient

from exercise_tracker_api.app.core.config import Settings
from exercise_tracker_api.app.core.db import Database
from exercise_tracker_api.app.main import create_app


@pytest.fixture
def settings(tmp_path):
    return Settings(database_url=str(tmp_path / "exercise_tracker_test.db"))


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db(settings):
    database = Database(settings.database_url)
    database.init()
    return database


@pytest.fixture
def joe(client):
    response = client.post("/api/exercise/new-user", data={"username": "joe"})
    assert response.status_code == 200
    return response.json()

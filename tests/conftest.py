"""
Fixtures partagées : une base SQLite temporaire par test, migrée par le vrai démarrage de l'app.
"""
import pytest
from fastapi.testclient import TestClient

from todo_api.core.config import Settings
from todo_api.db.session import build_engine
from todo_api.main import create_app


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        ENV="test",
        DATABASE_URL=f"sqlite:///{tmp_path / 'todo.db'}",
    )


@pytest.fixture
def engine(settings):
    engine = build_engine(settings)
    yield engine
    engine.dispose()


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def create_todo(client):
    """POST un todo puis renvoie son id (relu via GET /todo, l'id n'étant pas renvoyé)."""

    def _create(title="Buy milk", description="2%"):
        resp = client.post("/todo", json={"title": title, "description": description})
        assert resp.status_code == 201
        return max(item["id"] for item in client.get("/todo").json()["data"])

    return _create

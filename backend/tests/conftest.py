import sys
from dataclasses import dataclass
from pathlib import Path

import pytest

# Make the backend importable whatever the working directory is
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from cadastro import create_app
from cadastro.config import BaseConfig
from cadastro.db.session import db


@dataclass
class ConfigForTests(BaseConfig):
    DATABASE_URL: str = "sqlite://"
    CREATE_TABLES: bool = True
    USER_REPO_BACKEND: str = "sqlalchemy"
    SUPABASE_URL: str | None = None
    LOG_LEVEL: str = "WARNING"
    TESTING: bool = True


@pytest.fixture
def app():
    """Fresh app with an empty in-memory database."""
    app = create_app(ConfigForTests)
    yield app
    db.dispose()


@pytest.fixture
def client(app):
    with app.test_client() as c:
        yield c


@pytest.fixture
def session(app):
    with app.app_context():
        yield db.Session()


@pytest.fixture
def ana():
    return {"email": "a@x.com", "name": "Ana", "age": 30}


@pytest.fixture
def make_users(client):
    """Create Ana, Boris and Ceca through the API and return their bodies."""
    def _maker():
        rows = [
            {"email": "ana@example.com", "name": "Ana", "age": 30},
            {"email": "boris@example.com", "name": "Boris", "age": 25},
            {"email": "ceca@example.com", "name": "Ceca", "age": "27"},
        ]
        created = []
        for row in rows:
            resp = client.post("/usuarios", json=row)
            assert resp.status_code == 201
            created.append(resp.get_json())
        return created
    return _maker

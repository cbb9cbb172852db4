"""Shared fixtures: a credential store on a throwaway SQLite file and a client around it."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from core.store import CredentialStore
from database import create_db_engine
from main import create_app
from models.user import User


@pytest.fixture
def store(tmp_path):
    store = CredentialStore(create_db_engine(f"sqlite:///{tmp_path / 'app.db'}"))
    store.initialize()
    yield store
    store.engine.dispose()


@pytest.fixture
def add_user(store):
    """Insert a single user directly and return its id."""

    def _add(username: str, hashed_password: str) -> str:
        with Session(store.engine) as db:
            user = User(username=username, hashed_password=hashed_password)
            db.add(user)
            db.commit()
            return user.id

    return _add


@pytest.fixture
def client(store):
    app = create_app(store, seed_count=50)
    with TestClient(app) as c:
        yield c

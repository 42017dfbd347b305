# tests/conftest.py
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import datetime, timezone
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

import weldreg.models  # noqa: F401
from weldreg.api.deps import get_db
from weldreg.main import app
from weldreg.models import WeldRead
from weldreg.services.welds_client import WeldsApiClient


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(engine):
    def override_get_db():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def api(client):
    return WeldsApiClient(base_url="http://testserver/api", http=client)


@pytest.fixture
def weld_payload():
    def build(**overrides):
        payload = {
            "objectName": "КС Северная",
            "contractor": "СтройМонтаж",
            "customer": "Газпром трансгаз",
            "weldNumber": "12",
            "diameter": 530,
            "thickness1": 8.0,
            "qualityLevel": "B",
        }
        payload.update(overrides)
        return payload

    return build


@pytest.fixture
def make_weld():
    def build(**overrides):
        now = datetime.now(timezone.utc)
        values = {
            "id": uuid4().hex,
            "object_name": "КС Северная",
            "contractor": "СтройМонтаж",
            "customer": "Газпром трансгаз",
            "weld_number": "1",
            "diameter": 530.0,
            "thickness1": 8.0,
            "quality_level": "B",
            "created_at": now,
            "updated_at": now,
        }
        values.update(overrides)
        return WeldRead.model_validate(values)

    return build

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make the edge_api package importable when running tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from fastapi.testclient import TestClient  # noqa: E402

from edge_api.core import config as core_config  # noqa: E402
from edge_api.core.security import hash_password  # noqa: E402
from edge_api.db import models  # noqa: E402
from edge_api.db import session as db_session  # noqa: E402
from edge_api.repositories.sql_repository import SQLRepository  # noqa: E402

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "correct-horse-battery"


def _reset_caches() -> None:
    core_config.get_settings.cache_clear()
    db_session.get_engine.cache_clear()
    db_session._get_sessionmaker.cache_clear()  # type: ignore[attr-defined]


@pytest.fixture()
def temp_db(tmp_path, monkeypatch):
    """Point the app at a temporary SQLite file and tear it down afterwards."""
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    for name in ("ADMIN_EMAILS", "CARD_PROVIDER_CLIENT_ID", "CARD_PROVIDER_CLIENT_SECRET", "CARD_PROVIDER_MODE"):
        monkeypatch.delenv(name, raising=False)
    _reset_caches()

    engine = db_session.get_engine()
    models.Base.metadata.drop_all(bind=engine)
    models.Base.metadata.create_all(bind=engine)

    yield db_file

    models.Base.metadata.drop_all(bind=engine)
    engine.dispose()
    _reset_caches()


@pytest.fixture()
def repo(temp_db):
    return SQLRepository()


@pytest.fixture()
def client(temp_db):
    from edge_api.app import create_app

    with TestClient(create_app()) as test_client:
        yield test_client


@pytest.fixture()
def admin_headers(client, repo):
    repo.upsert_admin_user(ADMIN_EMAIL, hash_password(ADMIN_PASSWORD))
    resp = client.post("/admin-auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['token']}"}


@pytest.fixture()
def card_credentials(monkeypatch):
    monkeypatch.setenv("CARD_PROVIDER_CLIENT_ID", "client-id")
    monkeypatch.setenv("CARD_PROVIDER_CLIENT_SECRET", "client-secret")
    core_config.get_settings.cache_clear()
    yield
    core_config.get_settings.cache_clear()

# unitturn/tests/conftest.py
from uuid import uuid4

import pytest


@pytest.fixture
def db_url(tmp_path, monkeypatch):
    # one throw-away sqlite file per test
    from unitturn.db.session import dispose_engine

    url = f"sqlite:///{tmp_path / 'unit_turns.db'}"
    monkeypatch.setenv("DATABASE_URL", url)
    dispose_engine()
    yield url
    dispose_engine()


@pytest.fixture
def db(db_url):
    from unitturn.db.auto_init import auto_init
    from unitturn.db.session import get_session

    auto_init()
    session = get_session()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def client(db_url):
    from unitturn.app_factory import create_app
    from unitturn.db.auto_init import auto_init

    app = create_app({"TESTING": True, "DATABASE_URL": db_url})
    auto_init()
    return app.test_client()


@pytest.fixture
def property_ids():
    return {"property_id": str(uuid4()), "community_id": str(uuid4())}

from collections.abc import Callable, Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker

from bundle_registry.core.config import Settings, get_settings
from bundle_registry.db.session import build_engine, get_db, init_db
from bundle_registry.main import app

API_KEY = "test-secret"


@pytest.fixture()
def session_factory(tmp_path) -> Iterator[sessionmaker]:
    engine = build_engine(f"sqlite:///{tmp_path / 'bundles.db'}")
    init_db(engine)
    yield sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)
    engine.dispose()


@pytest.fixture()
def make_client(session_factory: sessionmaker) -> Iterator[Callable[[str], TestClient]]:
    def override_get_db() -> Iterator[Session]:
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    def build(api_key: str = "") -> TestClient:
        app.dependency_overrides[get_db] = override_get_db
        app.dependency_overrides[get_settings] = lambda: Settings(api_key=api_key, _env_file=None)
        return TestClient(app)

    yield build
    app.dependency_overrides.clear()


@pytest.fixture()
def client(make_client) -> TestClient:
    return make_client("")


@pytest.fixture()
def secured_client(make_client) -> TestClient:
    return make_client(API_KEY)


@pytest.fixture()
def api_key() -> str:
    return API_KEY

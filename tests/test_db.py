from sqlalchemy import inspect

from bundle_registry.core.config import Settings
from bundle_registry.db.session import build_engine, init_db


def test_init_db_is_idempotent(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'schema.db'}")
    init_db(engine)
    init_db(engine)

    inspector = inspect(engine)
    assert set(inspector.get_table_names()) >= {"bundles", "files"}
    columns = {col["name"] for col in inspector.get_columns("bundles")}
    assert columns == {
        "id",
        "owner_id",
        "owner_name",
        "header_chat_id",
        "header_msg_id",
        "created_at",
        "finalized_at",
        "files_count",
    }
    engine.dispose()


def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("PORT", "8123")
    monkeypatch.setenv("API_KEY", "from-env")

    settings = Settings(_env_file=None)
    assert settings.port == 8123
    assert settings.api_key == "from-env"

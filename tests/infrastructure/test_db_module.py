"""Tests for the database engine helpers."""

from smartbudget.infrastructure import db


def test_get_storage_engine_is_cached_per_url(tmp_path) -> None:
    url = f"sqlite:///{tmp_path / 'a.db'}"
    other_url = f"sqlite:///{tmp_path / 'b.db'}"

    first = db.get_storage_engine(url)
    second = db.get_storage_engine(url)
    other = db.get_storage_engine(other_url)

    assert first is second
    assert other is not first


def test_create_engine_makes_sqlite_parent_directory(tmp_path) -> None:
    target = tmp_path / "deep" / "dir" / "budget.db"

    db._create_engine(f"sqlite:///{target}")

    assert target.parent.is_dir()


def test_adapter_delegates_to_cached_engine(monkeypatch) -> None:
    calls = []

    def _fake_get_storage_engine(url):
        calls.append(url)
        return "engine"

    monkeypatch.setattr(db, "get_storage_engine", _fake_get_storage_engine)

    adapter = db.SqlAlchemyDatabaseEngineAdapter("sqlite://")

    assert adapter.get_storage_engine() == "engine"
    assert calls == ["sqlite://"]

"""
Тесты инициализации и работы хранилища заявок
"""
import pytest
from sqlalchemy import inspect

from service_requests.database import StoreError, SubmissionStore, init_store


def test_init_store_creates_table(store):
    inspector = inspect(store.engine)

    assert "solicitudes" in inspector.get_table_names()
    columns = {c["name"] for c in inspector.get_columns("solicitudes")}
    assert columns == {"id", "nombre", "telefono", "servicio", "fecha_creacion"}


def test_init_store_is_idempotent(database_url):
    first = init_store(database_url)
    first.insert("Ana", "555-1234", "limpieza")
    first.dispose()

    second = init_store(database_url)
    try:
        assert second.insert("Luis", "555-0000", "pintura") == 2
    finally:
        second.dispose()


def test_ping(store):
    store.ping()


def test_insert_assigns_increasing_ids(store, saved_submissions):
    first = store.insert("Ana", "555-1234", "limpieza")
    second = store.insert("Ana", "555-1234", "limpieza")

    assert second > first
    rows = saved_submissions()
    assert [r.id for r in rows] == [first, second]
    assert all(r.created_at is not None for r in rows)


def test_insert_keeps_values_verbatim(store, saved_submissions):
    store.insert("O'Brien; DROP TABLE solicitudes", "", "jardinería")

    row = saved_submissions()[0]
    assert row.name == "O'Brien; DROP TABLE solicitudes"
    assert row.phone == ""
    assert row.service == "jardinería"


def test_insert_failure_raises_store_error(store):
    from service_requests.database import Base

    Base.metadata.drop_all(bind=store.engine)

    with pytest.raises(StoreError):
        store.insert("Ana", "555-1234", "limpieza")


def test_empty_url_is_rejected():
    with pytest.raises(StoreError):
        SubmissionStore("")


def test_unknown_dialect_is_rejected():
    with pytest.raises(StoreError):
        init_store("nosuchdb://user@localhost/db")


def test_unreachable_store_is_rejected(tmp_path):
    url = f"sqlite:///{tmp_path / 'missing' / 'dir' / 'solicitudes.db'}"

    with pytest.raises(StoreError):
        init_store(url)


def test_insert_driver_error_is_wrapped(store, saved_submissions):
    # sqlite3 бросает UnicodeEncodeError, а не ошибку SQLAlchemy
    with pytest.raises(StoreError):
        store.insert("\ud800", "555-1234", "limpieza")

    assert saved_submissions() == []

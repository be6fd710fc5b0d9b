"""
Общие фикстуры для тестов API заявок
"""
import pytest
from fastapi.testclient import TestClient

from service_requests.config import Settings
from service_requests.database import StoreError, init_store
from service_requests.main import create_app
from service_requests.models.submission import Submission


class FakeStore:
    """Подменяемое хранилище: запоминает вызовы, умеет имитировать обрыв связи"""

    def __init__(self, fail: bool = False, error: Exception = None):
        self.fail = fail
        self.error = error
        self.inserted = []
        self.disposed = False

    def insert(self, name, phone, service):
        if self.error is not None:
            raise self.error
        if self.fail:
            raise StoreError("Lost connection to MySQL server at 'db.internal:3306' secret-detail")
        self.inserted.append((name, phone, service))
        return len(self.inserted)

    def dispose(self):
        self.disposed = True


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite:///{tmp_path / 'solicitudes.db'}"


@pytest.fixture
def settings(database_url):
    return Settings(_env_file=None, DATABASE_URL=database_url)


@pytest.fixture
def store(database_url):
    store = init_store(database_url)
    yield store
    store.dispose()


@pytest.fixture
def client(store, settings):
    with TestClient(create_app(store, settings)) as client:
        yield client


@pytest.fixture
def fake_store():
    return FakeStore()


@pytest.fixture
def fake_client(fake_store, settings):
    with TestClient(create_app(fake_store, settings)) as client:
        yield client


@pytest.fixture
def failing_store():
    return FakeStore(fail=True)


@pytest.fixture
def failing_client(failing_store, settings):
    with TestClient(create_app(failing_store, settings)) as client:
        yield client


@pytest.fixture
def saved_submissions(store):
    """Все сохранённые заявки по порядку id"""

    def fetch():
        with store.SessionLocal() as db:
            return db.query(Submission).order_by(Submission.id).all()

    return fetch


@pytest.fixture
def crashing_client(settings):
    """Хранилище бросает исключение, не оборачивая его в StoreError"""
    store = FakeStore(error=RuntimeError("driver exploded secret-detail"))
    with TestClient(create_app(store, settings)) as client:
        yield client

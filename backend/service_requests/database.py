"""
Подключение к базе данных (MySQL, PostgreSQL или SQLite)
"""
import logging

from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker

logger = logging.getLogger(__name__)

# Базовый класс для моделей
Base = declarative_base()


class StoreError(Exception):
    """Ошибка хранилища заявок"""


class SubmissionStore:
    """
    Хранилище заявок: движок, фабрика сессий и несколько операций над ними.
    Создаётся один раз при старте и передаётся в приложение.
    """

    def __init__(self, database_url: str, echo: bool = False):
        if not database_url:
            raise StoreError("Строка подключения к базе данных не задана")

        try:
            if database_url.startswith("sqlite"):
                # SQLite - для локальной разработки и тестов
                self.engine = create_engine(
                    database_url,
                    connect_args={"check_same_thread": False},
                    echo=echo
                )
            else:
                # MySQL / PostgreSQL - для продакшена
                self.engine = create_engine(
                    database_url,
                    pool_pre_ping=True,
                    pool_size=10,
                    max_overflow=20,
                    echo=echo
                )
        except (SQLAlchemyError, ImportError) as e:
            raise StoreError(f"Не удалось создать подключение: {e}") from e

        # Создание фабрики сессий
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def ping(self) -> None:
        """Проверить, что база данных отвечает"""
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, ImportError) as e:
            raise StoreError(f"База данных недоступна: {e}") from e

    def create_schema(self) -> None:
        """Создать таблицы, если их ещё нет"""
        # Импорт регистрирует модели в Base.metadata
        from . import models  # noqa: F401

        try:
            Base.metadata.create_all(bind=self.engine)
        except SQLAlchemyError as e:
            raise StoreError(f"Не удалось создать таблицы: {e}") from e

    def insert(self, name: str, phone: str, service: str) -> int:
        """Сохранить заявку, вернуть её id"""
        from .models.submission import Submission

        db = self.SessionLocal()
        try:
            submission = Submission(name=name, phone=phone, service=service)
            db.add(submission)
            db.commit()
            db.refresh(submission)
            return submission.id
        except Exception as e:
            # Драйвер может бросить не только SQLAlchemyError (например UnicodeEncodeError)
            db.rollback()
            raise StoreError(str(e)) from e
        finally:
            db.close()

    def dispose(self) -> None:
        """Закрыть все соединения пула"""
        self.engine.dispose()


def init_store(database_url: str, echo: bool = False) -> SubmissionStore:
    """
    Инициализация базы данных при старте:
    подключение, ping и создание таблицы заявок.
    Любая ошибка - StoreError, повторных попыток нет.
    """
    store = SubmissionStore(database_url, echo=echo)
    try:
        store.ping()
        logger.info("Подключение к базе данных установлено")

        store.create_schema()
        logger.info("Таблица 'solicitudes' проверена/создана")
    except StoreError:
        store.dispose()
        raise
    return store

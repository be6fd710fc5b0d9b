"""
Главный файл FastAPI приложения
Service Request Intake API - приём заявок на услуги из веб-формы
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from pydantic import ValidationError

from .config import Settings, get_settings
from .database import StoreError, SubmissionStore, init_store
from .logging_config import setup_logging
from .middleware import CORSHeadersMiddleware
from .routes.submissions import router as submissions_router

logger = logging.getLogger(__name__)


def create_app(store: SubmissionStore, settings: Optional[Settings] = None) -> FastAPI:
    """Собрать приложение вокруг уже инициализированного хранилища"""
    if settings is None:
        settings = get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        # Закрыть соединения при остановке
        store.dispose()

    app = FastAPI(
        lifespan=lifespan,
        title="Service Request Intake API",
        description="API для приёма заявок на услуги",
        version="1.0.0",
    )
    app.state.store = store

    app.add_middleware(
        CORSHeadersMiddleware,
        allow_origin=settings.CORS_ALLOW_ORIGIN,
        allow_methods=settings.CORS_ALLOW_METHODS,
        allow_headers=settings.CORS_ALLOW_HEADERS,
    )

    # Подключение роутеров
    app.include_router(submissions_router)

    return app


def build_app() -> FastAPI:
    """
    Запуск: настройки, логирование, подключение к БД.
    Ошибки на этом этапе фатальны - процесс завершается с кодом 1.
    """
    try:
        settings = get_settings()
    except ValidationError as e:
        setup_logging()
        logger.critical("Не задана строка подключения DATABASE_URL/MYSQL_URL: %s", e)
        raise SystemExit(1)

    setup_logging(settings.LOG_LEVEL)

    try:
        store = init_store(settings.DATABASE_URL, echo=settings.DEBUG)
    except StoreError as e:
        logger.critical("Ошибка инициализации базы данных: %s", e)
        raise SystemExit(1)

    return create_app(store, settings)


def run() -> None:
    """Точка входа для консольной команды service-requests"""
    import uvicorn

    app = build_app()
    settings = get_settings()
    logger.info("Сервер слушает порт :%s", settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_config=None)


if __name__ == "__main__":
    run()

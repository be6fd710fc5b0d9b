"""
Скрипт инициализации базы данных
Проверяет подключение и создаёт таблицу заявок
Запустить: python init_db.py
"""
import sys

from service_requests.config import get_settings
from service_requests.database import StoreError, init_store
from service_requests.logging_config import setup_logging


def main() -> int:
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL)

    print("Создание таблиц...")
    try:
        store = init_store(settings.DATABASE_URL, echo=settings.DEBUG)
    except StoreError as e:
        print(f"❌ Ошибка инициализации: {e}")
        return 1

    store.dispose()
    print("Таблицы созданы!")
    print("Теперь можно запустить сервер: service-requests")
    return 0


if __name__ == "__main__":
    sys.exit(main())

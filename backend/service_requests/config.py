"""
Конфигурация приложения
"""
from pydantic_settings import BaseSettings
from pydantic import AliasChoices, Field, field_validator
from functools import lru_cache
from pathlib import Path


class Settings(BaseSettings):
    """Настройки приложения"""

    # Database (Railway инъектирует MYSQL_URL)
    DATABASE_URL: str = Field(validation_alias=AliasChoices("DATABASE_URL", "MYSQL_URL"))

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8080

    # Logging
    LOG_LEVEL: str = "INFO"

    # CORS (одинаковые заголовки для всех ответов)
    CORS_ALLOW_ORIGIN: str = "*"
    CORS_ALLOW_METHODS: str = "POST, GET, OPTIONS, PUT, DELETE"
    CORS_ALLOW_HEADERS: str = (
        "Content-Type, Access-Control-Allow-Headers, Authorization, X-Requested-With"
    )

    # Development
    DEBUG: bool = False

    @field_validator("DATABASE_URL")
    @classmethod
    def normalize_database_url(cls, value: str) -> str:
        """Привести строку подключения к виду, понятному SQLAlchemy"""
        value = value.strip()
        if not value:
            raise ValueError("DATABASE_URL не может быть пустой")
        if value.startswith("mysql://"):
            return "mysql+pymysql://" + value[len("mysql://"):]
        if value.startswith("postgres://"):
            return "postgresql://" + value[len("postgres://"):]
        return value

    class Config:
        # Путь к .env относительно корня проекта
        env_file = Path(__file__).resolve().parent.parent.parent / ".env"
        case_sensitive = True
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Получить настройки приложения (с кешированием)"""
    return Settings()

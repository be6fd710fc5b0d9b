"""
Модель заявки на услугу с сайта
"""
from sqlalchemy import Column, Integer, String, TIMESTAMP
from sqlalchemy.sql import func
from ..database import Base


class Submission(Base):
    """Заявка на услугу из веб-формы"""

    # Имена таблицы и колонок совпадают с уже развёрнутой базой
    __tablename__ = "solicitudes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column("nombre", String(255), nullable=False)
    phone = Column("telefono", String(255), nullable=False)
    service = Column("servicio", String(255), nullable=False)
    created_at = Column("fecha_creacion", TIMESTAMP, server_default=func.now())

    def __repr__(self):
        return f"<Submission {self.name} - {self.service}>"

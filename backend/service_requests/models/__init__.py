"""
SQLAlchemy модели для базы данных
"""
from .submission import Submission

__all__ = [
    "Submission",
]

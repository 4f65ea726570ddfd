from sqlalchemy import Column, Integer, DateTime
from sqlalchemy.sql import func

from app.core.db import Base


class BaseModel(Base):
    """Общие колонки: целочисленный id и временные метки"""
    __abstract__ = True

    id = Column(Integer, primary_key=True, autoincrement=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

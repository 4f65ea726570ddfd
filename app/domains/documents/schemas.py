from pydantic import BaseModel, Field, ConfigDict
from typing import List
from datetime import datetime

from app.domains.permissions.entities import Role


class DocumentBase(BaseModel):
    """Базовая схема документа"""
    # Пустое имя отклоняет сервис (InvalidNameError -> 400)
    name: str = Field(..., max_length=255)
    content: str = Field(default="", max_length=1000000)  # 1MB max content


class DocumentCreate(DocumentBase):
    """Схема для создания документа"""
    pass


class DocumentUpdate(DocumentBase):
    """Схема для обновления документа"""
    pass


class DocumentResponse(DocumentBase):
    """Схема для ответа с данными документа"""
    id: int
    user_id: int
    created_at: datetime
    updated_at: datetime
    
    model_config = ConfigDict(from_attributes=True)


class DocumentSummaryResponse(DocumentResponse):
    """Документ в списке вместе с ролью текущего пользователя"""
    role: Role


class DocumentListResponse(BaseModel):
    """Схема для списка документов"""
    documents: List[DocumentSummaryResponse]
    total: int

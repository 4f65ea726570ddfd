from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List
from datetime import datetime


class ProjectCreate(BaseModel):
    """Схема для создания проекта"""
    name: str = Field(..., max_length=255)
    description: Optional[str] = None


class ProjectUpdate(BaseModel):
    """Схема для частичного обновления проекта"""
    name: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None


class ProjectResponse(BaseModel):
    """Схема для ответа с данными проекта"""
    id: int
    name: str
    description: Optional[str] = None
    owner_id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProjectListResponse(BaseModel):
    projects: List[ProjectResponse]

from pydantic import BaseModel, ConfigDict
from typing import Optional, List, Dict
from datetime import datetime

from app.domains.permissions.entities import Role


class PermissionGrant(BaseModel):
    """Схема для выдачи роли пользователю"""
    user_id: int
    role: Role


class PermissionUpdate(BaseModel):
    """Схема для изменения роли пользователя"""
    user_id: int
    role: Role


class PermissionResponse(BaseModel):
    """Схема для ответа со строкой прав"""
    document_id: int
    user_id: int
    role: Role
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CollaboratorResponse(BaseModel):
    """Схема соавтора документа"""
    id: int
    name: Optional[str] = None
    email: Optional[str] = None
    role: Role


class CollaboratorListResponse(BaseModel):
    """Схема для списка соавторов"""
    users: List[CollaboratorResponse]


class OperationResult(BaseModel):
    """Ответ {"result": {"success": true}}"""
    result: Dict[str, bool] = {"success": True}

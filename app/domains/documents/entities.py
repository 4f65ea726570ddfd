from datetime import datetime, timezone
from typing import Optional


class Document:
    """Сущность документа домена Documents"""
    
    def __init__(
        self,
        id: int,
        name: str,
        content: str = "",
        user_id: Optional[int] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.id = id
        self.name = name
        self.content = content
        self.user_id = user_id
        self.created_at = created_at or datetime.now(timezone.utc)
        self.updated_at = updated_at or datetime.now(timezone.utc)
    
    @staticmethod
    def is_valid_name(name: Optional[str]) -> bool:
        """Имя не может быть пустым или состоять из пробелов"""
        return bool(name and name.strip())
    
    def __eq__(self, other) -> bool:
        if not isinstance(other, Document):
            return False
        return self.id == other.id
    
    def __repr__(self) -> str:
        return f"Document(id={self.id}, name={self.name})"

from datetime import datetime, timezone
from enum import Enum
from typing import Optional


class Capability(str, Enum):
    """Уровень доступа, который требует операция"""
    VIEW = "view"
    EDIT = "edit"
    OWN = "own"

    @property
    def required_role(self) -> "Role":
        """Минимальная роль, дающая эту возможность"""
        return _REQUIRED_ROLES[self]


class Role(str, Enum):
    """Роль пользователя на документе: viewer < editor < owner"""
    VIEWER = "viewer"
    EDITOR = "editor"
    OWNER = "owner"

    @property
    def rank(self) -> int:
        return _ROLE_RANKS[self]

    def at_least(self, other: "Role") -> bool:
        """Роль не ниже указанной в решётке ролей"""
        return self.rank >= other.rank

    def grants(self, capability: Capability) -> bool:
        """Роль даёт возможности своего уровня и всех уровней ниже"""
        return self.at_least(capability.required_role)


_ROLE_RANKS = {
    Role.VIEWER: 1,
    Role.EDITOR: 2,
    Role.OWNER: 3,
}

_REQUIRED_ROLES = {
    Capability.VIEW: Role.VIEWER,
    Capability.EDIT: Role.EDITOR,
    Capability.OWN: Role.OWNER,
}


class DocumentPermission:
    """Роль пользователя на документе, ключ - пара (document_id, user_id)"""

    def __init__(
        self,
        document_id: int,
        user_id: int,
        role: Role,
        created_at: Optional[datetime] = None
    ):
        self.document_id = document_id
        self.user_id = user_id
        self.role = Role(role)
        self.created_at = created_at or datetime.now(timezone.utc)

    def allows(self, capability: Capability) -> bool:
        return self.role.grants(capability)

    def __eq__(self, other) -> bool:
        if not isinstance(other, DocumentPermission):
            return False
        return (
            self.document_id == other.document_id
            and self.user_id == other.user_id
            and self.role == other.role
        )

    def __repr__(self) -> str:
        return (
            f"DocumentPermission(document_id={self.document_id}, "
            f"user_id={self.user_id}, role={self.role.value})"
        )


class Collaborator:
    """Пользователь с доступом к документу"""

    def __init__(
        self,
        user_id: int,
        role: Role,
        name: Optional[str] = None,
        email: Optional[str] = None
    ):
        self.user_id = user_id
        self.role = Role(role)
        self.name = name
        self.email = email

    def __repr__(self) -> str:
        return f"Collaborator(user_id={self.user_id}, role={self.role.value})"

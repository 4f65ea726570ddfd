from app.db.repositories.user_repository import UserRepository
from app.db.repositories.document_repository import DocumentRepository
from app.db.repositories.permission_repository import PermissionRepository
from app.db.repositories.project_repository import ProjectRepository

__all__ = [
    "UserRepository",
    "DocumentRepository",
    "PermissionRepository",
    "ProjectRepository"
]

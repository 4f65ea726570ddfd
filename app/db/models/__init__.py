from app.db.models.user import User
from app.db.models.document import Document
from app.db.models.permission import DocumentPermission
from app.db.models.project import Project

__all__ = [
    "User",
    "Document",
    "DocumentPermission",
    "Project"
]

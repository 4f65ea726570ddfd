from app.domains.permissions.entities import (
    Capability, Role, DocumentPermission, Collaborator
)
from app.domains.permissions.schemas import (
    PermissionGrant, PermissionUpdate, PermissionResponse,
    CollaboratorResponse, CollaboratorListResponse, OperationResult
)

__all__ = [
    "Capability", "Role", "DocumentPermission", "Collaborator",
    "PermissionGrant", "PermissionUpdate", "PermissionResponse",
    "CollaboratorResponse", "CollaboratorListResponse", "OperationResult"
]

from app.domains.projects.entities import Project
from app.domains.projects.schemas import (
    ProjectCreate, ProjectUpdate, ProjectResponse, ProjectListResponse
)

__all__ = [
    "Project",
    "ProjectCreate", "ProjectUpdate", "ProjectResponse", "ProjectListResponse"
]

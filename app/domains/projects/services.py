import logging
from typing import Optional, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import InvalidNameError, ProjectNotFoundError, StoreError
from app.db.repositories.project_repository import ProjectRepository
from app.domains.projects.entities import Project

logger = logging.getLogger(__name__)


class ProjectService:
    """Проекты принадлежат одному владельцу; чужой проект - как несуществующий"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.project_repository = ProjectRepository(session)

    async def create_project(self, owner_id: int, name: str, description: Optional[str] = None) -> Project:
        if not name or not name.strip():
            raise InvalidNameError("Project name cannot be empty")

        try:
            project = await self.project_repository.create(name, description, owner_id)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.exception(f"Failed to create project for user {owner_id}")
            raise StoreError("Failed to create project") from e

        logger.info(f"User {owner_id} created project {project.id}")
        return project

    async def list_projects(self, owner_id: int) -> List[Project]:
        return await self.project_repository.list_by_owner(owner_id)

    async def get_project(self, owner_id: int, project_id: int) -> Project:
        project = await self.project_repository.get_for_owner(project_id, owner_id)
        if project is None:
            raise ProjectNotFoundError(project_id)
        return project

    async def update_project(
        self,
        owner_id: int,
        project_id: int,
        name: Optional[str] = None,
        description: Optional[str] = None
    ) -> Project:
        if name is not None and not name.strip():
            raise InvalidNameError("Project name cannot be empty")

        try:
            project = await self.project_repository.update(project_id, owner_id, name, description)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.exception(f"Failed to update project {project_id}")
            raise StoreError("Failed to update project") from e

        if project is None:
            raise ProjectNotFoundError(project_id)
        return project

    async def delete_project(self, owner_id: int, project_id: int) -> None:
        try:
            deleted = await self.project_repository.delete(project_id, owner_id)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.exception(f"Failed to delete project {project_id}")
            raise StoreError("Failed to delete project") from e

        if not deleted:
            raise ProjectNotFoundError(project_id)

        logger.info(f"User {owner_id} deleted project {project_id}")

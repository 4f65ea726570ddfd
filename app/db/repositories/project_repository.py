from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, and_
from datetime import datetime, timezone

from app.db.models.project import Project as ProjectModel
from app.domains.projects.entities import Project


class ProjectRepository:
    """Репозиторий проектов; доступ только у владельца"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, name: str, description: Optional[str], owner_id: int) -> Project:
        db_project = ProjectModel(
            name=name,
            description=description,
            owner_id=owner_id
        )

        self.session.add(db_project)
        await self.session.flush()
        await self.session.refresh(db_project)
        return self._to_domain(db_project)

    async def get_for_owner(self, project_id: int, owner_id: int) -> Optional[Project]:
        db_project = await self._get_model(project_id, owner_id)
        return self._to_domain(db_project) if db_project else None

    async def list_by_owner(self, owner_id: int) -> List[Project]:
        result = await self.session.execute(
            select(ProjectModel)
            .where(ProjectModel.owner_id == owner_id)
            .order_by(ProjectModel.updated_at.desc(), ProjectModel.id.desc())
        )
        return [self._to_domain(project) for project in result.scalars().all()]

    async def update(
        self,
        project_id: int,
        owner_id: int,
        name: Optional[str] = None,
        description: Optional[str] = None
    ) -> Optional[Project]:
        """Частичное обновление: None означает «не менять»"""
        db_project = await self._get_model(project_id, owner_id)

        if not db_project:
            return None

        if name is not None:
            db_project.name = name
        if description is not None:
            db_project.description = description
        db_project.updated_at = datetime.now(timezone.utc)

        await self.session.flush()
        return self._to_domain(db_project)

    async def delete(self, project_id: int, owner_id: int) -> bool:
        stmt = delete(ProjectModel).where(
            and_(
                ProjectModel.id == project_id,
                ProjectModel.owner_id == owner_id
            )
        ).execution_options(synchronize_session=False)
        result = await self.session.execute(stmt)
        return result.rowcount > 0

    async def _get_model(self, project_id: int, owner_id: int) -> Optional[ProjectModel]:
        result = await self.session.execute(
            select(ProjectModel)
            .where(
                and_(
                    ProjectModel.id == project_id,
                    ProjectModel.owner_id == owner_id
                )
            )
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    def _to_domain(self, db_project: ProjectModel) -> Project:
        return Project(
            id=db_project.id,
            name=db_project.name,
            description=db_project.description,
            owner_id=db_project.owner_id,
            created_at=db_project.created_at,
            updated_at=db_project.updated_at
        )

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.http.auth import get_current_user_id
from app.api.http.errors import to_http_exception
from app.core.db import get_db
from app.core.exceptions import DocShareError
from app.domains.projects.schemas import (
    ProjectCreate, ProjectUpdate, ProjectResponse, ProjectListResponse
)
from app.domains.projects.services import ProjectService

router = APIRouter(prefix="/api/project", tags=["projects"])


@router.get("", response_model=ProjectListResponse)
async def list_projects(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Проекты текущего пользователя"""
    project_service = ProjectService(db)

    projects = await project_service.list_projects(user_id)

    return ProjectListResponse(
        projects=[ProjectResponse.model_validate(project) for project in projects]
    )


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
async def create_project(
    project_data: ProjectCreate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Создание проекта"""
    project_service = ProjectService(db)

    try:
        project = await project_service.create_project(
            user_id, project_data.name, project_data.description
        )
    except DocShareError as e:
        raise to_http_exception(e)

    return ProjectResponse.model_validate(project)


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    project_service = ProjectService(db)

    try:
        project = await project_service.get_project(user_id, project_id)
    except DocShareError as e:
        raise to_http_exception(e)

    return ProjectResponse.model_validate(project)


@router.put("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: int,
    update_data: ProjectUpdate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    project_service = ProjectService(db)

    try:
        project = await project_service.update_project(
            user_id, project_id, update_data.name, update_data.description
        )
    except DocShareError as e:
        raise to_http_exception(e)

    return ProjectResponse.model_validate(project)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(
    project_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    project_service = ProjectService(db)

    try:
        await project_service.delete_project(user_id, project_id)
    except DocShareError as e:
        raise to_http_exception(e)

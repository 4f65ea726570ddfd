from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.http.auth import get_current_user_id
from app.api.http.errors import to_http_exception
from app.core.db import get_db
from app.core.exceptions import DocShareError
from app.domains.documents.schemas import (
    DocumentCreate, DocumentUpdate, DocumentResponse,
    DocumentSummaryResponse, DocumentListResponse
)
from app.domains.documents.services import DocumentService
from app.domains.permissions.schemas import (
    PermissionGrant, PermissionUpdate, PermissionResponse,
    CollaboratorResponse, CollaboratorListResponse, OperationResult
)

router = APIRouter(prefix="/api/document", tags=["documents"])


@router.get("", response_model=DocumentListResponse)
@router.get("/", response_model=DocumentListResponse)
async def list_documents(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Документы, к которым у пользователя есть доступ"""
    document_service = DocumentService(db)

    try:
        rows = await document_service.list_documents(user_id)
    except DocShareError as e:
        raise to_http_exception(e)

    documents = [
        DocumentSummaryResponse(
            id=document.id,
            name=document.name,
            content=document.content,
            user_id=document.user_id,
            created_at=document.created_at,
            updated_at=document.updated_at,
            role=role
        )
        for document, role in rows
    ]

    return DocumentListResponse(documents=documents, total=len(documents))


@router.post("", response_model=DocumentResponse)
@router.post("/", response_model=DocumentResponse)
async def create_document(
    document_data: DocumentCreate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Создание нового документа; создатель становится владельцем"""
    document_service = DocumentService(db)

    try:
        document = await document_service.create_document(
            user_id, document_data.name, document_data.content
        )
    except DocShareError as e:
        raise to_http_exception(e)

    return DocumentResponse.model_validate(document)


@router.get("/{document_id}", response_model=DocumentResponse)
async def get_document(
    document_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Получение документа по id"""
    document_service = DocumentService(db)

    try:
        document = await document_service.get_document(user_id, document_id)
    except DocShareError as e:
        raise to_http_exception(e)

    return DocumentResponse.model_validate(document)


@router.put("/{document_id}", response_model=DocumentResponse)
@router.post("/{document_id}", response_model=DocumentResponse)
async def update_document(
    document_id: int,
    update_data: DocumentUpdate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Обновление документа"""
    document_service = DocumentService(db)

    try:
        document = await document_service.update_document(
            user_id, document_id, update_data.name, update_data.content
        )
    except DocShareError as e:
        raise to_http_exception(e)

    return DocumentResponse.model_validate(document)


# Права доступа к документу
@router.get("/{document_id}/permissions", response_model=CollaboratorListResponse)
async def get_document_users(
    document_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Пользователи с доступом к документу"""
    document_service = DocumentService(db)

    try:
        collaborators = await document_service.list_permissions(user_id, document_id)
    except DocShareError as e:
        raise to_http_exception(e)

    return CollaboratorListResponse(
        users=[
            CollaboratorResponse(
                id=collaborator.user_id,
                name=collaborator.name,
                email=collaborator.email,
                role=collaborator.role
            )
            for collaborator in collaborators
        ]
    )


@router.post("/{document_id}/permissions", response_model=PermissionResponse)
async def grant_document_permission(
    document_id: int,
    payload: PermissionGrant,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Выдача роли пользователю (только владелец)"""
    document_service = DocumentService(db)

    try:
        permission = await document_service.grant_permission(
            user_id, document_id, payload.user_id, payload.role
        )
    except DocShareError as e:
        raise to_http_exception(e)

    return PermissionResponse.model_validate(permission)


@router.put("/{document_id}/permissions", response_model=OperationResult)
async def update_document_permission(
    document_id: int,
    payload: PermissionUpdate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Изменение роли пользователя (только владелец)"""
    document_service = DocumentService(db)

    try:
        await document_service.update_permission(
            user_id, document_id, payload.user_id, payload.role
        )
    except DocShareError as e:
        raise to_http_exception(e)

    return OperationResult()


@router.delete("/{document_id}/permissions/{target_user_id}", response_model=OperationResult)
async def remove_document_permission(
    document_id: int,
    target_user_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Отзыв доступа пользователя (только владелец)"""
    document_service = DocumentService(db)

    try:
        await document_service.revoke_permission(user_id, document_id, target_user_id)
    except DocShareError as e:
        raise to_http_exception(e)

    return OperationResult()

from typing import Optional, List, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, func
from datetime import datetime, timezone

from app.db.models.document import Document as DocumentModel
from app.db.models.permission import DocumentPermission as PermissionModel
from app.domains.documents.entities import Document
from app.domains.permissions.entities import Role


class DocumentRepository:
    """Репозиторий для работы с документами"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, name: str, content: str, user_id: int) -> Document:
        """Создание нового документа (без фиксации транзакции)"""
        db_document = DocumentModel(
            name=name,
            content=content,
            user_id=user_id
        )

        self.session.add(db_document)
        await self.session.flush()
        await self.session.refresh(db_document)
        return self._to_domain(db_document)

    async def get_by_id(self, document_id: int) -> Optional[Document]:
        """Получение документа по id"""
        db_document = await self._get_model(document_id)
        return self._to_domain(db_document) if db_document else None

    async def update(self, document_id: int, name: str, content: str) -> Optional[Document]:
        """Перезапись имени и содержимого одним UPDATE, обновление updated_at"""
        stmt = (
            update(DocumentModel)
            .where(DocumentModel.id == document_id)
            .values(
                name=name,
                content=content,
                updated_at=datetime.now(timezone.utc)
            )
            .execution_options(synchronize_session=False)
        )

        result = await self.session.execute(stmt)
        if result.rowcount == 0:
            return None

        return await self.get_by_id(document_id)

    async def list_for_user(self, user_id: int) -> List[Tuple[Document, Role]]:
        """Документы, на которые у пользователя есть любая роль"""
        result = await self.session.execute(
            select(DocumentModel, PermissionModel.role)
            .join(PermissionModel, PermissionModel.document_id == DocumentModel.id)
            .where(PermissionModel.user_id == user_id)
            .order_by(DocumentModel.updated_at.desc(), DocumentModel.id.desc())
        )
        return [(self._to_domain(db_document), role) for db_document, role in result.all()]

    async def count(self) -> int:
        """Общее количество документов"""
        result = await self.session.execute(select(func.count(DocumentModel.id)))
        return result.scalar()

    async def _get_model(self, document_id: int) -> Optional[DocumentModel]:
        result = await self.session.execute(
            select(DocumentModel)
            .where(DocumentModel.id == document_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    def _to_domain(self, db_document: DocumentModel) -> Document:
        """Преобразование модели БД в доменную сущность"""
        return Document(
            id=db_document.id,
            name=db_document.name,
            content=db_document.content,
            user_id=db_document.user_id,
            created_at=db_document.created_at,
            updated_at=db_document.updated_at
        )

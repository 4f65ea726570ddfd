import logging
from typing import List, Tuple, Union

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import (
    DocumentNotFoundError, InvalidNameError, SelfDowngradeError, StoreError,
    TargetNotFoundError
)
from app.db.repositories.document_repository import DocumentRepository
from app.db.repositories.user_repository import UserRepository
from app.domains.documents.entities import Document
from app.domains.permissions.entities import (
    Capability, Collaborator, DocumentPermission, Role
)
from app.domains.permissions.services import AccessControlService, PermissionService

logger = logging.getLogger(__name__)


class DocumentService:
    """Сервис для работы с документами.

    Каждое чтение и запись проходит через AccessControlService;
    при создании документа создатель получает роль owner.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.document_repository = DocumentRepository(session)
        self.user_repository = UserRepository(session)
        self.access_control = AccessControlService(session)
        self.permission_service = PermissionService(session)

    async def create_document(self, creator_id: int, name: str, content: str = "") -> Document:
        """Создание документа и выдача создателю роли owner.

        Обе записи выполняются в одной транзакции: если выдача роли не
        удалась, документ тоже не сохраняется.
        """
        if not Document.is_valid_name(name):
            raise InvalidNameError("Document name cannot be empty")

        try:
            document = await self.document_repository.create(name, content or "", creator_id)
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.exception(f"Failed to create document for user {creator_id}")
            raise StoreError("Failed to create document") from e

        # grant сам откатывает сессию при ошибке
        await self.permission_service.grant(document.id, creator_id, Role.OWNER, commit=False)

        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.exception(f"Failed to commit document for user {creator_id}")
            raise StoreError("Failed to create document") from e

        logger.info(f"User {creator_id} created document {document.id}")
        return document

    async def get_document(self, actor_id: int, document_id: int) -> Document:
        """Получение документа; нужна возможность view"""
        document = await self._get_existing(document_id)
        await self.access_control.require(actor_id, document_id, Capability.VIEW)
        return document

    async def update_document(
        self,
        actor_id: int,
        document_id: int,
        name: str,
        content: str
    ) -> Document:
        """Перезапись имени и содержимого; нужна возможность edit"""
        if not Document.is_valid_name(name):
            raise InvalidNameError("Document name cannot be empty")

        await self._get_existing(document_id)
        await self.access_control.require(actor_id, document_id, Capability.EDIT)

        try:
            document = await self.document_repository.update(document_id, name, content or "")
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.exception(f"Failed to update document {document_id}")
            raise StoreError("Failed to update document") from e

        if document is None:
            raise DocumentNotFoundError(document_id)

        logger.info(f"User {actor_id} updated document {document_id}")
        return document

    async def list_documents(self, actor_id: int) -> List[Tuple[Document, Role]]:
        """Документы, доступные пользователю, вместе с его ролью"""
        try:
            return await self.document_repository.list_for_user(actor_id)
        except SQLAlchemyError as e:
            logger.exception(f"Failed to list documents for user {actor_id}")
            raise StoreError("Failed to list documents") from e

    async def list_permissions(self, actor_id: int, document_id: int) -> List[Collaborator]:
        """Соавторы документа; достаточно возможности view"""
        await self._get_existing(document_id)
        await self.access_control.require(actor_id, document_id, Capability.VIEW)
        return await self.permission_service.list_collaborators(document_id)

    async def grant_permission(
        self,
        actor_id: int,
        document_id: int,
        grantee_id: int,
        role: Union[Role, str]
    ) -> DocumentPermission:
        """Выдача роли; только для владельца документа"""
        await self._get_existing(document_id)
        await self.access_control.require(actor_id, document_id, Capability.OWN)

        # upsert перезаписал бы роль самого владельца
        if actor_id == grantee_id and Role(role) != Role.OWNER:
            logger.warning(f"User {actor_id} tried to regrant own access on document {document_id}")
            raise SelfDowngradeError(document_id, actor_id)

        if not await self._user_exists(grantee_id):
            raise TargetNotFoundError(document_id, grantee_id, f"User {grantee_id} not found")

        return await self.permission_service.grant(document_id, grantee_id, role)

    async def update_permission(
        self,
        actor_id: int,
        document_id: int,
        target_user_id: int,
        role: Union[Role, str]
    ) -> None:
        """Изменение роли; только для владельца документа"""
        await self._get_existing(document_id)
        await self.access_control.require(actor_id, document_id, Capability.OWN)
        await self.permission_service.update_role(document_id, actor_id, target_user_id, role)

    async def revoke_permission(self, actor_id: int, document_id: int, target_user_id: int) -> None:
        """Отзыв роли; только для владельца документа"""
        await self._get_existing(document_id)
        await self.access_control.require(actor_id, document_id, Capability.OWN)
        await self.permission_service.revoke(document_id, actor_id, target_user_id)

    async def _get_existing(self, document_id: int) -> Document:
        try:
            document = await self.document_repository.get_by_id(document_id)
        except SQLAlchemyError as e:
            logger.exception(f"Failed to load document {document_id}")
            raise StoreError("Failed to load document") from e

        if document is None:
            raise DocumentNotFoundError(document_id)

        return document

    async def _user_exists(self, user_id: int) -> bool:
        try:
            return await self.user_repository.exists(user_id)
        except SQLAlchemyError as e:
            logger.exception(f"Failed to look up user {user_id}")
            raise StoreError("Failed to look up user") from e

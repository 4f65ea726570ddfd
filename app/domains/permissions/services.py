import logging
from typing import Optional, List, Tuple, Union

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import (
    PermissionDeniedError, SelfDowngradeError, SelfRevocationError,
    StoreError, StorePermissionQueryError, TargetNotFoundError
)
from app.db.repositories.permission_repository import PermissionRepository
from app.domains.permissions.entities import (
    Capability, Collaborator, DocumentPermission, Role
)

logger = logging.getLogger(__name__)


class AccessControlService:
    """Решение о доступе к документу по решётке ролей.

    Каждая проверка - свежий запрос к хранилищу, без кэширования.
    Отсутствие строки прав - это отказ, а не ошибка.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.permission_repository = PermissionRepository(session)

    async def get_role(self, actor_id: int, document_id: int) -> Optional[Role]:
        """Роль пользователя на документе или None"""
        try:
            return await self.permission_repository.find_role(document_id, actor_id)
        except SQLAlchemyError as e:
            logger.exception(f"Permission lookup failed for user {actor_id} on document {document_id}")
            raise StorePermissionQueryError("Failed to query document permissions") from e

    async def can_access(
        self,
        actor_id: int,
        document_id: int,
        capability: Union[Capability, str]
    ) -> bool:
        """Есть ли у пользователя роль не ниже требуемой возможностью"""
        capability = Capability(capability)
        role = await self.get_role(actor_id, document_id)

        if role is None:
            return False

        return role.grants(capability)

    async def require(
        self,
        actor_id: int,
        document_id: int,
        capability: Union[Capability, str]
    ) -> None:
        """Как can_access, но при отказе бросает PermissionDeniedError"""
        capability = Capability(capability)
        if not await self.can_access(actor_id, document_id, capability):
            logger.warning(
                f"Denied '{capability.value}' on document {document_id} for user {actor_id}"
            )
            raise PermissionDeniedError(actor_id, document_id, capability.value)


class PermissionService:
    """Выдача, изменение и отзыв ролей.

    Сервис проверяет только инварианты данных: вызывающая сторона
    обязана заранее убедиться, что актор - владелец документа.
    Последняя зафиксированная запись побеждает.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.permission_repository = PermissionRepository(session)

    async def grant(
        self,
        document_id: int,
        grantee_id: int,
        role: Union[Role, str],
        commit: bool = True
    ) -> DocumentPermission:
        """Upsert роли: существующая строка получает новую роль"""
        role = Role(role)

        try:
            permission = await self.permission_repository.insert_or_replace_role(
                document_id, grantee_id, role
            )
            if commit:
                await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.exception(f"Failed to grant {role.value} on document {document_id} to user {grantee_id}")
            raise StoreError("Failed to grant document permission") from e

        if commit:
            logger.info(f"Granted {role.value} on document {document_id} to user {grantee_id}")
        return permission

    async def update_role(
        self,
        document_id: int,
        actor_id: int,
        target_user_id: int,
        new_role: Union[Role, str]
    ) -> None:
        """Изменение роли существующего соавтора"""
        new_role = Role(new_role)

        # Владелец не может понизить сам себя
        if actor_id == target_user_id and new_role != Role.OWNER:
            logger.warning(f"User {actor_id} tried to downgrade own access on document {document_id}")
            raise SelfDowngradeError(document_id, actor_id)

        try:
            updated = await self.permission_repository.update_role(
                document_id, target_user_id, new_role
            )
            if updated:
                await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.exception(f"Failed to update role of user {target_user_id} on document {document_id}")
            raise StoreError("Failed to update document permission") from e

        if not updated:
            raise TargetNotFoundError(document_id, target_user_id)

        logger.info(f"User {target_user_id} is now {new_role.value} on document {document_id}")

    async def revoke(self, document_id: int, actor_id: int, target_user_id: int) -> None:
        """Удаление роли соавтора"""
        # Иначе документ может остаться без владельца
        if actor_id == target_user_id:
            logger.warning(f"User {actor_id} tried to revoke own access on document {document_id}")
            raise SelfRevocationError(document_id, actor_id)

        try:
            deleted = await self.permission_repository.delete_role(document_id, target_user_id)
            if deleted:
                await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.exception(f"Failed to revoke access of user {target_user_id} on document {document_id}")
            raise StoreError("Failed to remove document permission") from e

        if not deleted:
            raise TargetNotFoundError(document_id, target_user_id)

        logger.info(f"Revoked access of user {target_user_id} on document {document_id}")

    async def list_users_with_role(self, document_id: int) -> List[Tuple[int, Role]]:
        """Пары (пользователь, роль); пустой список если прав нет"""
        try:
            return await self.permission_repository.list_users_with_role_for_document(document_id)
        except SQLAlchemyError as e:
            logger.exception(f"Failed to list permissions of document {document_id}")
            raise StorePermissionQueryError("Failed to query document permissions") from e

    async def list_collaborators(self, document_id: int) -> List[Collaborator]:
        """Соавторы документа с именами и email"""
        try:
            return await self.permission_repository.list_collaborators(document_id)
        except SQLAlchemyError as e:
            logger.exception(f"Failed to list collaborators of document {document_id}")
            raise StorePermissionQueryError("Failed to query document permissions") from e

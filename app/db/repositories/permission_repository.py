from typing import Optional, List, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete, and_
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

from app.db.models.permission import DocumentPermission as PermissionModel
from app.db.models.user import User as UserModel
from app.domains.permissions.entities import Role, DocumentPermission, Collaborator


class PermissionRepository:
    """Репозиторий прав доступа к документам.

    Каждый метод выполняет одну атомарную операцию чтения или записи.
    Фиксацию транзакции выполняет сервисный слой.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_role(self, document_id: int, user_id: int) -> Optional[Role]:
        """Роль пользователя на документе или None"""
        result = await self.session.execute(
            select(PermissionModel.role).where(
                and_(
                    PermissionModel.document_id == document_id,
                    PermissionModel.user_id == user_id
                )
            )
        )
        return result.scalar_one_or_none()

    async def get(self, document_id: int, user_id: int) -> Optional[DocumentPermission]:
        """Получение строки прав по ключу (документ, пользователь)"""
        result = await self.session.execute(
            select(PermissionModel)
            .where(
                and_(
                    PermissionModel.document_id == document_id,
                    PermissionModel.user_id == user_id
                )
            )
            .execution_options(populate_existing=True)
        )
        db_permission = result.scalar_one_or_none()
        return self._to_domain(db_permission) if db_permission else None

    async def insert_or_replace_role(
        self,
        document_id: int,
        user_id: int,
        role: Role
    ) -> DocumentPermission:
        """Upsert: вставка строки или замена роли существующей"""
        stmt = self._insert().values(
            document_id=document_id,
            user_id=user_id,
            role=role
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[PermissionModel.document_id, PermissionModel.user_id],
            set_={"role": stmt.excluded.role}
        )
        await self.session.execute(stmt)
        return await self.get(document_id, user_id)

    async def update_role(self, document_id: int, user_id: int, role: Role) -> bool:
        """Замена роли существующей строки; False если строки нет"""
        stmt = (
            update(PermissionModel)
            .where(
                and_(
                    PermissionModel.document_id == document_id,
                    PermissionModel.user_id == user_id
                )
            )
            .values(role=role)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0

    async def delete_role(self, document_id: int, user_id: int) -> bool:
        """Удаление строки прав; False если строки нет"""
        stmt = (
            delete(PermissionModel)
            .where(
                and_(
                    PermissionModel.document_id == document_id,
                    PermissionModel.user_id == user_id
                )
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0

    async def list_users_with_role_for_document(self, document_id: int) -> List[Tuple[int, Role]]:
        """Все пары (пользователь, роль) документа; порядок не гарантируется"""
        result = await self.session.execute(
            select(PermissionModel.user_id, PermissionModel.role)
            .where(PermissionModel.document_id == document_id)
        )
        return [(user_id, role) for user_id, role in result.all()]

    async def list_collaborators(self, document_id: int) -> List[Collaborator]:
        """Соавторы документа вместе с именем и email"""
        result = await self.session.execute(
            select(
                PermissionModel.user_id,
                PermissionModel.role,
                UserModel.name,
                UserModel.email
            )
            .outerjoin(UserModel, UserModel.id == PermissionModel.user_id)
            .where(PermissionModel.document_id == document_id)
            .order_by(PermissionModel.user_id)
        )
        return [
            Collaborator(user_id=user_id, role=role, name=name, email=email)
            for user_id, role, name, email in result.all()
        ]

    def _insert(self):
        """INSERT с поддержкой ON CONFLICT для текущего диалекта"""
        dialect = self.session.get_bind().dialect.name
        if dialect == "sqlite":
            return sqlite_insert(PermissionModel)
        return pg_insert(PermissionModel)

    def _to_domain(self, db_permission: PermissionModel) -> DocumentPermission:
        """Преобразование модели БД в доменную сущность"""
        return DocumentPermission(
            document_id=db_permission.document_id,
            user_id=db_permission.user_id,
            role=db_permission.role,
            created_at=db_permission.created_at
        )

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import (
    EmailAlreadyExistsError, InvalidCredentialsError, StoreError
)
from app.core.security import create_user_token, get_password_hash
from app.db.repositories.user_repository import UserRepository
from app.domains.identity.entities import User
from app.domains.identity.schemas import UserCreate, UserLogin

logger = logging.getLogger(__name__)


class IdentityService:
    """Сервис для регистрации и аутентификации пользователей"""
    
    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repository = UserRepository(session)
    
    async def register_user(self, user_data: UserCreate) -> User:
        """Регистрация нового пользователя"""
        if await self.user_repository.email_exists(user_data.email):
            raise EmailAlreadyExistsError(user_data.email)
        
        try:
            user = await self.user_repository.create(
                name=user_data.name,
                email=user_data.email,
                password_hash=get_password_hash(user_data.password)
            )
            await self.session.commit()
        except IntegrityError as e:
            # Параллельная регистрация с тем же email
            await self.session.rollback()
            raise EmailAlreadyExistsError(user_data.email) from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.exception("Failed to register user")
            raise StoreError("Failed to create user") from e
        
        logger.info(f"Registered user {user.id}")
        return user
    
    async def authenticate_user(self, login_data: UserLogin) -> Optional[User]:
        """Аутентификация пользователя"""
        user = await self.user_repository.get_by_email(login_data.email)
        
        if not user or not user.authenticate(login_data.password):
            return None
        
        return user
    
    async def login_user(self, login_data: UserLogin) -> str:
        """Вход пользователя и создание JWT токена"""
        user = await self.authenticate_user(login_data)
        
        if not user:
            logger.warning(f"Failed login attempt for {login_data.email}")
            raise InvalidCredentialsError()
        
        return create_user_token(user.id)
    
    async def get_user(self, user_id: int) -> Optional[User]:
        """Получение пользователя по id"""
        return await self.user_repository.get_by_id(user_id)

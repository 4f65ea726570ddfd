from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from jose import JWTError, jwt
from passlib.context import CryptContext

from app.core.config import settings

# Контекст для хеширования паролей
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Проверка пароля"""
    # bcrypt имеет ограничение 72 байта
    return pwd_context.verify(plain_password[:72], hashed_password)


def get_password_hash(password: str) -> str:
    """Хеширование пароля"""
    return pwd_context.hash(password[:72])


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """Создание JWT токена доступа"""
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.access_token_expire_minutes)

    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    return encoded_jwt


def create_user_token(user_id: int, expires_delta: Optional[timedelta] = None) -> str:
    """Создание токена для пользователя (sub - числовой идентификатор)"""
    return create_access_token({"sub": str(user_id)}, expires_delta)


def verify_token(token: str) -> Optional[Dict[str, Any]]:
    """Проверка JWT токена и извлечение данных"""
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
        return payload
    except JWTError:
        return None


def resolve_user_id(credential: Optional[str]) -> Optional[int]:
    """Преобразование токена в идентификатор пользователя.

    Возвращает None для отсутствующего, поддельного, просроченного токена
    и для токена без числового ``sub``. Состояния не хранит.
    """
    if not credential:
        return None

    payload = verify_token(credential)
    if not payload:
        return None

    try:
        return int(payload.get("sub"))
    except (TypeError, ValueError):
        return None

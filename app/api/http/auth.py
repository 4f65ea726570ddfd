from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from app.api.http.errors import to_http_exception
from app.core.config import settings
from app.core.db import get_db
from app.core.exceptions import AuthenticationRequiredError, DocShareError
from app.core.security import resolve_user_id
from app.domains.identity.schemas import UserCreate, UserLogin, UserResponse, Token
from app.domains.identity.services import IdentityService

router = APIRouter(prefix="/api/users", tags=["authentication"])
security = HTTPBearer(auto_error=False)


async def get_current_user_id(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> int:
    """Зависимость: идентификатор пользователя из Bearer токена или cookie"""
    if credentials:
        token = credentials.credentials
    else:
        token = request.cookies.get(settings.auth_cookie_name)

    user_id = resolve_user_id(token)

    if user_id is None:
        raise to_http_exception(AuthenticationRequiredError())

    return user_id


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserCreate,
    db: AsyncSession = Depends(get_db)
):
    """Регистрация нового пользователя"""
    identity_service = IdentityService(db)

    try:
        user = await identity_service.register_user(user_data)
    except DocShareError as e:
        raise to_http_exception(e)

    return UserResponse.model_validate(user)


@router.post("/login", response_model=Token)
async def login(
    login_data: UserLogin,
    response: Response,
    db: AsyncSession = Depends(get_db)
):
    """Вход пользователя"""
    identity_service = IdentityService(db)

    try:
        token = await identity_service.login_user(login_data)
    except DocShareError as e:
        raise to_http_exception(e)

    response.set_cookie(
        key=settings.auth_cookie_name,
        value=token,
        httponly=True,
        samesite="lax",
        max_age=settings.access_token_expire_minutes * 60
    )

    return {"access_token": token, "token_type": "bearer"}


@router.post("/logout")
async def logout(response: Response):
    """Выход пользователя"""
    response.delete_cookie(settings.auth_cookie_name)
    return {"message": "Successfully logged out"}


@router.get("/current", response_model=UserResponse)
async def get_current_user_info(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Получение информации о текущем пользователе"""
    identity_service = IdentityService(db)

    user = await identity_service.get_user(user_id)

    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": "USER_NOT_FOUND", "message": "User not found"}
        )

    return UserResponse.model_validate(user)

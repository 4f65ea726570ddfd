from fastapi import HTTPException, status

from app.core.exceptions import (
    DocShareError, ValidationError, NotFoundError, PermissionDeniedError,
    SelfProtectionError, EmailAlreadyExistsError, AuthenticationRequiredError,
    InvalidCredentialsError, StoreError
)

# Порядок важен: первый подходящий класс определяет статус
_STATUS_CODES = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (PermissionDeniedError, status.HTTP_403_FORBIDDEN),
    (SelfProtectionError, status.HTTP_409_CONFLICT),
    (EmailAlreadyExistsError, status.HTTP_409_CONFLICT),
    (AuthenticationRequiredError, status.HTTP_401_UNAUTHORIZED),
    (InvalidCredentialsError, status.HTTP_401_UNAUTHORIZED),
    (StoreError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def to_http_exception(exc: DocShareError) -> HTTPException:
    """Преобразование доменной ошибки в HTTPException"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    for exc_type, code in _STATUS_CODES:
        if isinstance(exc, exc_type):
            status_code = code
            break

    headers = None
    if status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}

    return HTTPException(
        status_code=status_code,
        detail={"error": exc.code, "message": exc.message},
        headers=headers,
    )

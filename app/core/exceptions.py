from typing import Optional


class DocShareError(Exception):
    """Базовое исключение сервиса"""

    code = "DOCSHARE_ERROR"

    def __init__(self, message: str = "Unexpected error"):
        super().__init__(message)
        self.message = message


class ValidationError(DocShareError):
    """Ошибка валидации входных данных"""

    code = "VALIDATION_ERROR"


class InvalidNameError(ValidationError):
    """Пустое имя документа или проекта"""

    code = "INVALID_NAME"

    def __init__(self, message: str = "Name cannot be empty"):
        super().__init__(message)


class NotFoundError(DocShareError):
    code = "NOT_FOUND"


class DocumentNotFoundError(NotFoundError):
    code = "DOCUMENT_NOT_FOUND"

    def __init__(self, document_id: int):
        super().__init__(f"Document {document_id} not found")
        self.document_id = document_id


class TargetNotFoundError(NotFoundError):
    """Нет строки прав для пары (документ, пользователь) или нет такого пользователя"""

    code = "TARGET_NOT_FOUND"

    def __init__(self, document_id: int, user_id: int, message: Optional[str] = None):
        super().__init__(
            message or f"User {user_id} has no permission on document {document_id}"
        )
        self.document_id = document_id
        self.user_id = user_id


class ProjectNotFoundError(NotFoundError):
    code = "PROJECT_NOT_FOUND"

    def __init__(self, project_id: int):
        super().__init__(f"Project {project_id} not found")
        self.project_id = project_id


class PermissionDeniedError(DocShareError):
    code = "PERMISSION_DENIED"

    def __init__(self, actor_id: int, document_id: int, capability: str):
        super().__init__(
            f"User {actor_id} lacks '{capability}' capability on document {document_id}"
        )
        self.actor_id = actor_id
        self.document_id = document_id
        self.capability = capability


class SelfProtectionError(DocShareError):
    """Владелец не может лишить доступа самого себя"""

    code = "SELF_PROTECTION"

    def __init__(self, document_id: int, user_id: int, message: str):
        super().__init__(message)
        self.document_id = document_id
        self.user_id = user_id


class SelfDowngradeError(SelfProtectionError):
    code = "SELF_DOWNGRADE"

    def __init__(self, document_id: int, user_id: int):
        super().__init__(
            document_id, user_id, "Owners cannot downgrade their own access"
        )


class SelfRevocationError(SelfProtectionError):
    code = "SELF_REVOCATION"

    def __init__(self, document_id: int, user_id: int):
        super().__init__(
            document_id, user_id, "Owners cannot remove their own access"
        )


class StoreError(DocShareError):
    """Сбой хранилища; повторные попытки не выполняются"""

    code = "DATABASE_ERROR"


class StorePermissionQueryError(StoreError):
    code = "PERMISSION_QUERY_ERROR"


class AuthenticationRequiredError(DocShareError):
    code = "AUTHENTICATION_REQUIRED"

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


class InvalidCredentialsError(DocShareError):
    code = "LOGIN_FAILED"

    def __init__(self, message: str = "Incorrect email or password"):
        super().__init__(message)


class EmailAlreadyExistsError(DocShareError):
    code = "EMAIL_ALREADY_EXISTS"

    def __init__(self, email: str):
        super().__init__(f"Email {email} already registered")
        self.email = email

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.api.http.health import router as health_router
from app.api.http.auth import router as auth_router
from app.api.http.documents import router as documents_router
from app.api.http.projects import router as projects_router

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)

app = FastAPI(
    title="DocShare",
    description="Совместный доступ к документам с ролями viewer, editor и owner",
    version="1.0.0"
)

# Настройка CORS для работы с frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", "Accept", "Authorization", "X-Requested-With"],
)

# Подключаем роутеры
app.include_router(health_router)
app.include_router(auth_router)
app.include_router(documents_router)
app.include_router(projects_router)


@app.get("/")
async def root():
    """Корневой эндпоинт"""
    return {
        "message": "DocShare API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health"
    }

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from textstore.api.http import health_router, auth_router, entries_router
from textstore.core.db import create_tables
from textstore.core.logging import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    await create_tables()
    logger.info("TextStore API started")
    yield


app = FastAPI(
    title="TextStore",
    description="Хранилище личных текстовых записей",
    version="1.0.0",
    lifespan=lifespan
)

# Настройка CORS для работы с frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Подключаем роутеры
app.include_router(health_router)
app.include_router(auth_router)
app.include_router(entries_router)


@app.get("/")
async def root():
    """Корневой эндпоинт"""
    return {
        "message": "TextStore API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health"
    }

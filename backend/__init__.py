"""
Backend: FastAPI-сервис с тремя фиксированными эндпоинтами.

Запуск:
    pipeline-backend
"""
from backend.api import create_app

__all__ = ["create_app"]

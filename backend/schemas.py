from typing import Literal
from pydantic import BaseModel, Field


class HealthStatus(BaseModel):
    """
    Ответ проверки активности сервиса.
    """

    status: Literal["OK"] = "OK"
    message: str = Field(..., description="Человекочитаемое состояние сервиса")


class User(BaseModel):
    """
    Пользователь из фиксированного списка.
    """

    id: int
    name: str


class AppInfo(BaseModel):
    """
    Метаданные приложения.
    timestamp генерируется в момент запроса.
    """

    app: str
    version: str
    timestamp: str = Field(..., description="Текущее время в формате ISO-8601 (UTC)")

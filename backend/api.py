import uvicorn
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import List, Optional
from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from app_logging import get_logger, init_logging
from backend.config import BackendSettings
from backend.schemas import AppInfo, HealthStatus, User


logger = get_logger(__name__)

API_PREFIX = "/api"

USERS = (
    User(id=1, name="John"),
    User(id=2, name="Jane"),
)

router = APIRouter()


def utc_timestamp() -> str:
    """
    Текущее время в ISO-8601 с миллисекундами и суффиксом Z.
    """

    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@router.get("/health", response_model=HealthStatus)
def health_check() -> HealthStatus:
    """
    Проверка активности сервиса.
    """

    return HealthStatus(status="OK", message="Backend is running")


@router.get("/users", response_model=List[User])
def list_users() -> List[User]:
    """
    Фиксированный список пользователей.
    """

    return list(USERS)


@router.get("/info", response_model=AppInfo)
def app_info(request: Request) -> AppInfo:
    """
    Название и версия приложения с текущим временем.
    """

    settings: BackendSettings = request.app.state.settings
    return AppInfo(
        app=settings.app_name,
        version=settings.version,
        timestamp=utc_timestamp(),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: BackendSettings = app.state.settings
    logger.info("Starting API %s %s", settings.app_name, settings.version)

    yield

    logger.info("Stopping API...")


def create_app(settings: Optional[BackendSettings] = None) -> FastAPI:
    """
    Собирает приложение.

    Маршруты доступны и без префикса, и под /api,
    который использует фронтенд.
    """

    settings = settings or BackendSettings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.version,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Запросы разрешены с любого источника
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)
    app.include_router(router, prefix=API_PREFIX)

    return app


def main() -> None:
    settings = BackendSettings.from_env()
    init_logging(settings.log_level)

    logger.info("Server is running on port %d", settings.port)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()

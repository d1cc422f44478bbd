import os
from dataclasses import dataclass
from typing import Optional
from dotenv import load_dotenv

from backend.config import DEFAULT_PORT, read_float, read_port


def resolve_base_url(override: Optional[str], hostname: str, port: int = DEFAULT_PORT) -> str:
    """
    Возвращает адрес backend.

    Явно заданный адрес имеет приоритет, иначе используется хост
    страницы с фиксированным портом backend. Так фронтенд работает
    с любого устройства (localhost, IP в локальной сети и т.д.).
    """

    if override and override.strip():
        return override.strip().rstrip("/")

    return f"http://{hostname}:{port}"


@dataclass(frozen=True)
class FrontendSettings:
    api_url: Optional[str] = None
    backend_host: str = "localhost"
    backend_port: int = DEFAULT_PORT
    host: str = "0.0.0.0"
    port: int = 5173
    request_timeout: float = 10.0
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "FrontendSettings":
        load_dotenv(env_file)

        return cls(
            api_url=os.environ.get("API_URL") or None,
            backend_host=os.environ.get("BACKEND_HOST") or cls.backend_host,
            backend_port=read_port("BACKEND_PORT", DEFAULT_PORT),
            host=os.environ.get("FRONTEND_HOST") or cls.host,
            port=read_port("FRONTEND_PORT", cls.port),
            request_timeout=read_float("REQUEST_TIMEOUT", cls.request_timeout),
            log_level=os.environ.get("LOG_LEVEL") or cls.log_level,
        )

    def base_url_for(self, hostname: Optional[str] = None) -> str:
        return resolve_base_url(self.api_url, hostname or self.backend_host, self.backend_port)

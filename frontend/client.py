from typing import Any, List, Optional
import requests
from pydantic import TypeAdapter

from app_logging import get_logger
from backend.schemas import AppInfo, HealthStatus, User
from frontend.exceptions import BackendUnavailableError


logger = get_logger(__name__)

_users_adapter = TypeAdapter(List[User])


class BackendClient:
    """
    HTTP-клиент к backend.

    Любая ошибка запроса превращается в BackendUnavailableError,
    повторных попыток нет.
    """

    def __init__(self,
                 base_url: str,
                 session: Optional[Any] = None,
                 timeout: float = 10.0):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _get_json(self, path: str) -> Any:
        url = f"{self.base_url}{path}"
        logger.debug("GET %s", url)

        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except (requests.RequestException, ValueError) as e:
            logger.warning("Request to %s failed: %s", url, e)
            raise BackendUnavailableError(url, str(e)) from e

    def _parse(self, path: str, validate):
        data = self._get_json(path)
        try:
            return validate(data)
        except ValueError as e:
            url = f"{self.base_url}{path}"
            logger.warning("Unexpected payload from %s: %s", url, e)
            raise BackendUnavailableError(url, "unexpected payload") from e

    def health(self) -> HealthStatus:
        return self._parse("/api/health", HealthStatus.model_validate)

    def users(self) -> List[User]:
        return self._parse("/api/users", _users_adapter.validate_python)

    def info(self) -> AppInfo:
        return self._parse("/api/info", AppInfo.model_validate)

    def close(self) -> None:
        self.session.close()

import pytest
import requests
from fastapi.testclient import TestClient

from backend.api import create_app as create_backend
from backend.config import BackendSettings
from frontend.client import BackendClient


ENV_VARS = (
    "PORT", "HOST", "APP_NAME", "APP_VERSION", "LOG_LEVEL", "JSON_LOGS",
    "API_URL", "BACKEND_HOST", "BACKEND_PORT", "FRONTEND_HOST", "FRONTEND_PORT", "REQUEST_TIMEOUT",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def backend_app():
    return create_backend(BackendSettings())


@pytest.fixture()
def api(backend_app):
    with TestClient(backend_app) as client:
        yield client


@pytest.fixture()
def live_client_factory(backend_app):
    """
    Клиент frontend, который ходит в backend через TestClient.
    """

    def factory(base_url: str) -> BackendClient:
        return BackendClient(base_url, session=TestClient(backend_app, base_url=base_url))

    return factory


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        self._payload = payload
        self._text = text

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")

    def json(self):
        if self._text is not None:
            raise requests.JSONDecodeError("Expecting value", self._text, 0)
        return self._payload


class FakeSession:
    """
    Подменяет requests.Session: отдаёт заготовленный ответ
    или бросает заготовленное исключение.
    """

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []
        self.closed = False

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        if self.error is not None:
            raise self.error
        return self.response

    def close(self):
        self.closed = True


@pytest.fixture()
def unreachable_client_factory():
    sessions = []

    def factory(base_url: str) -> BackendClient:
        session = FakeSession(error=requests.ConnectionError("Connection refused"))
        sessions.append(session)
        return BackendClient(base_url, session=session)

    factory.sessions = sessions
    return factory

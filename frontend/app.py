"""
Frontend Application Server.

Страница с двумя кнопками: проверка backend и загрузка пользователей.
Состояние живёт только в пределах одного запроса, перезагрузка
страницы возвращает её в исходный вид.
"""

from typing import Callable, Optional
from flask import Flask, render_template

from app_logging import get_logger, init_logging
from frontend.client import BackendClient
from frontend.config import FrontendSettings
from frontend.render import view_model
from frontend.state import Action, Dashboard, Idle, ViewState


logger = get_logger(__name__)

ClientFactory = Callable[[str], BackendClient]


def create_app(settings: Optional[FrontendSettings] = None,
               client_factory: Optional[ClientFactory] = None) -> Flask:
    """
    Собирает Flask-приложение.

    client_factory получает адрес backend и возвращает клиента;
    в тестах его подменяют.
    """

    settings = settings or FrontendSettings()

    if client_factory is None:
        def client_factory(base_url: str) -> BackendClient:
            return BackendClient(base_url, timeout=settings.request_timeout)

    # Flask сам ищет шаблоны в 'templates' и статику в 'static'.
    app = Flask(__name__)
    app.config["FRONTEND_SETTINGS"] = settings

    # Адрес backend вычисляется один раз при старте и не зависит
    # от заголовков входящего запроса
    base_url = settings.base_url_for()
    app.config["BACKEND_URL"] = base_url
    logger.info("Using backend at %s", base_url)

    def page(state: ViewState):
        return render_template("index.html", **view_model(state))

    def run_action(action: Action):
        client = client_factory(base_url)
        try:
            state = Dashboard(client).run(action)
        finally:
            client.close()

        return page(state)

    @app.route("/")
    def index() -> str:
        """
        Главная страница (Single Page Application Entry Point).
        """

        return page(Idle())

    @app.route("/actions/health", methods=["POST"])
    def check_health() -> str:
        return run_action(Action.HEALTH)

    @app.route("/actions/users", methods=["POST"])
    def get_users() -> str:
        return run_action(Action.USERS)

    return app


def main() -> None:
    settings = FrontendSettings.from_env()
    init_logging(settings.log_level)

    logger.info("Running at http://%s:%d", settings.host, settings.port)
    create_app(settings).run(host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()

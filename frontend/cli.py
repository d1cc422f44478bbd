"""
Терминальный клиент.

Те же действия, что и на странице, но в цикле ввода.
"""

from typing import Callable

from app_logging import get_logger, init_logging
from frontend.client import BackendClient
from frontend.config import FrontendSettings
from frontend.exceptions import BackendUnavailableError
from frontend.render import render_text
from frontend.state import Dashboard, Loading, ViewState


logger = get_logger(__name__)

EXIT_COMMANDS = ("exit", "quit")
HELP_TEXT = "Commands: health, users, info, exit"


def run_cli(dashboard: Dashboard,
            input_fn: Callable[[str], str] = input,
            output: Callable[[str], None] = print) -> None:
    def show_loading(state: ViewState) -> None:
        if isinstance(state, Loading):
            output(render_text(state))

    # Индикатор загрузки печатается до результата
    dashboard.subscribe(show_loading)
    output(HELP_TEXT)

    while True:
        try:
            command = input_fn("backend >> ").strip().lower()
        except EOFError:
            break

        if command in EXIT_COMMANDS:
            break

        if not command:
            continue

        if command == "health":
            output(render_text(dashboard.check_health()))
        elif command == "users":
            output(render_text(dashboard.get_users()))
        elif command == "info":
            try:
                info = dashboard.client.info()
            except BackendUnavailableError:
                output("Failed to fetch info")
            else:
                output(f"{info.app} {info.version} ({info.timestamp})")
        else:
            output(f"Unknown command: {command}. {HELP_TEXT}")


def main() -> None:
    settings = FrontendSettings.from_env()
    init_logging(settings.log_level)

    # Адрес вычисляется один раз при старте
    base_url = settings.base_url_for()
    logger.info("Using backend at %s", base_url)

    client = BackendClient(base_url, timeout=settings.request_timeout)
    try:
        run_cli(Dashboard(client))
    except KeyboardInterrupt:
        print("\nForce interruption")
    finally:
        client.close()


if __name__ == "__main__":
    main()

import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional, Union

from app_logging import get_logger
from frontend.client import BackendClient
from frontend.exceptions import BackendUnavailableError


logger = get_logger(__name__)


class Action(str, Enum):
    HEALTH = "health"
    USERS = "users"


ERROR_MESSAGES = {
    Action.HEALTH: "Failed to connect to backend",
    Action.USERS: "Failed to fetch users",
}


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Loading:
    action: Action


@dataclass(frozen=True)
class Success:
    action: Action
    payload: Any


@dataclass(frozen=True)
class Failure:
    action: Action
    message: str


# Состояние хранит не больше одного payload, поэтому блоки
# health и users не могут отображаться одновременно.
ViewState = Union[Idle, Loading, Success, Failure]

Observer = Callable[[ViewState], None]


class Ticket:
    """
    Дескриптор запущенного действия.

    Результат применяется только пока тикет актуален: следующий
    begin() или явный cancel() делает его устаревшим.
    """

    def __init__(self, dashboard: "Dashboard", action: Action, seq: int):
        self._dashboard = dashboard
        self.action = action
        self.seq = seq
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def _mark_cancelled(self) -> None:
        self._cancelled = True

    def cancel(self) -> None:
        self._dashboard._cancel(self)

    def __repr__(self) -> str:
        return f"Ticket({self.action.value}, seq={self.seq}, cancelled={self._cancelled})"


class Dashboard:
    """
    Состояние интерфейса и два действия: проверка health и загрузка users.
    """

    def __init__(self, client: BackendClient):
        self.client = client
        self._state: ViewState = Idle()
        self._lock = threading.RLock()
        self._seq = 0
        self._current: Optional[Ticket] = None
        self._observers: List[Observer] = []

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def loading(self) -> bool:
        return isinstance(self._state, Loading)

    def subscribe(self, observer: Observer) -> None:
        self._observers.append(observer)

    def _set_state(self, state: ViewState) -> None:
        self._state = state
        for observer in self._observers:
            observer(state)

    def begin(self, action: Action) -> Ticket:
        with self._lock:
            if self._current is not None:
                self._current._mark_cancelled()

            self._seq += 1
            ticket = Ticket(self, action, self._seq)
            self._current = ticket
            self._set_state(Loading(action))

            return ticket

    def _finish(self, ticket: Ticket, state: ViewState) -> bool:
        with self._lock:
            if ticket.cancelled or ticket is not self._current:
                logger.info("Dropping stale result of %r", ticket)
                return False

            self._current = None
            self._set_state(state)
            return True

    def complete(self, ticket: Ticket, payload: Any) -> bool:
        return self._finish(ticket, Success(ticket.action, payload))

    def fail(self, ticket: Ticket) -> bool:
        return self._finish(ticket, Failure(ticket.action, ERROR_MESSAGES[ticket.action]))

    def _cancel(self, ticket: Ticket) -> None:
        with self._lock:
            ticket._mark_cancelled()
            if ticket is self._current:
                self._current = None
                self._set_state(Idle())

    def _fetch(self, action: Action) -> Any:
        if action is Action.HEALTH:
            return self.client.health()
        return self.client.users()

    def run(self, action: Action) -> ViewState:
        """
        Выполняет действие целиком: Loading -> Success | Failure.
        """

        ticket = self.begin(action)
        try:
            payload = self._fetch(action)
        except BackendUnavailableError:
            self.fail(ticket)
        else:
            self.complete(ticket, payload)
        finally:
            # Loading не должен остаться и при непредвиденной ошибке
            with self._lock:
                if ticket is self._current:
                    self._current = None
                    self._set_state(Idle())

        return self._state

    def check_health(self) -> ViewState:
        return self.run(Action.HEALTH)

    def get_users(self) -> ViewState:
        return self.run(Action.USERS)

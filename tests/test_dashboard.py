import pytest

from backend.schemas import HealthStatus, User
from frontend.client import BackendClient
from frontend.state import Action, Dashboard, Failure, Idle, Loading, Success

from conftest import FakeSession


class StubClient:
    def __init__(self, health=None, users=None, error=None):
        self._health = health
        self._users = users
        self._error = error

    def health(self):
        if self._error:
            raise self._error
        return self._health

    def users(self):
        if self._error:
            raise self._error
        return self._users


HEALTH = HealthStatus(status="OK", message="Backend is running")
USERS = [User(id=1, name="John"), User(id=2, name="Jane")]


def _recorded(dashboard):
    states = []
    dashboard.subscribe(states.append)
    return states


def test_starts_idle():
    dashboard = Dashboard(StubClient())

    assert dashboard.state == Idle()
    assert not dashboard.loading


def test_check_health_goes_through_loading(live_client_factory):
    dashboard = Dashboard(live_client_factory("http://testserver"))
    states = _recorded(dashboard)

    dashboard.check_health()

    assert states == [Loading(Action.HEALTH), Success(Action.HEALTH, HEALTH)]
    assert not dashboard.loading


def test_get_users_replaces_health_payload():
    dashboard = Dashboard(StubClient(health=HEALTH, users=USERS))

    dashboard.check_health()
    state = dashboard.get_users()

    assert state == Success(Action.USERS, USERS)


def test_unexpected_error_propagates_and_ends_loading():
    client = BackendClient("http://127.0.0.1:1", session=FakeSession(error=ConnectionError()))
    dashboard = Dashboard(client)

    # ConnectionError из builtins не является ошибкой requests и не перехватывается
    with pytest.raises(ConnectionError):
        dashboard.check_health()

    assert dashboard.state == Idle()
    assert not dashboard.loading


@pytest.mark.parametrize(
    "action, message",
    [
        (Action.HEALTH, "Failed to connect to backend"),
        (Action.USERS, "Failed to fetch users"),
    ],
)
def test_unreachable_backend_shows_error(unreachable_client_factory, action, message):
    dashboard = Dashboard(unreachable_client_factory("http://127.0.0.1:1"))
    states = _recorded(dashboard)

    state = dashboard.run(action)

    assert state == Failure(action, message)
    assert states == [Loading(action), Failure(action, message)]
    assert not dashboard.loading


def test_new_attempt_clears_previous_error(unreachable_client_factory):
    dashboard = Dashboard(unreachable_client_factory("http://127.0.0.1:1"))
    dashboard.check_health()
    states = _recorded(dashboard)

    dashboard.client = StubClient(users=USERS)
    dashboard.get_users()

    assert states[0] == Loading(Action.USERS)
    assert dashboard.state == Success(Action.USERS, USERS)


def test_stale_result_does_not_overwrite_newer_one():
    dashboard = Dashboard(StubClient())

    first = dashboard.begin(Action.HEALTH)
    second = dashboard.begin(Action.USERS)

    assert first.cancelled
    assert dashboard.complete(second, USERS)
    assert not dashboard.complete(first, HEALTH)
    assert dashboard.state == Success(Action.USERS, USERS)


def test_stale_failure_is_dropped():
    dashboard = Dashboard(StubClient())

    first = dashboard.begin(Action.USERS)
    second = dashboard.begin(Action.HEALTH)
    dashboard.complete(second, HEALTH)

    assert not dashboard.fail(first)
    assert dashboard.state == Success(Action.HEALTH, HEALTH)


def test_out_of_order_responses_keep_latest_loading():
    dashboard = Dashboard(StubClient())

    first = dashboard.begin(Action.HEALTH)
    dashboard.begin(Action.USERS)
    dashboard.complete(first, HEALTH)

    assert dashboard.state == Loading(Action.USERS)


def test_cancel_current_ticket_returns_to_idle():
    dashboard = Dashboard(StubClient())

    ticket = dashboard.begin(Action.HEALTH)
    ticket.cancel()

    assert ticket.cancelled
    assert dashboard.state == Idle()
    assert not dashboard.complete(ticket, HEALTH)
    assert dashboard.state == Idle()


def test_cancel_stale_ticket_keeps_current_state():
    dashboard = Dashboard(StubClient())

    first = dashboard.begin(Action.HEALTH)
    dashboard.begin(Action.USERS)
    first.cancel()

    assert dashboard.state == Loading(Action.USERS)

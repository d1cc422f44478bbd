import json
from typing import Any, Dict, List, Optional

from frontend.state import Action, Failure, Loading, Success, ViewState


LOADING_TEXT = "Loading..."


def health_dump(payload: Any) -> str:
    """
    JSON с отступом в 2 пробела, как на странице.
    """

    return json.dumps(payload.model_dump(), indent=2)


def user_lines(payload: Any) -> List[str]:
    return [f"{user.name} (ID: {user.id})" for user in payload]


def view_model(state: ViewState) -> Dict[str, Optional[Any]]:
    """
    Переводит состояние в плоский набор полей для шаблона.
    """

    health = None
    users = None
    if isinstance(state, Success):
        if state.action is Action.HEALTH:
            health = health_dump(state.payload)
        else:
            users = user_lines(state.payload)

    return {
        "loading": isinstance(state, Loading),
        "error": state.message if isinstance(state, Failure) else None,
        "health": health,
        "users": users,
    }


def render_text(state: ViewState) -> str:
    """
    Текстовое представление состояния для терминального клиента.
    """

    view = view_model(state)
    blocks = []

    if view["loading"]:
        blocks.append(LOADING_TEXT)
    if view["error"]:
        blocks.append(view["error"])
    if view["health"]:
        blocks.append("Backend Health:\n" + view["health"])
    if view["users"]:
        blocks.append("Users:\n" + "\n".join(f"  - {line}" for line in view["users"]))

    return "\n\n".join(blocks)

import os
from dataclasses import dataclass
from typing import Optional
from dotenv import load_dotenv


DEFAULT_PORT = 5000


class ConfigError(ValueError):
    """
    Некорректное значение переменной окружения.
    """

    def __init__(self, name: str, value: str, reason: str):
        super().__init__(f"{name}={value!r}: {reason}")
        self.name = name
        self.value = value


def read_port(name: str, default: int) -> int:
    """
    Читает номер порта из переменной окружения.
    """

    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default

    try:
        port = int(raw)
    except ValueError:
        raise ConfigError(name, raw, "port must be an integer") from None

    if not 0 < port < 65536:
        raise ConfigError(name, raw, "port must be in range 1-65535")

    return port


def read_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default

    try:
        value = float(raw)
    except ValueError:
        raise ConfigError(name, raw, "must be a number") from None

    if value <= 0:
        raise ConfigError(name, raw, "must be positive")

    return value


@dataclass(frozen=True)
class BackendSettings:
    """
    Конфигурация сервиса.
    Создаётся один раз при старте и передаётся в create_app.
    """

    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    app_name: str = "my-backend"
    version: str = "1.0.0"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "BackendSettings":
        # .env не перезаписывает уже выставленные переменные
        load_dotenv(env_file)

        return cls(
            host=os.environ.get("HOST") or cls.host,
            port=read_port("PORT", DEFAULT_PORT),
            app_name=os.environ.get("APP_NAME") or cls.app_name,
            version=os.environ.get("APP_VERSION") or cls.version,
            log_level=os.environ.get("LOG_LEVEL") or cls.log_level,
        )

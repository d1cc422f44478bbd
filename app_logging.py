import json
import logging
import os

_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
_LOGGER_INITIALIZED = False


class _JsonFormatter(logging.Formatter):
    def format(self, record):  # type: ignore
        data = {
            "time": self.formatTime(record),
            "level": record.levelname.lower(),
            "name": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            data["exc"] = self.formatException(record.exc_info)
        return json.dumps(data, ensure_ascii=False)


def init_logging(level: str = "INFO", force: bool = False) -> None:
    """
    Настраивает корневой логгер один раз на процесс.

    JSON_LOGS=1 переключает вывод в формат одной JSON-строки на запись.
    """

    global _LOGGER_INITIALIZED
    if _LOGGER_INITIALIZED and not force:
        return

    handler = logging.StreamHandler()
    if os.getenv("JSON_LOGS", "0").lower() in ("1", "true", "yes"):
        handler.setFormatter(_JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(_FORMAT))

    logging.basicConfig(level=level.upper(), handlers=[handler], force=True)
    _LOGGER_INITIALIZED = True


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


__all__ = ["get_logger", "init_logging"]

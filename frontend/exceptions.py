class BackendUnavailableError(RuntimeError):
    """
    Запрос к backend не удался: сетевая ошибка, статус не 2xx
    или тело ответа не разбирается.
    """

    def __init__(self, url: str, message: str):
        super().__init__(f"[{url}] {message}")
        self.url = url
        self.message = message


__all__ = ["BackendUnavailableError"]

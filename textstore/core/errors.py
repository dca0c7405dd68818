from typing import Optional


class TextStoreError(Exception):
    """Базовое исключение приложения"""


class RemoteError(TextStoreError):
    """Ошибка удаленного хранилища (сеть или отказ сервиса)

    Сообщение приходит от хранилища и показывается пользователю как есть.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __repr__(self) -> str:
        return f"RemoteError(message={self.message!r}, status_code={self.status_code})"


class ValidationError(TextStoreError):
    """Пустое обязательное поле, обнаруженное до обращения к сети"""

    def __init__(self, message: str, field: str):
        super().__init__(message)
        self.message = message
        self.field = field


class AuthAbsent(TextStoreError):
    """Нет активной сессии"""

    def __init__(self, message: str = "No active session"):
        super().__init__(message)
        self.message = message

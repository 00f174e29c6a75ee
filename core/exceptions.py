"""
Кастомные исключения для API
"""
from fastapi import HTTPException

class SajuException(Exception):
    """Базовое исключение для ошибок сервиса"""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

class NetworkException(SajuException):
    """Исключение для сетевых ошибок и ответов с кодом не 2xx"""
    pass

class ParseException(SajuException):
    """Исключение для некорректного тела ответа"""
    pass

class UpstreamException(SajuException):
    """Внешний сервис сам сообщил о неуспешном выполнении"""
    pass

class RecordStoreException(SajuException):
    """Исключение для ошибок хранилища результатов"""
    pass

class CacheException(Exception):
    """Исключение для ошибок кэша"""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

def saju_exception_handler(exc: Exception) -> HTTPException:
    """Преобразование исключений сервиса в HTTPException"""
    if isinstance(exc, NetworkException):
        return HTTPException(
            status_code=503,
            detail=f"Ошибка сети: {exc.message}"
        )
    elif isinstance(exc, (ParseException, UpstreamException)):
        return HTTPException(
            status_code=502,
            detail=f"Ошибка внешнего сервиса: {exc.message}"
        )
    elif isinstance(exc, RecordStoreException):
        return HTTPException(
            status_code=503,
            detail=f"Ошибка хранилища: {exc.message}"
        )
    elif isinstance(exc, CacheException):
        return HTTPException(
            status_code=503,
            detail=f"Ошибка кэша: {exc.message}"
        )
    return HTTPException(
        status_code=500,
        detail=f"Ошибка: {getattr(exc, 'message', str(exc))}"
    )

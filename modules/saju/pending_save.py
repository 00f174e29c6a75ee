"""
Отложенное сохранение результата на время входа через редирект
"""
import logging
import time
from typing import Callable, Optional

from pydantic import ValidationError

from core.cache import CacheManager
from core.exceptions import CacheException
from .models import PendingSaveIntent

logger = logging.getLogger(__name__)


class PendingSaveStore:
    """
    Хранение намерения {recordId, issuedAt} для сессии клиента.

    Намерение потребляется ровно один раз (атомарный GETDEL) и
    отбрасывается, если старше ttl_seconds.
    """

    def __init__(self, cache_manager: CacheManager, ttl_seconds: int = 3600, clock: Callable[[], float] = time.time):
        self.cache_manager = cache_manager
        self.ttl_seconds = ttl_seconds
        self.clock = clock

    @staticmethod
    def _key(session_key: str) -> str:
        return f"pending_save:{session_key}"

    async def remember(self, session_key: str, record_id: str) -> PendingSaveIntent:
        """
        :raises CacheException: если намерение не удалось сохранить
        """
        intent = PendingSaveIntent(record_id=record_id, issued_at=self.clock())
        stored = await self.cache_manager.set(
            self._key(session_key),
            intent.model_dump(by_alias=True),
            ttl_seconds=self.ttl_seconds,
        )
        if not stored:
            raise CacheException(f"Не удалось сохранить отложенное сохранение для сессии {session_key}")
        logger.info(f"Отложенное сохранение записи {record_id} запомнено для сессии {session_key}")
        return intent

    async def consume(self, session_key: str) -> Optional[PendingSaveIntent]:
        """
        Извлечение намерения с удалением

        Срок действия не проверяется: см. is_expired().

        :return: Намерение или None (нет или повреждено)
        """
        raw = await self.cache_manager.pop(self._key(session_key))
        if raw is None:
            return None
        try:
            return PendingSaveIntent.model_validate(raw)
        except ValidationError:
            logger.error(f"Поврежденное отложенное сохранение для сессии {session_key}: {raw}")
            return None

    def is_expired(self, intent: PendingSaveIntent) -> bool:
        return self.clock() - intent.issued_at >= self.ttl_seconds

    async def discard(self, session_key: str) -> None:
        """Сброс при выходе из аккаунта"""
        await self.cache_manager.delete(self._key(session_key))

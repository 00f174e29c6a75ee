"""
Сервис сажу: отправка формы, карта, сохранение результатов
"""
import asyncio
import logging
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from core.exceptions import RecordStoreException
from .chart_adapter import ChartAdapter
from .fortune_adapter import FortuneAdapter
from .models import BirthRecord, ChartResult, FortuneReport, SubmissionResult
from .pending_save import PendingSaveStore
from .repository import SajuResultRepository

logger = logging.getLogger(__name__)


class SaveOutcome(str, Enum):
    SAVED = "saved"
    CLAIMED = "claimed"
    ALREADY_SAVED = "already_saved"
    OWNED_BY_OTHER = "owned_by_other"


class PendingSaveOutcome(str, Enum):
    NONE = "none"
    EXPIRED = "expired"
    CLAIMED = "claimed"
    OWNED_BY_OTHER = "owned_by_other"
    FAILED = "failed"


class SajuService:
    """Сервис для работы с сажу-прогнозами"""

    def __init__(
        self,
        fortune_adapter: FortuneAdapter,
        chart_adapter: ChartAdapter,
        repository: SajuResultRepository,
        pending_saves: PendingSaveStore,
    ):
        """
        :param fortune_adapter: Адаптер эндпоинта генерации
        :param chart_adapter: Адаптер API карты
        :param repository: Хранилище результатов
        :param pending_saves: Хранилище отложенных сохранений
        """
        self.fortune_adapter = fortune_adapter
        self.chart_adapter = chart_adapter
        self.repository = repository
        self.pending_saves = pending_saves

    async def submit(self, record: BirthRecord, user_id: Optional[str] = None) -> SubmissionResult:
        """
        Генерация прогноза и сохранение записи.

        Ошибка хранилища не мешает показать прогноз: record_id будет None.
        """
        report, source = await self.fortune_adapter.generate_with_source(record)

        record_id = None
        try:
            record_id = await self.repository.insert_result(record, report, user_id)
        except RecordStoreException as e:
            logger.error(f"Не удалось сохранить результат прогноза: {e.message}")

        return SubmissionResult(record_id=record_id, source=source, report=report)

    async def fetch_chart(self, record: BirthRecord) -> Optional[ChartResult]:
        return await self.chart_adapter.fetch(record)

    async def submit_with_chart(
        self,
        record: BirthRecord,
        user_id: Optional[str] = None
    ) -> Tuple[SubmissionResult, Optional[ChartResult]]:
        """Прогноз и карта параллельно; оба адаптера не выбрасывают исключений"""
        submission, chart = await asyncio.gather(
            self.submit(record, user_id),
            self.fetch_chart(record),
        )
        return submission, chart

    async def save_for_user(
        self,
        user_id: str,
        record: BirthRecord,
        report: FortuneReport,
        record_id: Optional[str] = None
    ) -> Tuple[SaveOutcome, Optional[str]]:
        """
        Сохранение результата в аккаунт пользователя

        :param record_id: ID анонимной записи, если она уже создана
        :return: (исход, ID записи)
        :raises RecordStoreException: при ошибке хранилища
        """
        saved_id = await self.repository.find_saved_result(user_id, record)
        if saved_id:
            return SaveOutcome.ALREADY_SAVED, saved_id

        if record_id:
            if await self.repository.claim_result(record_id, user_id):
                return SaveOutcome.CLAIMED, record_id
            return SaveOutcome.OWNED_BY_OTHER, record_id

        new_id = await self.repository.insert_result(record, report, user_id)
        return SaveOutcome.SAVED, new_id

    async def remember_pending_save(self, session_key: str, record_id: str) -> None:
        """Запоминание записи перед уходом на страницу входа"""
        await self.pending_saves.remember(session_key, record_id)

    async def complete_pending_save(self, session_key: str, user_id: str) -> Tuple[PendingSaveOutcome, Optional[str]]:
        """
        Присвоение отложенной записи после подтверждения сессии.

        Намерение потребляется в любом случае, повторный вызов вернет NONE.
        """
        intent = await self.pending_saves.consume(session_key)
        if intent is None:
            return PendingSaveOutcome.NONE, None
        if self.pending_saves.is_expired(intent):
            logger.info(f"Отложенное сохранение записи {intent.record_id} просрочено, пропускаем")
            return PendingSaveOutcome.EXPIRED, intent.record_id

        try:
            if await self.repository.claim_result(intent.record_id, user_id):
                return PendingSaveOutcome.CLAIMED, intent.record_id
            existing = await self.repository.get_result(intent.record_id)
        except RecordStoreException as e:
            logger.error(f"Ошибка автосохранения записи {intent.record_id}: {e.message}")
            return PendingSaveOutcome.FAILED, intent.record_id

        if existing is None:
            logger.warning(f"Отложенная запись {intent.record_id} не найдена")
            return PendingSaveOutcome.FAILED, intent.record_id
        if existing.get("user_id") == user_id:
            return PendingSaveOutcome.CLAIMED, intent.record_id
        return PendingSaveOutcome.OWNED_BY_OTHER, intent.record_id

    async def discard_pending_save(self, session_key: str) -> None:
        await self.pending_saves.discard(session_key)

    async def list_records(self, user_id: str) -> List[Dict[str, Any]]:
        return await self.repository.list_results(user_id)

    async def delete_record(self, user_id: str, record_id: str) -> bool:
        return await self.repository.delete_result(record_id, user_id)

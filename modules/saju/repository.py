"""
Хранилище результатов сажу (таблица saju_results)
"""
import logging
from typing import Any, Dict, List, Optional

from core.supabase_client import SupabaseTableClient
from .models import BirthRecord, FortuneReport

logger = logging.getLogger(__name__)


def _birth_filters(record: BirthRecord) -> Dict[str, str]:
    return {
        "name": f"eq.{record.name}",
        "gender": f"eq.{record.gender.value}",
        "birth_year": f"eq.{record.birth_year}",
        "birth_month": f"eq.{record.birth_month}",
        "birth_day": f"eq.{record.birth_day}",
        "birth_time": f"eq.{record.birth_time.value}",
        "lunar_calendar": f"eq.{str(record.lunar_calendar).lower()}",
    }


def build_result_row(record: BirthRecord, report: FortuneReport, user_id: Optional[str]) -> Dict[str, Any]:
    """Строка таблицы для нового результата"""
    return {
        "user_id": user_id,
        "name": record.name,
        "gender": record.gender.value,
        "birth_year": record.birth_year,
        "birth_month": record.birth_month,
        "birth_day": record.birth_day,
        "birth_time": record.birth_time.value,
        "lunar_calendar": record.lunar_calendar,
        "fortune_result": report.to_wire(),
    }


class SajuResultRepository:
    """Операции с результатами поверх клиента таблицы"""

    def __init__(self, table: SupabaseTableClient):
        self.table = table

    async def insert_result(self, record: BirthRecord, report: FortuneReport, user_id: Optional[str] = None) -> str:
        """
        Сохранение результата; user_id=None - анонимная запись

        :return: ID записи
        """
        row = await self.table.insert(build_result_row(record, report, user_id))
        logger.info(f"Сохранен результат {row.get('id')} (владелец: {user_id or 'аноним'})")
        return str(row["id"])

    async def get_result(self, record_id: str) -> Optional[Dict[str, Any]]:
        rows = await self.table.select({"id": f"eq.{record_id}"}, limit=1)
        return rows[0] if rows else None

    async def find_saved_result(self, user_id: str, record: BirthRecord) -> Optional[str]:
        """ID уже сохраненного пользователем результата с теми же данными рождения"""
        rows = await self.table.select({"user_id": f"eq.{user_id}", **_birth_filters(record)}, columns="id", limit=1)
        return str(rows[0]["id"]) if rows else None

    async def claim_result(self, record_id: str, user_id: str) -> bool:
        """
        Передача анонимной записи пользователю.

        Одно условное обновление с предикатом user_id IS NULL; из нескольких
        конкурирующих попыток строку получит только одна.

        :return: True, если запись была присвоена этим вызовом
        """
        rows = await self.table.update(
            {"user_id": user_id},
            {"id": f"eq.{record_id}", "user_id": "is.null"},
        )
        claimed = len(rows) == 1
        logger.info(f"Присвоение записи {record_id} пользователю {user_id}: {'успешно' if claimed else 'запись не свободна'}")
        return claimed

    async def list_results(self, user_id: str) -> List[Dict[str, Any]]:
        return await self.table.select({"user_id": f"eq.{user_id}"}, order="created_at.desc")

    async def delete_result(self, record_id: str, user_id: str) -> bool:
        rows = await self.table.delete({"id": f"eq.{record_id}", "user_id": f"eq.{user_id}"})
        return len(rows) > 0

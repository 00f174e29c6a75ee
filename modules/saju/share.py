"""
Публичные ссылки на результат и форматирование данных рождения
"""
import json
import logging
from typing import Dict, Optional
from urllib.parse import quote, unquote

from pydantic import ValidationError

from core.utils import format_date_ko
from .models import BirthRecord, BirthTimeSlot, FortuneReport, ShareData

logger = logging.getLogger(__name__)


def build_share_data(record: BirthRecord, report: FortuneReport) -> ShareData:
    return ShareData(
        name=record.name,
        gender=record.gender,
        birth_year=record.birth_year,
        birth_month=record.birth_month,
        birth_day=record.birth_day,
        birth_time=record.birth_time,
        lunar_calendar=record.lunar_calendar,
        overall=report.overall,
    )


def build_share_url(base_url: str, record: BirthRecord, report: FortuneReport) -> str:
    """base_url?data=<JSON данных, закодированный для URL>"""
    payload = json.dumps(build_share_data(record, report).model_dump(by_alias=True, mode="json"), ensure_ascii=False)
    return f"{base_url.rstrip('/')}?data={quote(payload, safe='')}"


def parse_share_data(raw: str) -> Optional[ShareData]:
    """
    Разбор параметра data из ссылки

    :param raw: Значение параметра (закодированное или уже декодированное)
    :return: ShareData или None для некорректных данных
    """
    try:
        return ShareData.model_validate(json.loads(unquote(raw)))
    except (json.JSONDecodeError, ValidationError, TypeError) as e:
        logger.warning(f"Некорректные данные ссылки: {e}")
        return None


def format_birth_info(record: BirthRecord) -> Dict[str, str]:
    """Подписи для экрана результата"""
    birth_time = "시간 미선택" if record.birth_time == BirthTimeSlot.UNSELECTED else record.birth_time.value
    return {
        "calendar_type": "음력" if record.lunar_calendar else "양력",
        "birth_date": format_date_ko(record.birth_year, record.birth_month, record.birth_day),
        "birth_time": birth_time,
    }

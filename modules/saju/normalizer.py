"""
Преобразование данных формы в схемы внешних сервисов
"""
from typing import Any, Dict, Tuple

import config
from .data import BIRTH_TIME_CLOCK
from .models import BirthRecord, BirthTimeSlot, Gender, ManseryeokInput


def strip_time_label(label: str) -> str:
    """'자시(23-01시)' -> '자시'. Метки без скобок возвращаются как есть."""
    return label.split("(", 1)[0] if "(" in label else label


def birth_time_to_clock(slot: BirthTimeSlot) -> str:
    """Время 'HH:MM' для промежутка рождения; «не выбрано» - полдень"""
    return BIRTH_TIME_CLOCK[slot]


def birth_hour_minute(slot: BirthTimeSlot) -> Tuple[int, int]:
    hour, minute = birth_time_to_clock(slot).split(":")
    return int(hour), int(minute)


def to_generation_request(record: BirthRecord) -> Dict[str, Any]:
    """Тело запроса к эндпоинту генерации (поля формы как есть)"""
    return {
        "name": record.name,
        "gender": record.gender.value,
        "birthYear": record.birth_year,
        "birthMonth": record.birth_month,
        "birthDay": record.birth_day,
        "birthTime": record.birth_time.value,
        "lunarCalendar": record.lunar_calendar,
    }


def to_assistant_message(record: BirthRecord) -> Dict[str, Any]:
    """Плоский JSON, который отправляется ассистенту сообщением пользователя"""
    return {
        "name": record.name,
        "gender": "남" if record.gender == Gender.MALE else "여",
        "calendar": "음력" if record.lunar_calendar else "양력",
        "year": record.birth_year,
        "month": record.birth_month,
        "day": record.birth_day,
        "hour_earthly_branch": strip_time_label(record.birth_time.value),
    }


def to_chart_request(
    record: BirthRecord,
    location_id: int = config.CHART_LOCATION_ID,
    location_name: str = config.CHART_LOCATION_NAME,
) -> ManseryeokInput:
    """
    Тело запроса к API карты манседёк

    :param record: Данные рождения
    :param location_id: ID места рождения во внешнем справочнике
    :param location_name: Название места рождения
    :return: ManseryeokInput
    """
    hour, minute = birth_hour_minute(record.birth_time)
    return ManseryeokInput(
        name=record.name,
        gender="M" if record.gender == Gender.MALE else "F",
        calendar="L" if record.lunar_calendar else "S",
        birthday=f"{record.birth_year}/{record.birth_month:02d}/{record.birth_day:02d}",
        birthtime=birth_time_to_clock(record.birth_time),
        hmUnsure=False,
        midnightAdjust=False,
        locationId=location_id,
        locationName=location_name,
        year=record.birth_year,
        month=record.birth_month,
        day=record.birth_day,
        hour=hour,
        min=minute,
    )

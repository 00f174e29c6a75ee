"""
Детерминированный запасной прогноз
"""
from .data import (
    FALLBACK_BUCKETS,
    FALLBACK_COMMON_SECTIONS,
    FALLBACK_OVERALL_TEXTS,
    FALLBACK_WEALTH_TEXTS,
    SERVER_FALLBACK_REPORT,
)
from .models import BirthRecord, FortuneReport


def fallback_bucket(record: BirthRecord) -> int:
    """(год + месяц + день + 1 для мужчин) mod 5"""
    total = record.birth_year + record.birth_month + record.birth_day + (1 if record.is_male else 0)
    return total % FALLBACK_BUCKETS


def fallback_report(record: BirthRecord) -> FortuneReport:
    """
    Запасной отчет, когда эндпоинт генерации недоступен.

    Зависит только от даты рождения и пола: имя и время рождения
    на выбор варианта не влияют.
    """
    bucket = fallback_bucket(record)
    common = FALLBACK_COMMON_SECTIONS
    return FortuneReport.model_validate({
        "평생사주_총평": FALLBACK_OVERALL_TEXTS[bucket],
        "재물운": {"재물운": FALLBACK_WEALTH_TEXTS[bucket], **common["재물운"]},
        "시기별": dict(common["시기별"]),
        "건강운": dict(common["건강운"]),
        "애정운": dict(common["애정운"]),
    })


def server_fallback_report() -> FortuneReport:
    """Фиксированный отчет эндпоинта генерации"""
    return FortuneReport.model_validate(SERVER_FALLBACK_REPORT)

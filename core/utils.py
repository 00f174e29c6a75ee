"""
Вспомогательные функции
"""


def format_date_ko(year: int, month: int, day: int) -> str:
    """Форматирование даты в корейском формате"""
    return f"{year}년 {month}월 {day}일"


def mask_secret(secret: str, visible: int = 6) -> str:
    """Маскирование ключа для логов"""
    if not secret:
        return "<пусто>"
    return f"{secret[:visible]}..."

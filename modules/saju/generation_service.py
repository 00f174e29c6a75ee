"""
Сервис эндпоинта генерации: ассистент + разбор ответа
"""
import json
import logging
import re
from typing import Optional

from pydantic import ValidationError

from core.assistant_client import AssistantClient
from .fallback import server_fallback_report
from .models import BirthRecord, FortuneReport
from .normalizer import to_assistant_message

logger = logging.getLogger(__name__)

# от первой "{" до последней "}"
_JSON_SPAN = re.compile(r"\{[\s\S]*\}")


def extract_json_object(text: str) -> Optional[dict]:
    """
    Извлечение JSON-объекта, встроенного в свободный текст

    :return: Словарь или None, если объект не найден или не разбирается
    """
    match = _JSON_SPAN.search(text or "")
    if not match:
        return None
    try:
        value = json.loads(match.group(0))
    except json.JSONDecodeError:
        return None
    return value if isinstance(value, dict) else None


def parse_fortune_text(text: str) -> FortuneReport:
    """Разбор ответа ассистента; при неудаче - фиксированный запасной отчет"""
    data = extract_json_object(text)
    if data is None:
        logger.error("В ответе ассистента не найден корректный JSON. Используется запасной отчет.")
        return server_fallback_report()
    try:
        return FortuneReport.model_validate(data)
    except ValidationError as e:
        logger.error(f"JSON ответа ассистента не соответствует схеме отчета ({e.error_count()} ошибок). Используется запасной отчет.")
        return server_fallback_report()


class GenerationService:
    """Генерация прогноза через ассистента"""

    def __init__(self, assistant_client: AssistantClient):
        self.assistant_client = assistant_client

    async def generate(self, record: BirthRecord) -> FortuneReport:
        """
        :raises NetworkException, ParseException, UpstreamException: если ассистент не ответил
        """
        content = json.dumps(to_assistant_message(record), ensure_ascii=False)
        logger.info(f"Запуск генерации прогноза: {content}")
        text = await self.assistant_client.run_assistant(content)
        return parse_fortune_text(text)

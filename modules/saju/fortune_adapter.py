"""
Клиентский адаптер эндпоинта генерации прогноза
"""
import asyncio
import json
import logging
from typing import Any, Dict, Optional, Tuple

import aiohttp
from pydantic import ValidationError

from core.exceptions import NetworkException, ParseException, UpstreamException
from core.utils import mask_secret
from .fallback import fallback_report
from .models import BirthRecord, FortuneReport, ReportSource
from .normalizer import to_generation_request

logger = logging.getLogger(__name__)

class FortuneAdapter:
    """
    Вызов удаленной функции генерации прогноза.

    Делает ровно один запрос: опрос ассистента выполняет сам эндпоинт
    в пределах своего бюджета попыток. Любая ошибка заменяется
    детерминированным запасным отчетом, исключения наружу не выходят.
    """

    def __init__(self, endpoint_url: str, api_key: str, timeout: Optional[float] = None):
        """
        :param endpoint_url: URL функции генерации
        :param api_key: Bearer-ключ для функции
        :param timeout: Общий таймаут запроса в секундах (None - по умолчанию транспорта)
        """
        self.endpoint_url = endpoint_url
        self.api_key = api_key
        self.timeout = timeout
        logger.info(f"FortuneAdapter инициализирован. URL: {self.endpoint_url}, ключ: {mask_secret(self.api_key)}")

    def _prepare_headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    def _client_timeout(self) -> aiohttp.ClientTimeout:
        if self.timeout is None:
            return aiohttp.client.DEFAULT_TIMEOUT
        return aiohttp.ClientTimeout(total=self.timeout)

    async def _request(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        async with aiohttp.ClientSession(timeout=self._client_timeout()) as session:
            async with session.post(self.endpoint_url, headers=self._prepare_headers(), json=payload) as response:
                response_text = await response.text()

                if response.status < 200 or response.status >= 300:
                    raise NetworkException(f"Статус={response.status}, Ответ='{response_text[:300]}'")

                try:
                    body = json.loads(response_text)
                except json.JSONDecodeError as e:
                    raise ParseException(f"Ответ не является JSON: {e}")

        if not isinstance(body, dict):
            raise ParseException(f"Ожидался JSON-объект, получен {type(body).__name__}")
        if "error" in body:
            raise UpstreamException(f"Эндпоинт вернул ошибку: {body['error']}")
        return body

    async def generate_with_source(self, record: BirthRecord) -> Tuple[FortuneReport, ReportSource]:
        """
        Получение прогноза с указанием его источника

        :param record: Данные рождения
        :return: (отчет, remote | fallback)
        """
        payload = to_generation_request(record)
        try:
            body = await self._request(payload)
            report = FortuneReport.model_validate(body)
            logger.info(f"Получен прогноз от эндпоинта генерации для {record.birth_year}-{record.birth_month}-{record.birth_day}")
            return report, ReportSource.REMOTE
        except (NetworkException, ParseException, UpstreamException) as e:
            logger.error(f"Эндпоинт генерации недоступен ({type(e).__name__}): {e.message}. Используется запасной прогноз.")
        except ValidationError as e:
            logger.error(f"Ответ эндпоинта генерации не соответствует схеме отчета: {e.error_count()} ошибок. Используется запасной прогноз.")
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Ошибка соединения с эндпоинтом генерации: {e!r}. Используется запасной прогноз.")
        except Exception as e:
            logger.error(f"Неожиданная ошибка при генерации прогноза: {e}. Используется запасной прогноз.", exc_info=True)

        return fallback_report(record), ReportSource.FALLBACK

    async def generate(self, record: BirthRecord) -> FortuneReport:
        """Прогноз для данных рождения. Никогда не выбрасывает исключений."""
        report, _ = await self.generate_with_source(record)
        return report

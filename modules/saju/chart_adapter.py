"""
Адаптер стороннего API карты манседёк
"""
import asyncio
import json
import logging
from typing import Dict, Optional

import aiohttp
from pydantic import ValidationError

import config
from .models import BirthRecord, ChartResponse, ChartResult
from .normalizer import to_chart_request

logger = logging.getLogger(__name__)

class ChartAdapter:
    """
    Получение карты манседёк.

    Карта вспомогательная, поэтому запрос выполняется один раз без повторов;
    при любой ошибке возвращается None.
    """

    def __init__(
        self,
        api_url: str,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
        location_id: int = config.CHART_LOCATION_ID,
        location_name: str = config.CHART_LOCATION_NAME,
    ):
        self.api_url = api_url
        self.headers = headers or {"content-type": "application/json"}
        self.timeout = timeout
        self.location_id = location_id
        self.location_name = location_name

    def _client_timeout(self) -> aiohttp.ClientTimeout:
        if self.timeout is None:
            return aiohttp.client.DEFAULT_TIMEOUT
        return aiohttp.ClientTimeout(total=self.timeout)

    async def fetch(self, record: BirthRecord) -> Optional[ChartResult]:
        """
        Запрос карты для данных рождения

        :param record: Данные рождения
        :return: Карта или None, если внешний API недоступен
        """
        payload = to_chart_request(record, self.location_id, self.location_name).model_dump()
        try:
            async with aiohttp.ClientSession(timeout=self._client_timeout()) as session:
                async with session.post(self.api_url, headers=self.headers, json=payload) as response:
                    response_text = await response.text()
                    if response.status < 200 or response.status >= 300:
                        logger.error(f"API карты вернул статус {response.status}: {response_text[:300]}")
                        return None

            body = json.loads(response_text)
            chart_response = ChartResponse.model_validate(body)
            if chart_response.status != 200:
                logger.error(f"API карты сообщил о неуспехе: status={chart_response.status}")
                return None

            logger.info(f"Получена карта манседёк для {payload['birthday']} {payload['birthtime']}")
            return chart_response.data

        except json.JSONDecodeError as e:
            logger.error(f"Ответ API карты не является JSON: {e}")
        except ValidationError as e:
            logger.error(f"Ответ API карты не соответствует схеме: {e.error_count()} ошибок")
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Ошибка соединения с API карты: {e!r}")
        except Exception as e:
            logger.error(f"Неожиданная ошибка при получении карты: {e}", exc_info=True)
        return None

"""
Клиент для работы с OpenAI Assistants API
"""
import asyncio
import json
import logging
from typing import Any, Dict, Optional

import aiohttp

from core.exceptions import NetworkException, ParseException, UpstreamException
from core.utils import mask_secret

logger = logging.getLogger(__name__)

TERMINAL_FAILED_STATUSES = ("failed", "cancelled", "expired")


class AssistantClient:
    """
    Клиент Assistants API: тред, сообщение, запуск, опрос статуса, ответ.
    """

    def __init__(
        self,
        api_url: str,
        api_key: str,
        assistant_id: str,
        poll_interval: float = 1.0,
        max_poll_attempts: int = 30,
        timeout: int = 30
    ):
        """
        Инициализация клиента

        :param api_url: Базовый URL API (https://api.openai.com/v1)
        :param api_key: API ключ
        :param assistant_id: ID ассистента
        :param poll_interval: Пауза между опросами статуса запуска в секундах
        :param max_poll_attempts: Максимальное количество опросов
        :param timeout: Таймаут одного HTTP-запроса в секундах
        """
        self.api_url = api_url.rstrip("/")
        self.api_key = api_key
        self.assistant_id = assistant_id
        self.poll_interval = poll_interval
        self.max_poll_attempts = max_poll_attempts
        self.timeout = timeout

        if not self.api_key:
            logger.warning("AssistantClient получил ПУСТОЙ api_key. Генерация будет завершаться ошибкой.")
        else:
            logger.info(f"AssistantClient инициализирован. URL: {self.api_url}, ключ: {mask_secret(self.api_key)}, ассистент: {self.assistant_id}")

    def _prepare_headers(self) -> Dict[str, str]:
        """Подготовка заголовков запроса"""
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "OpenAI-Beta": "assistants=v2",
        }

    async def _call(
        self,
        session: aiohttp.ClientSession,
        method: str,
        path: str,
        payload: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Один запрос к API

        :raises NetworkException: статус не 2xx или ошибка соединения
        :raises ParseException: тело ответа не JSON-объект
        """
        url = f"{self.api_url}{path}"
        try:
            async with session.request(method, url, headers=self._prepare_headers(), json=payload) as response:
                response_text = await response.text()
                if response.status < 200 or response.status >= 300:
                    logger.error(f"Assistants API ошибка: {method} {path} Статус={response.status}, Ответ={response_text[:300]}")
                    raise NetworkException(f"{method} {path}: статус {response.status} - {response_text[:300]}")
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise NetworkException(f"{method} {path}: {e!r}")

        try:
            result = json.loads(response_text)
        except json.JSONDecodeError as e:
            raise ParseException(f"{method} {path}: ответ не JSON ({e})")
        if not isinstance(result, dict):
            raise ParseException(f"{method} {path}: ожидался JSON-объект")
        return result

    async def create_thread(self, session: aiohttp.ClientSession) -> str:
        thread = await self._call(session, "POST", "/threads", {})
        return thread["id"]

    async def add_message(self, session: aiohttp.ClientSession, thread_id: str, content: str) -> None:
        await self._call(session, "POST", f"/threads/{thread_id}/messages", {"role": "user", "content": content})

    async def create_run(self, session: aiohttp.ClientSession, thread_id: str) -> Dict[str, Any]:
        run = await self._call(session, "POST", f"/threads/{thread_id}/runs", {"assistant_id": self.assistant_id})
        if "id" not in run:
            raise ParseException("В ответе на запуск ассистента нет поля id")
        return run

    async def wait_for_run(self, session: aiohttp.ClientSession, thread_id: str, run: Dict[str, Any]) -> str:
        """
        Опрос статуса запуска с фиксированным интервалом

        Неуспешный ответ опроса не меняет известный статус, но попытку расходует.

        :return: Последний известный статус
        """
        status = run.get("status")
        attempts = 0
        while status != "completed" and status not in TERMINAL_FAILED_STATUSES and attempts < self.max_poll_attempts:
            await asyncio.sleep(self.poll_interval)
            try:
                status_data = await self._call(session, "GET", f"/threads/{thread_id}/runs/{run['id']}")
                status = status_data.get("status", status)
            except (NetworkException, ParseException) as e:
                logger.warning(f"Опрос статуса запуска {run['id']} (попытка {attempts + 1}/{self.max_poll_attempts}) не удался: {e.message}")
            attempts += 1
        logger.info(f"Запуск {run['id']}: статус {status} после {attempts} опросов")
        return status

    async def latest_assistant_text(self, session: aiohttp.ClientSession, thread_id: str) -> str:
        messages = await self._call(session, "GET", f"/threads/{thread_id}/messages")
        for message in messages.get("data", []):
            if message.get("role") != "assistant":
                continue
            try:
                text = message["content"][0]["text"]["value"]
            except (KeyError, IndexError, TypeError):
                text = None
            if text:
                return text
            break
        raise UpstreamException("Ответ ассистента не найден")

    async def run_assistant(self, content: str) -> str:
        """
        Полный цикл генерации: тред -> сообщение -> запуск -> опрос -> ответ

        :param content: Текст сообщения пользователя
        :return: Текст ответа ассистента
        :raises NetworkException, ParseException, UpstreamException: при неуспехе любого шага
        """
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            try:
                thread_id = await self.create_thread(session)
                await self.add_message(session, thread_id, content)
                run = await self.create_run(session, thread_id)
            except KeyError as e:
                raise ParseException(f"В ответе Assistants API нет поля {e}")

            status = await self.wait_for_run(session, thread_id, run)
            if status != "completed":
                raise UpstreamException(f"Запуск ассистента не завершился успешно (статус: {status})")

            return await self.latest_assistant_text(session, thread_id)

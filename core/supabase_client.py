"""
Клиент таблицы Supabase (PostgREST) на aiohttp
"""
import asyncio
import json
import logging
from typing import Any, Dict, List, Optional

import aiohttp

from core.exceptions import RecordStoreException

logger = logging.getLogger(__name__)

class SupabaseTableClient:
    """
    Доступ к одной таблице через REST API Supabase.

    Фильтры передаются в синтаксисе PostgREST: {"id": "eq.42", "user_id": "is.null"}.
    """

    def __init__(self, base_url: str, api_key: str, table: str, timeout: int = 10):
        """
        :param base_url: URL проекта Supabase
        :param api_key: anon или service ключ
        :param table: Имя таблицы
        :param timeout: Таймаут запроса в секундах
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.table = table
        self.timeout = timeout

        if not self.base_url:
            logger.warning("SupabaseTableClient: URL проекта не задан. Операции с хранилищем будут завершаться ошибкой.")

    @property
    def table_url(self) -> str:
        return f"{self.base_url}/rest/v1/{self.table}"

    def _prepare_headers(self) -> Dict[str, str]:
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "Prefer": "return=representation",
        }

    async def _request(
        self,
        method: str,
        params: Optional[Dict[str, str]] = None,
        payload: Optional[Any] = None
    ) -> List[Dict[str, Any]]:
        """
        Выполнение запроса к таблице

        :raises RecordStoreException: при любой ошибке хранилища
        """
        if not self.base_url:
            raise RecordStoreException("URL Supabase не настроен")

        try:
            async with aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=self.timeout)) as session:
                async with session.request(
                    method,
                    self.table_url,
                    headers=self._prepare_headers(),
                    params=params,
                    json=payload
                ) as response:
                    response_text = await response.text()
                    if response.status < 200 or response.status >= 300:
                        logger.error(f"Supabase ошибка: {method} {self.table} Статус={response.status}, Ответ={response_text[:300]}")
                        raise RecordStoreException(f"{method} {self.table}: статус {response.status}")
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Ошибка соединения с Supabase: {e!r}")
            raise RecordStoreException(f"{method} {self.table}: {e!r}")

        if not response_text:
            return []
        try:
            rows = json.loads(response_text)
        except json.JSONDecodeError as e:
            raise RecordStoreException(f"{method} {self.table}: ответ не JSON ({e})")
        return rows if isinstance(rows, list) else [rows]

    async def select(
        self,
        filters: Dict[str, str],
        columns: str = "*",
        limit: Optional[int] = None,
        order: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        params = {"select": columns, **filters}
        if limit is not None:
            params["limit"] = str(limit)
        if order:
            params["order"] = order
        return await self._request("GET", params=params)

    async def insert(self, row: Dict[str, Any]) -> Dict[str, Any]:
        rows = await self._request("POST", payload=row)
        if not rows:
            raise RecordStoreException(f"POST {self.table}: вставленная запись не возвращена")
        return rows[0]

    async def update(self, values: Dict[str, Any], filters: Dict[str, str]) -> List[Dict[str, Any]]:
        """Обновление строк по фильтрам; возвращает измененные строки"""
        return await self._request("PATCH", params=filters, payload=values)

    async def delete(self, filters: Dict[str, str]) -> List[Dict[str, Any]]:
        return await self._request("DELETE", params=filters)

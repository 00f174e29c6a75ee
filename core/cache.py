"""
Менеджер кэша для API
"""
from typing import Any, Optional
import json
import logging

import redis.asyncio as aioredis
from redis.exceptions import ConnectionError as RedisConnectionError, RedisError

# Настройка логирования
logger = logging.getLogger(__name__)

class CacheManager:
    """Асинхронный менеджер кэша с TTL на базе Redis"""

    def __init__(self, redis_url: str, ttl_seconds: int = 3600, key_prefix: str = "saju"):
        """
        Инициализация менеджера кэша с подключением к Redis.

        :param redis_url: Адрес Redis.
        :param ttl_seconds: Время жизни записи по умолчанию в секундах.
        :param key_prefix: Префикс ключей этого сервиса.
        """
        self.redis_url = redis_url
        self._ttl_seconds = ttl_seconds
        self.key_prefix = key_prefix
        self.redis: Optional[aioredis.Redis] = None # Будет инициализирован в connect()

    async def connect(self):
        """Устанавливает асинхронное подключение к Redis."""
        try:
            # Если соединение уже есть, сначала закроем его
            if self.redis:
                try:
                    await self.redis.aclose()
                    logger.info("Закрыто предыдущее соединение с Redis перед повторным подключением.")
                except Exception as e:
                    logger.warning(f"Ошибка при закрытии предыдущего соединения с Redis: {e}")

            self.redis = aioredis.from_url(self.redis_url, encoding="utf-8", decode_responses=True)
            await self.redis.ping()
            logger.info(f"Успешно подключено к Redis по адресу: {self.redis_url}")
        except RedisError as e:
            logger.critical(f"НЕ УДАЛОСЬ ПОДКЛЮЧИТЬСЯ К REDIS по адресу {self.redis_url}: {e}", exc_info=True)
            self.redis = None

    async def close(self):
        """Закрывает соединение с Redis."""
        if self.redis:
            await self.redis.aclose()
            self.redis = None

    def _generate_key(self, key: str) -> str:
        """Генерация ключа для кэша"""
        return f"{self.key_prefix}:{key}"

    async def _ensure_connected(self, operation: str) -> bool:
        if self.redis:
            return True
        logger.error(f"Попытка {operation} в кэше, но Redis не подключен. Пробуем переподключиться...")
        await self.connect()
        if not self.redis:
            logger.error(f"Переподключение к Redis не удалось. {operation} невозможен.")
            return False
        return True

    @staticmethod
    def _decode(key: str, raw: Optional[str]) -> Optional[Any]:
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error(f"Ошибка десериализации данных для ключа {key}: {e}")
            return None

    async def set(self, key: str, data: Any, ttl_seconds: Optional[int] = None) -> bool:
        """
        Сохранение данных в кэш Redis с установленным TTL.

        :param key: Ключ записи без префикса.
        :param data: JSON-сериализуемые данные.
        :param ttl_seconds: TTL записи (по умолчанию TTL менеджера).
        :return: True, если запись сохранена.
        """
        if not await self._ensure_connected("SET"):
            return False

        full_key = self._generate_key(key)
        ttl = ttl_seconds or self._ttl_seconds
        try:
            await self.redis.set(full_key, json.dumps(data, ensure_ascii=False), ex=ttl)
            logger.info(f"Кэширование SET успешно для ключа: {full_key} с TTL {ttl} сек.")
            return True
        except RedisConnectionError as e:
            logger.error(f"Ошибка соединения с Redis при SET для ключа {full_key}: {e}", exc_info=True)
            self.redis = None
            return False
        except RedisError as e:
            logger.error(f"Redis error during SET operation for key {full_key}: {e}", exc_info=True)
            return False

    async def pop(self, key: str) -> Optional[Any]:
        """
        Атомарное чтение и удаление записи (GETDEL).

        :param key: Ключ записи без префикса.
        :return: Данные или None.
        """
        if not await self._ensure_connected("GETDEL"):
            return None

        full_key = self._generate_key(key)
        try:
            value = self._decode(full_key, await self.redis.getdel(full_key))
            logger.info(f"Кэш {'HIT' if value is not None else 'MISS'} для ключа: {full_key}")
            return value
        except RedisConnectionError as e:
            logger.error(f"Ошибка соединения с Redis при GETDEL для ключа {full_key}: {e}", exc_info=True)
            self.redis = None
            return None
        except RedisError as e:
            logger.error(f"Redis error during GETDEL operation for key {full_key}: {e}", exc_info=True)
            return None

    async def delete(self, key: str) -> None:
        """Удаление записи из кэша."""
        if not await self._ensure_connected("DELETE"):
            return

        full_key = self._generate_key(key)
        try:
            await self.redis.delete(full_key)
        except RedisError as e:
            logger.error(f"Redis error during DELETE operation for key {full_key}: {e}", exc_info=True)

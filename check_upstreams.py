#!/usr/bin/env python3
"""
Скрипт для проверки ключей и доступности внешних сервисов
"""
import asyncio
import logging
import argparse
from typing import Dict, Any

import aiohttp

import config
from core.utils import mask_secret
from modules.saju import BirthRecord, ChartAdapter, FortuneAdapter
from modules.saju.models import ReportSource

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

SAMPLE_RECORD = BirthRecord(
    name="테스트",
    gender="남자",
    birthYear=1990,
    birthMonth=5,
    birthDay=15,
)


async def check_assistant() -> Dict[str, Any]:
    """Проверка ключа и ID ассистента"""
    if not config.OPENAI_API_KEY or not config.OPENAI_ASSISTANT_ID:
        return {"status": "missing"}

    url = f"{config.OPENAI_API_URL.rstrip('/')}/assistants/{config.OPENAI_ASSISTANT_ID}"
    headers = {
        "Authorization": f"Bearer {config.OPENAI_API_KEY}",
        "OpenAI-Beta": "assistants=v2",
    }
    try:
        async with aiohttp.ClientSession() as session:
            async with session.get(url, headers=headers, timeout=aiohttp.ClientTimeout(total=10)) as response:
                if response.status == 200:
                    result = await response.json()
                    return {"status": "success", "detail": result.get("name") or result.get("model", "")}
                return {"status": "error", "error": f"Статус {response.status}: {(await response.text())[:100]}"}
    except aiohttp.ClientError as e:
        return {"status": "error", "error": str(e)}


async def check_chart() -> Dict[str, Any]:
    """Пробный запрос карты манседёк"""
    adapter = ChartAdapter(api_url=config.CHART_API_URL, headers=config.CHART_API_HEADERS, timeout=10)
    chart = await adapter.fetch(SAMPLE_RECORD)
    if chart is None:
        return {"status": "error", "error": "Карта недоступна (подробности в логе)"}
    return {"status": "success", "detail": chart.profile.sexagenaryCycle}


async def check_generation() -> Dict[str, Any]:
    """Пробная генерация прогноза через эндпоинт"""
    adapter = FortuneAdapter(
        endpoint_url=config.FORTUNE_ENDPOINT_URL,
        api_key=config.FORTUNE_ENDPOINT_KEY,
        timeout=config.FORTUNE_CLIENT_TIMEOUT
    )
    report, source = await adapter.generate_with_source(SAMPLE_RECORD)
    if source == ReportSource.FALLBACK:
        return {"status": "error", "error": "Эндпоинт недоступен, использован запасной прогноз"}
    return {"status": "success", "detail": report.overall[:60]}


async def check_local_server() -> Dict[str, Any]:
    """Проверка /health запущенного сервиса"""
    url = config.get_api_url("/health")
    try:
        async with aiohttp.ClientSession() as session:
            async with session.get(url, timeout=aiohttp.ClientTimeout(total=5)) as response:
                if response.status != 200:
                    return {"status": "error", "error": f"Статус {response.status}"}
                health = await response.json()
                return {"status": "success", "detail": f"redis: {health.get('redis')}"}
    except aiohttp.ClientError as e:
        return {"status": "error", "error": f"{url} недоступен ({e})"}


async def main(args: argparse.Namespace):
    """Основная функция"""
    print(f"🔑 OpenAI: {mask_secret(config.OPENAI_API_KEY)}")
    print(f"🔑 Supabase: {mask_secret(config.SUPABASE_ANON_KEY)}")

    checks = {"Assistant": check_assistant()}
    if args.test:
        checks["Chart API"] = check_chart()
        checks["Generation endpoint"] = check_generation()
    if args.local:
        checks["Local server"] = check_local_server()

    results = await asyncio.gather(*checks.values())

    print("\n" + "="*50)
    print("📊 РЕЗУЛЬТАТЫ ПРОВЕРКИ")
    print("="*50)

    for name, result in zip(checks.keys(), results):
        status = result["status"]
        if status == "missing":
            print(f"🔴 {name}: не настроен")
        elif status == "success":
            print(f"🟢 {name}: OK ({result.get('detail', '')})")
        else:
            print(f"🔴 {name}: Ошибка - {result.get('error', 'Неизвестная ошибка')}")

    print("\n🎉 Проверка завершена!")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Проверка внешних сервисов сажу-прогноза")
    parser.add_argument("--test", action="store_true", help="Выполнить пробные запросы карты и генерации")
    parser.add_argument("--local", action="store_true", help="Проверить локально запущенный сервис")
    asyncio.run(main(parser.parse_args()))

"""
Saju Fortune API Service - Main Application
"""
import asyncio
import logging
from contextlib import asynccontextmanager
import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import config
from core.cache import CacheManager
from core.assistant_client import AssistantClient
from core.supabase_client import SupabaseTableClient
from api.v1 import health, saju, records, generate_saju
from api.middleware import log_request_middleware
from modules.saju import (
    ChartAdapter,
    FortuneAdapter,
    GenerationService,
    PendingSaveStore,
    SajuResultRepository,
    SajuService,
)

# Настройка логирования
logging.basicConfig(
    level=config.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.FileHandler(f"{config.LOG_DIR}/app.log"),
        logging.StreamHandler(sys.stdout)
    ]
)
logger = logging.getLogger(__name__)

# ================= APPLICATION =================

async def connect_cache(cache_manager: CacheManager, attempts: int) -> bool:
    """Подключение к Redis с несколькими попытками"""
    for attempt in range(1, attempts + 1):
        logger.info(f"Попытка подключения к Redis {attempt}/{attempts}...")
        await cache_manager.connect()
        if cache_manager.redis:
            logger.info(f"Успешное подключение к Redis с попытки {attempt}")
            return True
        logger.warning(f"Не удалось подключиться к Redis с попытки {attempt}. {'Пробуем еще раз...' if attempt < attempts else 'Исчерпаны все попытки.'}")
        if attempt < attempts:
            await asyncio.sleep(1)
    return False


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info(f"Старт {config.APP_NAME}...")

    cache_manager = CacheManager(
        redis_url=config.REDIS_URL,
        ttl_seconds=config.PENDING_SAVE_TTL_SECONDS
    )
    if not await connect_cache(cache_manager, config.REDIS_CONNECT_ATTEMPTS):
        logger.critical(f"Не удалось подключиться к Redis после {config.REDIS_CONNECT_ATTEMPTS} попыток! Отложенные сохранения недоступны.")

    results_table = SupabaseTableClient(
        base_url=config.SUPABASE_URL,
        api_key=config.SUPABASE_ANON_KEY,
        table=config.SUPABASE_RESULTS_TABLE,
        timeout=config.SUPABASE_TIMEOUT
    )

    assistant_client = AssistantClient(
        api_url=config.OPENAI_API_URL,
        api_key=config.OPENAI_API_KEY,
        assistant_id=config.OPENAI_ASSISTANT_ID,
        poll_interval=config.ASSISTANT_POLL_INTERVAL,
        max_poll_attempts=config.ASSISTANT_POLL_MAX_ATTEMPTS,
        timeout=config.ASSISTANT_REQUEST_TIMEOUT
    )

    saju_service = SajuService(
        fortune_adapter=FortuneAdapter(
            endpoint_url=config.FORTUNE_ENDPOINT_URL,
            api_key=config.FORTUNE_ENDPOINT_KEY,
            timeout=config.FORTUNE_CLIENT_TIMEOUT
        ),
        chart_adapter=ChartAdapter(
            api_url=config.CHART_API_URL,
            headers=config.CHART_API_HEADERS
        ),
        repository=SajuResultRepository(results_table),
        pending_saves=PendingSaveStore(cache_manager, ttl_seconds=config.PENDING_SAVE_TTL_SECONDS)
    )

    app.state.cache_manager = cache_manager
    app.state.saju_service = saju_service
    app.state.generation_service = GenerationService(assistant_client)

    yield

    # Shutdown
    logger.info(f"Выключение {config.APP_NAME}...")
    await cache_manager.close()
    logger.info("Redis connection closed.")

# Создание FastAPI приложения
app = FastAPI(
    title="Saju Fortune API",
    description=config.APP_DESCRIPTION,
    version=config.APP_VERSION,
    docs_url="/docs" if config.DEBUG else None,
    redoc_url="/redoc" if config.DEBUG else None,
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    max_age=86400,  # 24 часа
)

# Обработчик OPTIONS запросов для CORS preflight
@app.options("/{full_path:path}")
async def options_handler(full_path: str):
    return {"detail": "OK"}

# Middleware для логирования запросов
app.middleware("http")(log_request_middleware)

# ================= ROUTES =================

app.include_router(health.router)
app.include_router(saju.router, tags=["saju"])
app.include_router(records.router, tags=["records"])
app.include_router(generate_saju.router, tags=["generate"])

# ================= ENTRY POINT =================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host=config.HOST,
        port=config.PORT,
        reload=config.DEBUG,
        log_level=config.LOG_LEVEL.lower()
    )

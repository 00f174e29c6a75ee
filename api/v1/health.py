"""
Эндпоинты проверки здоровья сервиса
"""
from datetime import datetime
from fastapi import APIRouter, Request

import config

router = APIRouter()

@router.get("/health")
async def health_check(request: Request):
    """Проверка здоровья сервиса"""
    cache_manager = getattr(request.app.state, "cache_manager", None)
    return {
        "status": "healthy",
        "redis": bool(cache_manager and cache_manager.redis),
        "timestamp": datetime.now().isoformat()
    }

@router.get("/")
async def root():
    """Корневой эндпоинт"""
    return {
        "service": config.APP_NAME,
        "version": config.APP_VERSION,
        "status": "active",
        "endpoints": {
            "fortune": "/api/v1/saju/fortune",
            "chart": "/api/v1/saju/chart",
            "reading": "/api/v1/saju/reading",
            "records": "/api/v1/records",
            "generate": "/functions/v1/generate-saju",
            "health": "/health"
        }
    }

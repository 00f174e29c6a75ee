"""
Middleware для API
"""
import time
from fastapi import Request
from fastapi.responses import JSONResponse
import logging

logger = logging.getLogger(__name__)

async def log_request_middleware(request: Request, call_next):
    """Middleware для логирования запросов и времени выполнения"""
    start_time = time.time()

    client_host = request.client.host if request.client else "unknown"

    try:
        response = await call_next(request)
    except Exception as e:
        logger.error(f"Ошибка запроса {request.method} {request.url.path} от {client_host}: {e}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"detail": "Внутренняя ошибка сервера"}
        )

    process_time = time.time() - start_time

    logger.info(
        f"Запрос: {request.method} {request.url.path} "
        f"от {client_host} - Статус: {response.status_code} "
        f"- Время: {process_time:.4f}s"
    )

    # Время обработки в заголовке ответа
    response.headers["X-Process-Time"] = str(process_time)

    return response

"""
Эндпоинт генерации прогноза через ассистента
"""
import logging
from typing import Optional

from fastapi import APIRouter, Header, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

import config
from core.exceptions import SajuException
from modules.saju import BirthRecord, GenerationService

router = APIRouter(prefix="/functions/v1")

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.post("/generate-saju")
async def generate_saju(request: Request, authorization: Optional[str] = Header(None)):
    """
    Генерация прогноза.

    Успех - отчет с корейскими ключами. Если ответ ассистента не разобран,
    возвращается фиксированный запасной отчет. Если ассистент не ответил
    за отведенные попытки - 500 и {"error": ...}.
    """
    if config.GENERATION_API_KEY and authorization != f"Bearer {config.GENERATION_API_KEY}":
        return _error(401, "Неверный ключ авторизации")

    try:
        record = BirthRecord.model_validate(await request.json())
    except ValidationError as e:
        return _error(400, f"Некорректные данные рождения: {e.error_count()} ошибок")
    except ValueError:
        return _error(400, "Тело запроса не является JSON")

    service: GenerationService = request.app.state.generation_service
    try:
        report = await service.generate(record)
    except SajuException as e:
        logger.error(f"Ошибка генерации прогноза: {e.message}")
        return _error(500, e.message)

    return report.to_wire()

"""
Эндпоинты сохраненных результатов пользователя
"""
import logging
from typing import Optional

from fastapi import APIRouter, Header, HTTPException, Request

from core.exceptions import CacheException, SajuException, saju_exception_handler
from modules.saju import SajuService
from modules.saju.models import PendingSaveRequest, SaveRequest

router = APIRouter(prefix="/api/v1/records")

logger = logging.getLogger(__name__)


def _require(value: Optional[str], header: str) -> str:
    if not value:
        raise HTTPException(status_code=401, detail=f"Отсутствует заголовок {header}")
    return value


@router.get("")
async def list_records(request: Request, x_user_id: Optional[str] = Header(None)):
    """Сохраненные результаты пользователя, новые первыми"""
    user_id = _require(x_user_id, "X-User-Id")
    service: SajuService = request.app.state.saju_service
    try:
        return {"records": await service.list_records(user_id)}
    except SajuException as e:
        raise saju_exception_handler(e)


@router.post("/save")
async def save_record(save_request: SaveRequest, request: Request, x_user_id: Optional[str] = Header(None)):
    """
    Сохранение результата в аккаунт

    - анонимная запись (recordId) присваивается пользователю, если еще свободна
    - иначе создается новая запись
    """
    user_id = _require(x_user_id, "X-User-Id")
    service: SajuService = request.app.state.saju_service
    try:
        outcome, record_id = await service.save_for_user(
            user_id, save_request.input, save_request.result, save_request.record_id
        )
    except SajuException as e:
        raise saju_exception_handler(e)
    return {"outcome": outcome.value, "record_id": record_id}


@router.post("/pending")
async def remember_pending_save(
    pending_request: PendingSaveRequest,
    request: Request,
    x_session_key: Optional[str] = Header(None)
):
    """Запомнить запись перед входом через редирект"""
    session_key = _require(x_session_key, "X-Session-Key")
    service: SajuService = request.app.state.saju_service
    try:
        await service.remember_pending_save(session_key, pending_request.record_id)
    except CacheException as e:
        raise saju_exception_handler(e)
    return {"status": "pending", "record_id": pending_request.record_id}


@router.post("/pending/complete")
async def complete_pending_save(
    request: Request,
    x_session_key: Optional[str] = Header(None),
    x_user_id: Optional[str] = Header(None)
):
    """Присвоить отложенную запись после подтверждения сессии"""
    session_key = _require(x_session_key, "X-Session-Key")
    user_id = _require(x_user_id, "X-User-Id")
    service: SajuService = request.app.state.saju_service
    outcome, record_id = await service.complete_pending_save(session_key, user_id)
    return {"outcome": outcome.value, "record_id": record_id}


@router.delete("/pending")
async def discard_pending_save(request: Request, x_session_key: Optional[str] = Header(None)):
    """Сброс при выходе из аккаунта"""
    session_key = _require(x_session_key, "X-Session-Key")
    service: SajuService = request.app.state.saju_service
    await service.discard_pending_save(session_key)
    return {"status": "discarded"}


@router.delete("/{record_id}")
async def delete_record(record_id: str, request: Request, x_user_id: Optional[str] = Header(None)):
    user_id = _require(x_user_id, "X-User-Id")
    service: SajuService = request.app.state.saju_service
    try:
        deleted = await service.delete_record(user_id, record_id)
    except SajuException as e:
        raise saju_exception_handler(e)
    if not deleted:
        raise HTTPException(status_code=404, detail=f"Запись {record_id} не найдена")
    logger.info(f"Пользователь {user_id} удалил запись {record_id}")
    return {"status": "deleted", "record_id": record_id}

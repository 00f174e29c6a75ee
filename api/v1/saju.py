"""
Эндпоинты сажу-прогноза и карты манседёк
"""
from typing import Any, Dict, Optional

from fastapi import APIRouter, Header, HTTPException, Query, Request

import config
from modules.saju import BirthRecord, ChartResult, SajuService
from modules.saju.models import ShareRequest
from modules.saju.share import build_share_url, format_birth_info, parse_share_data

router = APIRouter(prefix="/api/v1/saju")


def _chart_payload(chart: Optional[ChartResult]) -> Dict[str, Any]:
    # None - карта недоступна, клиент показывает заглушку
    return {
        "available": chart is not None,
        "chart": chart.model_dump(by_alias=True) if chart is not None else None,
    }


@router.post("/fortune")
async def create_fortune(record: BirthRecord, request: Request, x_user_id: Optional[str] = Header(None)):
    """
    Генерация прогноза по данным рождения

    Всегда возвращает полный отчет: при недоступности генерации - запасной.
    """
    service: SajuService = request.app.state.saju_service
    submission = await service.submit(record, user_id=x_user_id)
    return submission.to_wire()


@router.post("/chart")
async def get_chart(record: BirthRecord, request: Request):
    """Карта манседёк; available=false, если внешний API недоступен"""
    service: SajuService = request.app.state.saju_service
    return _chart_payload(await service.fetch_chart(record))


@router.post("/reading")
async def create_reading(record: BirthRecord, request: Request, x_user_id: Optional[str] = Header(None)):
    """Прогноз и карта одним запросом (выполняются параллельно)"""
    service: SajuService = request.app.state.saju_service
    submission, chart = await service.submit_with_chart(record, user_id=x_user_id)
    return {
        "fortune": submission.to_wire(),
        "chart": _chart_payload(chart),
        "birth_info": format_birth_info(record),
    }


@router.post("/share")
async def create_share_link(share_request: ShareRequest):
    """Ссылка на краткий результат"""
    return {"url": build_share_url(config.SHARE_BASE_URL, share_request.input, share_request.result)}


@router.get("/share")
async def read_share_link(data: str = Query(..., description="Параметр data из ссылки")):
    """Разбор данных из ссылки"""
    share = parse_share_data(data)
    if share is None:
        raise HTTPException(status_code=400, detail="Некорректные данные ссылки")
    return share.model_dump(by_alias=True, mode="json")

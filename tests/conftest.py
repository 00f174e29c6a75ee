"""
Общие фикстуры тестов: данные рождения, фейковые внешние сервисы
"""
import itertools
from typing import Any, Callable, Dict, List, Optional

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from modules.saju import BirthRecord, FortuneReport
from modules.saju.fallback import server_fallback_report


@pytest.fixture
def birth_record() -> BirthRecord:
    return BirthRecord(
        name="김철수",
        gender="남자",
        birthYear=1990,
        birthMonth=5,
        birthDay=15,
        birthTime="선택",
        lunarCalendar=False,
    )


@pytest.fixture
def remote_report() -> FortuneReport:
    """Отчет, отличимый от запасных"""
    return server_fallback_report().model_copy(update={"overall": "원격 생성 총평"})


@pytest_asyncio.fixture
async def start_server():
    """Фабрика локальных HTTP-серверов на aiohttp; все останавливаются после теста"""
    servers: List[TestServer] = []

    async def _start(app: web.Application) -> TestServer:
        server = TestServer(app)
        await server.start_server()
        servers.append(server)
        return server

    yield _start

    for server in servers:
        await server.close()


class FakeCache:
    """Кэш в памяти с интерфейсом CacheManager"""

    def __init__(self, fail_writes: bool = False):
        self.data: Dict[str, Any] = {}
        self.ttls: Dict[str, Optional[int]] = {}
        self.fail_writes = fail_writes
        self.redis = object()

    async def set(self, key: str, data: Any, ttl_seconds: Optional[int] = None) -> bool:
        if self.fail_writes:
            return False
        self.data[key] = data
        self.ttls[key] = ttl_seconds
        return True

    async def pop(self, key: str) -> Optional[Any]:
        self.ttls.pop(key, None)
        return self.data.pop(key, None)

    async def delete(self, key: str) -> None:
        self.data.pop(key, None)
        self.ttls.pop(key, None)


@pytest.fixture
def fake_cache() -> FakeCache:
    return FakeCache()


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


def _as_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class FakePostgrest:
    """
    Минимальная эмуляция PostgREST для одной таблицы:
    фильтры eq./is.null, order=created_at.desc, limit
    """

    SERVICE_PARAMS = ("select", "limit", "order")

    def __init__(self, table: str = "saju_results"):
        self.table = table
        self.rows: List[Dict[str, Any]] = []
        self.requests: List[Dict[str, Any]] = []
        self.fail_status: Optional[int] = None
        self._ids = itertools.count(1)

    def _matches(self, row: Dict[str, Any], params: Dict[str, str]) -> bool:
        for key, condition in params.items():
            if key in self.SERVICE_PARAMS:
                continue
            if condition == "is.null":
                if row.get(key) is not None:
                    return False
            elif condition.startswith("eq."):
                if row.get(key) is None or _as_text(row[key]) != condition[3:]:
                    return False
        return True

    async def handle(self, request: web.Request) -> web.Response:
        params = dict(request.query)
        payload = await request.json() if request.can_read_body else None
        self.requests.append({
            "method": request.method,
            "params": params,
            "payload": payload,
            "headers": dict(request.headers),
        })
        if self.fail_status:
            return web.json_response({"message": "unavailable"}, status=self.fail_status)

        if request.method == "POST":
            row_id = next(self._ids)
            row = {**payload, "id": row_id, "created_at": row_id}
            self.rows.append(row)
            return web.json_response([row], status=201)

        matched = [row for row in self.rows if self._matches(row, params)]
        if request.method == "GET":
            if params.get("order") == "created_at.desc":
                matched.sort(key=lambda r: r["created_at"], reverse=True)
            if "limit" in params:
                matched = matched[:int(params["limit"])]
            return web.json_response(matched)
        if request.method == "PATCH":
            for row in matched:
                row.update(payload)
            return web.json_response(matched)
        if request.method == "DELETE":
            self.rows = [row for row in self.rows if row not in matched]
            return web.json_response(matched)
        return web.json_response({"message": "method not allowed"}, status=405)

    def app(self) -> web.Application:
        app = web.Application()
        app.router.add_route("*", f"/rest/v1/{self.table}", self.handle)
        return app


@pytest.fixture
def postgrest() -> FakePostgrest:
    return FakePostgrest()


def server_base_url(server: TestServer) -> str:
    return str(server.make_url("/")).rstrip("/")


def json_route(method: str, path: str, respond: Callable[[web.Request], Any]) -> web.Application:
    """Приложение с одним маршрутом; respond возвращает web.Response"""
    app = web.Application()
    app.router.add_route(method, path, respond)
    return app


def chart_symbol(symbol_id: int, name: str, chinese: str) -> Dict[str, Any]:
    return {"id": symbol_id, "name": name, "chinese": chinese}


def chart_pillar() -> Dict[str, Any]:
    stem = {
        **chart_symbol(7, "경", "庚"),
        "_음양": chart_symbol(1, "양", "陽"),
        "_오행": chart_symbol(4, "금", "金"),
        "_십성": chart_symbol(2, "겁재", "劫財"),
    }
    branch = {
        **chart_symbol(7, "오", "午"),
        "_음양": chart_symbol(1, "양", "陽"),
        "_오행": chart_symbol(2, "화", "火"),
        "_십성": chart_symbol(8, "정관", "正官"),
    }
    return {
        "_천간": stem,
        "_지지": branch,
        "_지장간": [chart_symbol(3, "병", "丙"), chart_symbol(6, "기", "己")],
        "_운성": chart_symbol(5, "목욕", "沐浴"),
    }


@pytest.fixture
def chart_body() -> Dict[str, Any]:
    """Ответ API карты манседёк"""
    pillar = chart_pillar()
    return {
        "status": 200,
        "data": {
            "bitmap": 15,
            "_기본명식": {"_세차": pillar, "_월건": pillar, "_일진": pillar, "_시진": pillar},
            "_신살": {"_일진": chart_symbol(11, "도화살", "桃花殺")},
            "profile": {
                "index": 0,
                "sexagenaryCycle": "경오년 신사월 경진일 임오시",
                "sunBirth": "1990/05/15 12:00",
                "lunBirth": "1990/04/21 12:00",
                "location": "서울특별시, 대한민국",
            },
        },
    }

"""
Тесты адаптера API карты манседёк
"""
import aiohttp
import pytest
from aiohttp import web

from modules.saju import ChartAdapter

from conftest import json_route

PATH = "/api/pro/profile/saju/chart"


async def _adapter_for(start_server, handler) -> ChartAdapter:
    server = await start_server(json_route("POST", PATH, handler))
    return ChartAdapter(str(server.make_url(PATH)), location_id=1835847, location_name=" 서울특별시, 대한민국")


class TestChartAdapter:

    @pytest.mark.asyncio
    async def test_chart_returned(self, start_server, birth_record, chart_body):
        received = {}

        async def handler(request):
            received.update(await request.json())
            return web.json_response(chart_body)

        adapter = await _adapter_for(start_server, handler)
        chart = await adapter.fetch(birth_record)

        assert chart is not None
        assert chart.pillars.day.stem.name == "경"
        assert chart.pillars.year.branch.element.chinese == "火"
        assert chart.profile.sexagenaryCycle.startswith("경오년")
        assert received["birthday"] == "1990/05/15"
        assert received["birthtime"] == "12:00"
        assert received["gender"] == "M"
        assert received["locationId"] == 1835847

    @pytest.mark.asyncio
    async def test_dump_keeps_upstream_keys(self, start_server, birth_record, chart_body):
        async def handler(request):
            return web.json_response(chart_body)

        adapter = await _adapter_for(start_server, handler)
        chart = await adapter.fetch(birth_record)
        dumped = chart.model_dump(by_alias=True)

        assert "_기본명식" in dumped
        assert dumped["_기본명식"]["_일진"]["_천간"]["_오행"]["name"] == "금"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [401, 404, 500])
    async def test_non_2xx_is_none(self, start_server, birth_record, chart_body, status):
        async def handler(request):
            return web.json_response(chart_body, status=status)

        adapter = await _adapter_for(start_server, handler)
        assert await adapter.fetch(birth_record) is None

    @pytest.mark.asyncio
    async def test_unsuccessful_envelope(self, start_server, birth_record, chart_body):
        async def handler(request):
            return web.json_response({**chart_body, "status": 500})

        adapter = await _adapter_for(start_server, handler)
        assert await adapter.fetch(birth_record) is None

    @pytest.mark.asyncio
    async def test_malformed_body(self, start_server, birth_record):
        async def handler(request):
            return web.json_response({"status": 200, "data": {"profile": {}}})

        adapter = await _adapter_for(start_server, handler)
        assert await adapter.fetch(birth_record) is None

    @pytest.mark.asyncio
    async def test_not_json(self, start_server, birth_record):
        async def handler(request):
            return web.Response(text="oops")

        adapter = await _adapter_for(start_server, handler)
        assert await adapter.fetch(birth_record) is None

    @pytest.mark.asyncio
    async def test_unreachable(self, birth_record):
        adapter = ChartAdapter("http://127.0.0.1:1/chart")
        assert await adapter.fetch(birth_record) is None

    @pytest.mark.asyncio
    async def test_created_status_is_chart(self, start_server, birth_record, chart_body):
        async def handler(request):
            return web.json_response(chart_body, status=201)

        adapter = await _adapter_for(start_server, handler)
        assert await adapter.fetch(birth_record) is not None

    def test_default_transport_timeout(self):
        assert ChartAdapter("http://localhost/chart")._client_timeout() == aiohttp.client.DEFAULT_TIMEOUT

    def test_configured_timeout(self):
        adapter = ChartAdapter("http://localhost/chart", timeout=5)
        assert adapter._client_timeout() == aiohttp.ClientTimeout(total=5)

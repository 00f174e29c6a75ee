"""
Тесты генерации прогноза через Assistants API
"""
import json
from typing import List
from unittest.mock import AsyncMock

import pytest
from aiohttp import web

from core.assistant_client import AssistantClient
from core.exceptions import NetworkException, UpstreamException
from modules.saju import GenerationService
from modules.saju.data import SERVER_FALLBACK_REPORT
from modules.saju.generation_service import extract_json_object, parse_fortune_text


class FakeAssistantsApi:
    """Assistants API с заранее заданной последовательностью статусов запуска"""

    def __init__(self, statuses: List[str], reply: str = "", initial_status: str = "queued"):
        self.statuses = list(statuses)
        self.reply = reply
        self.initial_status = initial_status
        self.polls = 0
        self.messages: List[dict] = []
        self.headers: List[dict] = []

    async def create_thread(self, request):
        self.headers.append(dict(request.headers))
        return web.json_response({"id": "thread_1", "object": "thread"})

    async def add_message(self, request):
        self.messages.append(await request.json())
        return web.json_response({"id": "msg_1", "object": "thread.message"})

    async def create_run(self, request):
        body = await request.json()
        return web.json_response({"id": "run_1", "assistant_id": body["assistant_id"], "status": self.initial_status})

    async def get_run(self, request):
        self.polls += 1
        status = self.statuses.pop(0) if self.statuses else "in_progress"
        if status == "http_error":
            return web.json_response({"error": {"message": "temporary"}}, status=500)
        return web.json_response({"id": "run_1", "status": status})

    async def list_messages(self, request):
        return web.json_response({
            "data": [
                {"role": "assistant", "content": [{"type": "text", "text": {"value": self.reply}}]},
                {"role": "user", "content": [{"type": "text", "text": {"value": "..."}}]},
            ]
        })

    def app(self) -> web.Application:
        app = web.Application()
        app.router.add_post("/v1/threads", self.create_thread)
        app.router.add_post("/v1/threads/{thread_id}/messages", self.add_message)
        app.router.add_get("/v1/threads/{thread_id}/messages", self.list_messages)
        app.router.add_post("/v1/threads/{thread_id}/runs", self.create_run)
        app.router.add_get("/v1/threads/{thread_id}/runs/{run_id}", self.get_run)
        return app


async def _client_for(start_server, api: FakeAssistantsApi, max_poll_attempts: int = 5) -> AssistantClient:
    server = await start_server(api.app())
    return AssistantClient(
        api_url=str(server.make_url("/v1")),
        api_key="sk-test",
        assistant_id="asst_1",
        poll_interval=0,
        max_poll_attempts=max_poll_attempts,
        timeout=5,
    )


class TestAssistantClient:

    @pytest.mark.asyncio
    async def test_completed_run(self, start_server):
        api = FakeAssistantsApi(["in_progress", "in_progress", "completed"], reply="안녕하세요")
        client = await _client_for(start_server, api)

        text = await client.run_assistant('{"name": "김철수"}')

        assert text == "안녕하세요"
        assert api.polls == 3
        assert api.messages == [{"role": "user", "content": '{"name": "김철수"}'}]
        assert api.headers[0]["OpenAI-Beta"] == "assistants=v2"
        assert api.headers[0]["Authorization"] == "Bearer sk-test"

    @pytest.mark.asyncio
    async def test_poll_budget_exhausted(self, start_server):
        api = FakeAssistantsApi([])
        client = await _client_for(start_server, api, max_poll_attempts=3)

        with pytest.raises(UpstreamException):
            await client.run_assistant("{}")
        assert api.polls == 3

    @pytest.mark.asyncio
    async def test_failed_run_stops_polling(self, start_server):
        api = FakeAssistantsApi(["failed", "completed"])
        client = await _client_for(start_server, api)

        with pytest.raises(UpstreamException):
            await client.run_assistant("{}")
        assert api.polls == 1

    @pytest.mark.asyncio
    async def test_failed_poll_consumes_attempt(self, start_server):
        api = FakeAssistantsApi(["http_error", "completed"], reply="ok")
        client = await _client_for(start_server, api)

        assert await client.run_assistant("{}") == "ok"
        assert api.polls == 2

    @pytest.mark.asyncio
    async def test_already_completed_run_is_not_polled(self, start_server):
        api = FakeAssistantsApi([], reply="바로 완료", initial_status="completed")
        client = await _client_for(start_server, api)

        assert await client.run_assistant("{}") == "바로 완료"
        assert api.polls == 0

    @pytest.mark.asyncio
    async def test_unreachable(self):
        client = AssistantClient("http://127.0.0.1:1/v1", "sk-test", "asst_1", poll_interval=0)
        with pytest.raises(NetworkException):
            await client.run_assistant("{}")


class TestParseFortuneText:

    def test_json_inside_prose(self, remote_report):
        text = f"다음은 결과입니다:\n{json.dumps(remote_report.to_wire(), ensure_ascii=False)}\n감사합니다."
        assert parse_fortune_text(text) == remote_report

    def test_no_json(self):
        assert parse_fortune_text("죄송합니다, 답변할 수 없습니다.").to_wire() == SERVER_FALLBACK_REPORT

    def test_wrong_shape(self):
        assert parse_fortune_text('{"평생사주_총평": "짧은 총평"}').to_wire() == SERVER_FALLBACK_REPORT

    def test_greedy_span(self):
        # от первой "{" до последней "}": два объекта подряд не разбираются
        assert extract_json_object('{"a": 1} и {"b": 2}') is None
        assert extract_json_object('prefix {"a": {"b": 2}} suffix') == {"a": {"b": 2}}

    def test_empty_text(self):
        assert extract_json_object("") is None


class TestGenerationService:

    @pytest.mark.asyncio
    async def test_message_and_parse(self, birth_record, remote_report):
        assistant = AsyncMock(spec=AssistantClient)
        assistant.run_assistant.return_value = json.dumps(remote_report.to_wire(), ensure_ascii=False)

        report = await GenerationService(assistant).generate(birth_record)

        assert report == remote_report
        sent = json.loads(assistant.run_assistant.await_args.args[0])
        assert sent["gender"] == "남"
        assert sent["calendar"] == "양력"
        assert sent["hour_earthly_branch"] == "선택"

    @pytest.mark.asyncio
    async def test_unparseable_reply(self, birth_record):
        assistant = AsyncMock(spec=AssistantClient)
        assistant.run_assistant.return_value = "no json here"

        report = await GenerationService(assistant).generate(birth_record)
        assert report.to_wire() == SERVER_FALLBACK_REPORT

    @pytest.mark.asyncio
    async def test_workflow_failure_propagates(self, birth_record):
        assistant = AsyncMock(spec=AssistantClient)
        assistant.run_assistant.side_effect = UpstreamException("timeout")

        with pytest.raises(UpstreamException):
            await GenerationService(assistant).generate(birth_record)

    @pytest.mark.asyncio
    async def test_end_to_end_with_api(self, start_server, birth_record, remote_report):
        api = FakeAssistantsApi(["completed"], reply=f"```json\n{json.dumps(remote_report.to_wire(), ensure_ascii=False)}\n```")
        client = await _client_for(start_server, api)

        report = await GenerationService(client).generate(birth_record)

        assert report == remote_report
        assert json.loads(api.messages[0]["content"])["name"] == "김철수"

"""聊天代理接口测试

POST /api/chat 成功 / 空消息 / 上游不可达 / 上游错误透传；
GET /api/chat/health 三种状态均返回 200。
"""

import json

import httpx
import pytest
from httpx import AsyncClient
from taskboard.gateway.services.chat_service import LENGTH_INSTRUCTION, SYSTEM_PROMPT


class TestSendMessage:
    async def test_successful_reply(self, client: AsyncClient, upstream):
        resp = await client.post("/api/chat", json={"message": "Where to go in spring?"})

        assert resp.status_code == 200
        assert resp.json() == {"message": "Try Lisbon in May.", "model": "llama3.2:1b"}

        assert len(upstream.requests) == 1
        sent = json.loads(upstream.requests[0].content)
        assert sent["stream"] is False
        assert sent["prompt"].startswith(SYSTEM_PROMPT)
        assert "User question: Where to go in spring?" in sent["prompt"]
        assert sent["prompt"].endswith(LENGTH_INSTRUCTION)

    @pytest.mark.parametrize("body", [{"message": ""}, {"message": "   "}, {}])
    async def test_empty_message_rejected(self, client: AsyncClient, upstream, body):
        resp = await client.post("/api/chat", json=body)

        assert resp.status_code == 400
        assert resp.json() == {"error": "Message cannot be empty"}
        assert upstream.requests == []

    async def test_upstream_unreachable(self, client: AsyncClient, upstream):
        def refuse(request):
            raise httpx.ConnectError("Connection refused", request=request)

        upstream.handler = refuse
        resp = await client.post("/api/chat", json={"message": "hi"})

        assert resp.status_code == 503
        assert resp.json() == {
            "error": "AI service unavailable. Please ensure Ollama is running."
        }

    async def test_upstream_timeout(self, client: AsyncClient, upstream):
        def slow(request):
            raise httpx.ReadTimeout("timed out", request=request)

        upstream.handler = slow
        resp = await client.post("/api/chat", json={"message": "hi"})
        assert resp.status_code == 503

    @pytest.mark.parametrize("status_code", [500, 404])
    async def test_upstream_error_status_forwarded(self, client, upstream, status_code):
        upstream.handler = lambda request: httpx.Response(
            status_code, json={"error": "model 'llama3.2:1b' not found, secret detail"}
        )
        resp = await client.post("/api/chat", json={"message": "hi"})

        assert resp.status_code == status_code
        assert resp.json() == {"error": "Failed to get response from AI model"}
        assert "secret detail" not in resp.text

    async def test_upstream_redirect_mapped_to_bad_gateway(self, client: AsyncClient, upstream):
        upstream.handler = lambda request: httpx.Response(302)
        resp = await client.post("/api/chat", json={"message": "hi"})
        assert resp.status_code == 502

    async def test_malformed_upstream_body(self, client: AsyncClient, upstream):
        upstream.handler = lambda request: httpx.Response(200, text="not json")
        resp = await client.post("/api/chat", json={"message": "hi"})

        assert resp.status_code == 500
        assert resp.json() == {"error": "An error occurred processing your request"}

    async def test_placeholders_for_missing_fields(self, client: AsyncClient, upstream):
        upstream.handler = lambda request: httpx.Response(200, json={"done": True})
        resp = await client.post("/api/chat", json={"message": "hi"})

        assert resp.status_code == 200
        assert resp.json() == {"message": "No response generated", "model": "unknown"}

    async def test_empty_response_text_uses_placeholder(self, client: AsyncClient, upstream):
        upstream.handler = lambda request: httpx.Response(
            200, json={"response": "", "model": "mistral"}
        )
        resp = await client.post("/api/chat", json={"message": "hi"})
        assert resp.json() == {"message": "No response generated", "model": "mistral"}


class TestChatHealth:
    async def test_running(self, client: AsyncClient, upstream):
        resp = await client.get("/api/chat/health")

        assert resp.status_code == 200
        assert resp.json() == {"status": "Ollama is running", "available": True}
        assert upstream.requests[0].url.path == "/api/tags"

    async def test_not_responding(self, client: AsyncClient, upstream):
        upstream.handler = lambda request: httpx.Response(500)
        resp = await client.get("/api/chat/health")

        assert resp.status_code == 200
        assert resp.json() == {"status": "Ollama not responding", "available": False}

    async def test_not_available(self, client: AsyncClient, upstream):
        def refuse(request):
            raise httpx.ConnectError("Connection refused", request=request)

        upstream.handler = refuse
        resp = await client.get("/api/chat/health")

        assert resp.status_code == 200
        assert resp.json() == {"status": "Ollama not available", "available": False}

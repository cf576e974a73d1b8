"""apps/gateway 测试配置 -- FastAPI app + httpx AsyncClient + Ollama 桩"""

import os
from collections.abc import AsyncGenerator, Callable
from pathlib import Path

import httpx
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from taskboard.core.store import create_store_group
from taskboard.provider import OllamaClient

OLLAMA_API_URL = "http://ollama.test/api/generate"
OLLAMA_TAGS_URL = "http://ollama.test/api/tags"


def _default_handler(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/api/tags":
        return httpx.Response(200, json={"models": [{"name": "llama3.2:1b"}]})
    return httpx.Response(
        200,
        json={"model": "llama3.2:1b", "response": "Try Lisbon in May.", "done": True},
    )


class UpstreamStub:
    """可替换 handler 的 Ollama 桩，记录全部出站请求"""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.handler: Callable[[httpx.Request], httpx.Response] = _default_handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)


@pytest_asyncio.fixture
async def upstream() -> UpstreamStub:
    return UpstreamStub()


@pytest_asyncio.fixture
async def app(tmp_path: Path, upstream: UpstreamStub):
    """创建测试用 FastAPI app 实例（手动初始化，绕过 lifespan）"""
    os.environ["TASKBOARD_DB_PATH"] = str(tmp_path / "sqlite" / "test.db")
    os.environ["LOGFIRE_SEND_TO_LOGFIRE"] = "false"

    from taskboard.gateway.main import create_app

    application = create_app()

    store_group = await create_store_group(str(tmp_path / "sqlite" / "test.db"))
    application.state.store_group = store_group
    application.state.llm_client = OllamaClient(
        api_url=OLLAMA_API_URL,
        tags_url=OLLAMA_TAGS_URL,
        transport=httpx.MockTransport(upstream),
    )

    yield application

    await store_group.conn.close()
    for key in ["TASKBOARD_DB_PATH", "LOGFIRE_SEND_TO_LOGFIRE"]:
        os.environ.pop(key, None)


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """提供 httpx AsyncClient 用于测试"""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

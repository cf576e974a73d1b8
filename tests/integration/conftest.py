"""集成测试共享 fixture

经过真实 lifespan 启动应用：真实 SQLite 文件 + 真实 OllamaClient。
Ollama 地址指向本机未监听端口，模拟上游不可达。
"""

import os
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

UNREACHABLE_OLLAMA = "http://127.0.0.1:9"

_ENV_KEYS = [
    "TASKBOARD_DB_PATH",
    "OLLAMA_API_URL",
    "OLLAMA_TAGS_URL",
    "TASKBOARD_LLM_TIMEOUT_S",
    "LOGFIRE_SEND_TO_LOGFIRE",
]


@pytest_asyncio.fixture
async def integration_app(tmp_path: Path):
    """集成测试用 FastAPI app（lifespan 已运行）"""
    os.environ["TASKBOARD_DB_PATH"] = str(tmp_path / "data" / "taskboard.db")
    os.environ["OLLAMA_API_URL"] = f"{UNREACHABLE_OLLAMA}/api/generate"
    os.environ["OLLAMA_TAGS_URL"] = f"{UNREACHABLE_OLLAMA}/api/tags"
    os.environ["TASKBOARD_LLM_TIMEOUT_S"] = "5"
    os.environ["LOGFIRE_SEND_TO_LOGFIRE"] = "false"

    from taskboard.gateway.main import create_app

    app = create_app()
    async with app.router.lifespan_context(app):
        yield app

    for key in _ENV_KEYS:
        os.environ.pop(key, None)


@pytest_asyncio.fixture
async def client(integration_app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=integration_app),
        base_url="http://test",
    ) as ac:
        yield ac

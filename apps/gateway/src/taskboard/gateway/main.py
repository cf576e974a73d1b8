"""FastAPI 应用主文件

app 创建 + lifespan 管理：DB 初始化/关闭 + OllamaClient 初始化 + 路由注册。
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from taskboard.core.config import get_db_path
from taskboard.core.store import create_store_group
from taskboard.provider import create_client, load_provider_config

from .config import get_cors_origins
from .errors import register_exception_handlers
from .middleware.logging_config import setup_logfire, setup_logging
from .middleware.logging_mw import LoggingMiddleware
from .routes import chat, health, tasks

log = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """应用生命周期管理：启动时初始化 DB 和 Ollama 客户端，关闭时清理连接"""
    db_path = get_db_path()
    store_group = await create_store_group(db_path)
    app.state.store_group = store_group

    provider_config = load_provider_config()
    app.state.provider_config = provider_config
    app.state.llm_client = create_client(provider_config)
    log.info(
        "llm_client_initialized",
        api_url=provider_config.api_url,
        model=provider_config.model,
        timeout_s=provider_config.timeout_s,
    )
    log.info("store_initialized", db_path=db_path)

    yield

    # 关闭：清理数据库连接
    if hasattr(app.state, "store_group") and app.state.store_group:
        await app.state.store_group.conn.close()


def create_app() -> FastAPI:
    """创建 FastAPI 应用实例"""
    app = FastAPI(
        title="Taskboard API",
        version="0.1.0",
        description="任务管理 CRUD + Ollama 聊天代理",
        lifespan=lifespan,
    )

    # 注册中间件（CORS 最外层）
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_cors_origins(),
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Location", "X-Request-ID"],
    )

    # 初始化日志
    setup_logging()
    setup_logfire(app)

    register_exception_handlers(app)

    # 注册路由
    app.include_router(tasks.router, tags=["tasks"])
    app.include_router(chat.router, tags=["chat"])
    app.include_router(health.router, tags=["health"])

    return app


# 默认 app 实例（uvicorn 入口）
app = create_app()

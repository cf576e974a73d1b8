"""健康检查路由

GET /health: Liveness 检查，永远返回 200 纯文本 "OK"。
GET /ready: Readiness 检查，包含 SQLite 连通性；
         profile=llm/full 时额外探测 Ollama。
"""

import structlog
from fastapi import APIRouter, Query, Request
from starlette.responses import JSONResponse, PlainTextResponse

log = structlog.get_logger()

router = APIRouter()


@router.get("/health", response_class=PlainTextResponse)
async def health():
    """Liveness 检查 -- 永远返回 200"""
    return PlainTextResponse("OK")


@router.get("/ready")
async def ready(
    request: Request,
    profile: str | None = Query(
        default=None,
        description="检查配置：core（默认）仅核心检查；llm/full 包含 Ollama 探测",
    ),
):
    """Readiness 检查 -- 验证核心依赖可用性

    检查项：
    1. sqlite: 数据库连通性
    2. ollama: 根据 profile 决定是否探测
    """
    effective_profile = profile or "core"

    checks = {}
    all_ok = True

    # 1. SQLite 连通性检查
    try:
        store_group = request.app.state.store_group
        cursor = await store_group.conn.execute("SELECT 1")
        await cursor.fetchone()
        checks["sqlite"] = "ok"
    except Exception as e:
        log.warning("ready_sqlite_check_failed", error=str(e))
        checks["sqlite"] = "unavailable"
        all_ok = False

    # 2. Ollama 探测
    if effective_profile in ("llm", "full"):
        llm_client = getattr(request.app.state, "llm_client", None)
        if llm_client is not None and await llm_client.health_check():
            checks["ollama"] = "ok"
        else:
            checks["ollama"] = "unreachable"
            all_ok = False
    else:
        checks["ollama"] = "skipped"

    status_code = 200 if all_ok else 503
    status_text = "ready" if all_ok else "not_ready"

    return JSONResponse(
        status_code=status_code,
        content={
            "status": status_text,
            "profile": effective_profile,
            "checks": checks,
        },
    )

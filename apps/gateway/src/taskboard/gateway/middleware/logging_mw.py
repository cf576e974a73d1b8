"""请求日志中间件

每个请求：
- 生成 ULID request_id，写入 X-Request-ID 响应头
- 路径为 /api/tasks/{id} 时额外绑定 task_id
- 记录 request_completed（状态码 + 耗时）；未处理异常记录 request_failed 后继续上抛
"""

import time

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from ulid import ULID

REQUEST_ID_HEADER = "X-Request-ID"


def extract_task_id(path: str) -> int | None:
    """从 /api/tasks/{id} 中提取整数 id，其余路径返回 None"""
    parts = [part for part in path.split("/") if part]
    if len(parts) == 3 and parts[:2] == ["api", "tasks"] and parts[2].isdigit():
        return int(parts[2])
    return None


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = str(ULID())
        context = {
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
        }
        task_id = extract_task_id(request.url.path)
        if task_id is not None:
            context["task_id"] = task_id

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(**context)
        log = structlog.get_logger()

        start = time.monotonic()
        try:
            response = await call_next(request)
        except Exception:
            await log.aexception(
                "request_failed",
                duration_ms=int((time.monotonic() - start) * 1000),
            )
            raise

        # 健康检查只记 debug，避免探针刷屏
        emit = log.adebug if request.url.path in ("/health", "/ready") else log.ainfo
        await emit(
            "request_completed",
            status_code=response.status_code,
            duration_ms=int((time.monotonic() - start) * 1000),
        )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response

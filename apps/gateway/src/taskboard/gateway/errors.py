"""异常处理器 -- 领域异常到 HTTP 响应的映射

任务类错误：
    TaskValidationError / RequestValidationError -> 400 字段错误
    TaskNotFoundError -> 404 空响应体
聊天类错误（仅返回通用消息，细节只写日志）：
    EmptyMessageError -> 400
    UpstreamUnavailableError -> 503
    UpstreamStatusError -> 透传上游状态码
    ProviderError -> 500
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.responses import JSONResponse, Response
from taskboard.core.exceptions import TaskNotFoundError, TaskValidationError
from taskboard.provider import ProviderError, UpstreamStatusError, UpstreamUnavailableError

from .services.chat_service import EmptyMessageError

log = structlog.get_logger()

VALIDATION_TITLE = "One or more validation errors occurred."
UNAVAILABLE_MESSAGE = "AI service unavailable. Please ensure Ollama is running."
UPSTREAM_ERROR_MESSAGE = "Failed to get response from AI model"
INTERNAL_ERROR_MESSAGE = "An error occurred processing your request"


def validation_problem(errors: dict[str, list[str]]) -> JSONResponse:
    """构造 400 字段错误响应"""
    return JSONResponse(
        status_code=400,
        content={
            "title": VALIDATION_TITLE,
            "status": 400,
            "errors": errors,
        },
    )


async def _task_validation_handler(request: Request, exc: TaskValidationError):
    log.info("task_validation_failed", errors=exc.errors)
    return validation_problem(exc.errors)


async def _request_validation_handler(request: Request, exc: RequestValidationError):
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        # loc 形如 ("path", "task_id")，去掉来源前缀
        loc = [str(part) for part in error.get("loc", ())]
        field = ".".join(loc[1:]) if len(loc) > 1 else (loc[0] if loc else "body")
        errors.setdefault(field, []).append(error.get("msg", "Invalid value."))
    log.info("request_validation_failed", errors=errors)
    return validation_problem(errors)


async def _task_not_found_handler(request: Request, exc: TaskNotFoundError):
    return Response(status_code=404)


async def _empty_message_handler(request: Request, exc: EmptyMessageError):
    return JSONResponse(status_code=400, content={"error": str(exc)})


async def _upstream_unavailable_handler(request: Request, exc: UpstreamUnavailableError):
    log.error("chat_upstream_unavailable", url=exc.url, error=str(exc.original_error))
    return JSONResponse(status_code=503, content={"error": UNAVAILABLE_MESSAGE})


async def _upstream_status_handler(request: Request, exc: UpstreamStatusError):
    log.error("chat_upstream_error", status_code=exc.status_code)
    # 仅透传错误类状态码，其余非 2xx（如 3xx）统一视为网关错误
    status_code = exc.status_code if 400 <= exc.status_code < 600 else 502
    return JSONResponse(status_code=status_code, content={"error": UPSTREAM_ERROR_MESSAGE})


async def _provider_error_handler(request: Request, exc: ProviderError):
    log.error("chat_internal_error", error=str(exc), error_type=type(exc).__name__)
    return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR_MESSAGE})


def register_exception_handlers(app: FastAPI) -> None:
    """注册全部异常处理器"""
    app.add_exception_handler(TaskValidationError, _task_validation_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(TaskNotFoundError, _task_not_found_handler)
    app.add_exception_handler(EmptyMessageError, _empty_message_handler)
    app.add_exception_handler(UpstreamUnavailableError, _upstream_unavailable_handler)
    app.add_exception_handler(UpstreamStatusError, _upstream_status_handler)
    app.add_exception_handler(ProviderError, _provider_error_handler)

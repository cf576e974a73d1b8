"""日志初始化

structlog 与标准库 logging 共用一条处理器链，uvicorn 自身的日志
也经由同一个 formatter 输出，保证 dev / json 两种格式下日志形态一致。

环境变量：
    TASKBOARD_LOG_FORMAT   dev（默认，彩色可读）| json（生产）
    TASKBOARD_LOG_LEVEL    根 logger 级别，默认 INFO
    LOGFIRE_SEND_TO_LOGFIRE  true 时启用 Logfire（需安装 logfire extra）
"""

import logging
import os

import structlog
from fastapi import FastAPI

# uvicorn 默认自带 handler；清掉后向根 logger 传播
_UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def _renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer(ensure_ascii=False)
    return structlog.dev.ConsoleRenderer()


def _route_uvicorn_loggers() -> None:
    for name in _UVICORN_LOGGERS:
        logger = logging.getLogger(name)
        logger.handlers.clear()
        logger.propagate = True
    # 访问日志由 LoggingMiddleware 输出（带 request_id），这里只保留告警
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def setup_logging() -> None:
    """配置 structlog + 标准库 logging，可重复调用"""
    log_format = os.environ.get("TASKBOARD_LOG_FORMAT", "dev").lower()
    log_level = os.environ.get("TASKBOARD_LOG_LEVEL", "INFO").upper()

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=_renderer(log_format),
            foreign_pre_chain=shared_processors,
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, log_level, logging.INFO))

    _route_uvicorn_loggers()


def setup_logfire(app: FastAPI) -> None:
    """按 LOGFIRE_SEND_TO_LOGFIRE 决定是否接入 Logfire

    初始化失败只记告警，本地日志照常工作。
    """
    if os.environ.get("LOGFIRE_SEND_TO_LOGFIRE", "false").lower() != "true":
        return
    try:
        import logfire

        logfire.configure()
        logfire.instrument_fastapi(app)
    except Exception as e:
        structlog.get_logger().warning("logfire_init_failed", error=str(e))

"""Gateway 配置 -- 可通过环境变量覆盖"""

import os

DEFAULT_CORS_ORIGINS = "http://localhost:5173"


def get_cors_origins() -> list[str]:
    """允许跨域调用的来源列表（TASKBOARD_CORS_ORIGINS，逗号分隔）"""
    raw = os.environ.get("TASKBOARD_CORS_ORIGINS", DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def get_bind() -> tuple[str, int]:
    """uvicorn 监听地址（TASKBOARD_HOST / TASKBOARD_PORT）"""
    host = os.environ.get("TASKBOARD_HOST", "127.0.0.1")
    port = int(os.environ.get("TASKBOARD_PORT", "8000"))
    return host, port

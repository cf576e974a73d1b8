"""依赖注入模块 -- 通过 FastAPI Depends 注入 Store / Service 实例

Store 与 OllamaClient 通过 app.state 管理，在 lifespan 中初始化/清理。
"""

from fastapi import Request
from taskboard.core.store import StoreGroup
from taskboard.provider import OllamaClient

from .services.chat_service import ChatService
from .services.task_service import TaskService


def get_store_group(request: Request) -> StoreGroup:
    """从 app.state 获取 StoreGroup 实例"""
    return request.app.state.store_group


def get_llm_client(request: Request) -> OllamaClient:
    """从 app.state 获取 OllamaClient 实例"""
    return request.app.state.llm_client


def get_task_service(request: Request) -> TaskService:
    return TaskService(get_store_group(request))


def get_chat_service(request: Request) -> ChatService:
    return ChatService(get_llm_client(request))

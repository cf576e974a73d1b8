"""聊天代理路由

POST /api/chat: 转发消息到 Ollama，返回 {message, model}。
GET /api/chat/health: Ollama 可用性探测，永远返回 200。
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from ..deps import get_chat_service
from ..services.chat_service import ChatService

router = APIRouter()


class ChatRequest(BaseModel):
    """聊天请求体"""

    message: str | None = Field(default=None, description="用户消息")


class ChatResponse(BaseModel):
    """聊天响应"""

    message: str
    model: str


class ChatHealthResponse(BaseModel):
    """Ollama 可用性"""

    status: str
    available: bool


@router.post("/api/chat", response_model=ChatResponse)
async def send_message(
    body: ChatRequest,
    service: ChatService = Depends(get_chat_service),
):
    """转发消息，错误由异常处理器映射"""
    reply = await service.send_message(body.message)
    return ChatResponse(message=reply.message, model=reply.model)


@router.get("/api/chat/health", response_model=ChatHealthResponse)
async def chat_health(service: ChatService = Depends(get_chat_service)):
    """探测 Ollama -- 失败作为数据返回，不作为错误"""
    health = await service.check_health()
    return ChatHealthResponse(status=health.status, available=health.available)

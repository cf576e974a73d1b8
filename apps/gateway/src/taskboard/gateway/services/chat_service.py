"""ChatService -- 聊天代理业务逻辑

1. 拒绝空消息（不发出站请求）
2. 拼接旅行助手提示词，调用 OllamaClient.generate()
3. 空响应 / 缺失模型名替换为占位值
上游异常（UpstreamUnavailableError / UpstreamStatusError / ProviderError）
原样上抛，由异常处理器映射为 HTTP 响应。
"""

from dataclasses import dataclass

import structlog
from taskboard.provider import OllamaClient

log = structlog.get_logger()

SYSTEM_PROMPT = (
    "You are a helpful travel assistant. Provide concise, practical travel suggestions."
)
LENGTH_INSTRUCTION = "Provide a brief, helpful response (2-3 sentences maximum)."

NO_RESPONSE_PLACEHOLDER = "No response generated"
UNKNOWN_MODEL = "unknown"

STATUS_RUNNING = "Ollama is running"
STATUS_NOT_RESPONDING = "Ollama not responding"
STATUS_NOT_AVAILABLE = "Ollama not available"


class EmptyMessageError(ValueError):
    """聊天消息为空（trim 后）"""

    def __init__(self) -> None:
        super().__init__("Message cannot be empty")


@dataclass
class ChatReply:
    message: str
    model: str


@dataclass
class ChatHealth:
    status: str
    available: bool


def build_prompt(message: str) -> str:
    """拼接提示词：角色设定 + 用户问题 + 长度约束"""
    return f"{SYSTEM_PROMPT}\nUser question: {message}\n\n{LENGTH_INSTRUCTION}"


class ChatService:
    """聊天代理服务 -- 无状态，每次调用独立"""

    def __init__(self, client: OllamaClient) -> None:
        self._client = client

    async def send_message(self, message: str | None) -> ChatReply:
        """转发消息并返回 (文本, 模型名)

        Raises:
            EmptyMessageError: 消息为空
            UpstreamUnavailableError: Ollama 不可达
            UpstreamStatusError: Ollama 返回非 2xx
            ProviderError: 其他非预期错误
        """
        if message is None or not message.strip():
            raise EmptyMessageError()

        result = await self._client.generate(build_prompt(message))

        return ChatReply(
            message=result.content or NO_RESPONSE_PLACEHOLDER,
            model=result.model_name or UNKNOWN_MODEL,
        )

    async def check_health(self) -> ChatHealth:
        """探测 Ollama，永不抛异常"""
        try:
            probe = await self._client.probe()
        except Exception as e:
            log.warning("chat_health_probe_error", error=str(e))
            return ChatHealth(status=STATUS_NOT_AVAILABLE, available=False)
        if probe.ok:
            return ChatHealth(status=STATUS_RUNNING, available=True)
        if probe.reachable:
            log.info("chat_health_degraded", status_code=probe.status_code)
            return ChatHealth(status=STATUS_NOT_RESPONDING, available=False)
        return ChatHealth(status=STATUS_NOT_AVAILABLE, available=False)

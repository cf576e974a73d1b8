"""OllamaClient -- Ollama HTTP 调用封装

generate() 调用 /api/generate（非流式），probe()/health_check() 调用 /api/tags。
每次调用最多一次出站请求，不做重试。
"""

import time

import httpx
import structlog

from .exceptions import ProviderError, UpstreamStatusError, UpstreamUnavailableError
from .models import GenerateResult, ProbeResult

log = structlog.get_logger()

# 健康检查超时（硬编码，应快速响应）
HEALTH_CHECK_TIMEOUT_S = 5

# 连接类异常类型集合（触发 UpstreamUnavailableError）
_CONNECTION_ERROR_TYPES = (
    ConnectionError,
    TimeoutError,
    httpx.TransportError,
)


class OllamaClient:
    """Ollama 客户端"""

    def __init__(
        self,
        api_url: str = "http://localhost:11434/api/generate",
        tags_url: str = "http://localhost:11434/api/tags",
        model: str = "llama3.2:1b",
        temperature: float = 0.7,
        max_tokens: int = 500,
        timeout_s: int = 120,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """初始化 Ollama 客户端

        Args:
            api_url: /api/generate 完整地址
            tags_url: /api/tags 完整地址
            model: 模型名
            temperature: 采样温度
            max_tokens: 最大生成 token 数
            timeout_s: 生成请求超时（秒）
            transport: 自定义 httpx transport（测试注入用）
        """
        self._api_url = api_url
        self._tags_url = tags_url
        self._model = model
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._timeout_s = timeout_s
        self._transport = transport

    @property
    def model(self) -> str:
        return self._model

    def _http_client(self, timeout: float) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=self._transport, timeout=timeout)

    async def generate(self, prompt: str) -> GenerateResult:
        """发送生成请求，等待完整响应

        Args:
            prompt: 完整提示词

        Returns:
            GenerateResult

        Raises:
            UpstreamUnavailableError: 连接失败或超时
            UpstreamStatusError: 上游返回非 2xx
            ProviderError: 响应无法解析或其他非预期错误
        """
        start_time = time.monotonic()
        payload = {
            "model": self._model,
            "prompt": prompt,
            "stream": False,
            "options": {
                "temperature": self._temperature,
                "num_predict": self._max_tokens,
            },
        }

        try:
            log.debug("ollama_call_start", model=self._model, prompt_length=len(prompt))

            async with self._http_client(self._timeout_s) as http_client:
                resp = await http_client.post(self._api_url, json=payload)

            if not resp.is_success:
                log.error(
                    "ollama_call_rejected",
                    status_code=resp.status_code,
                    body=resp.text[:500],
                )
                raise UpstreamStatusError(resp.status_code, resp.text)

            try:
                data = resp.json()
            except ValueError as e:
                raise ProviderError("Ollama 响应不是合法 JSON") from e
            if not isinstance(data, dict):
                raise ProviderError("Ollama 响应不是 JSON 对象")

            content = data.get("response")
            model_name = data.get("model")
            duration_ms = int((time.monotonic() - start_time) * 1000)

            result = GenerateResult(
                content=content if isinstance(content, str) else "",
                model_name=model_name if isinstance(model_name, str) else "",
                done=bool(data.get("done", True)),
                duration_ms=duration_ms,
            )

            log.info(
                "ollama_call_completed",
                model=result.model_name,
                duration_ms=duration_ms,
            )
            return result

        except ProviderError:
            # 已包装的异常直接抛出
            raise
        except Exception as e:
            duration_ms = int((time.monotonic() - start_time) * 1000)
            log.error(
                "ollama_call_failed",
                error=str(e),
                error_type=type(e).__name__,
                duration_ms=duration_ms,
            )
            if isinstance(e, _CONNECTION_ERROR_TYPES):
                raise UpstreamUnavailableError(url=self._api_url, original_error=e) from e
            raise ProviderError(f"Ollama 调用失败: {e}") from e

    async def probe(self) -> ProbeResult:
        """探测 /api/tags

        注意: 此方法不抛出异常，所有异常内部捕获。
              超时设置为 5 秒（硬编码，健康检查应快速响应）。
        """
        try:
            async with self._http_client(HEALTH_CHECK_TIMEOUT_S) as http_client:
                resp = await http_client.get(self._tags_url)
            return ProbeResult(reachable=True, status_code=resp.status_code)
        except Exception as e:
            log.debug("health_check_failed", url=self._tags_url, error=str(e))
            return ProbeResult(reachable=False)

    async def health_check(self) -> bool:
        """检查 Ollama 可达性

        Returns:
            True 如果 /api/tags 返回 2xx，否则 False（不抛异常）
        """
        return (await self.probe()).ok

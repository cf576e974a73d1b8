"""Provider 异常体系

ProviderError            -> 500（非预期失败）
UpstreamStatusError      -> 透传上游状态码
UpstreamUnavailableError -> 503（连接失败 / 超时）
"""


class ProviderError(Exception):
    """Provider 包基础异常"""


class UpstreamUnavailableError(ProviderError):
    """Ollama 不可达（连接失败、超时、DNS 解析失败等）"""

    def __init__(self, url: str, original_error: Exception) -> None:
        """
        Args:
            url: 尝试连接的地址
            original_error: 原始异常
        """
        super().__init__(f"Ollama 不可达: {url} -- {original_error}")
        self.url = url
        self.original_error = original_error


class UpstreamStatusError(ProviderError):
    """Ollama 可达但返回非 2xx 状态"""

    def __init__(self, status_code: int, body: str = "") -> None:
        """
        Args:
            status_code: 上游 HTTP 状态码
            body: 上游响应体（仅用于日志，不返回给客户端）
        """
        super().__init__(f"Ollama 返回 {status_code}")
        self.status_code = status_code
        self.body = body

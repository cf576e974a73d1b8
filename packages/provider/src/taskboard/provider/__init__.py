"""Taskboard Provider -- Ollama 调用抽象层

packages/provider 的公开接口导出。
"""

# 核心组件
from .client import OllamaClient

# 配置
from .config import ProviderConfig, load_provider_config

# 异常
from .exceptions import ProviderError, UpstreamStatusError, UpstreamUnavailableError

# 数据模型
from .models import GenerateResult, ProbeResult


def create_client(config: ProviderConfig) -> OllamaClient:
    """按配置创建 OllamaClient"""
    return OllamaClient(
        api_url=config.api_url,
        tags_url=config.tags_url,
        model=config.model,
        temperature=config.temperature,
        max_tokens=config.max_tokens,
        timeout_s=config.timeout_s,
    )


__all__ = [
    "GenerateResult",
    "ProbeResult",
    "OllamaClient",
    "create_client",
    "ProviderConfig",
    "load_provider_config",
    "ProviderError",
    "UpstreamStatusError",
    "UpstreamUnavailableError",
]

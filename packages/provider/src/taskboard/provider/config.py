"""ProviderConfig -- Ollama Provider 配置加载

从环境变量加载配置，不硬编码模型名。
"""

import os

import structlog
from pydantic import BaseModel, Field, ValidationError

log = structlog.get_logger()


class ProviderConfig(BaseModel):
    """Provider 包配置 -- 从环境变量加载

    环境变量:
        OLLAMA_API_URL: 生成接口地址
        OLLAMA_TAGS_URL: 模型列表接口地址（健康检查用）
        OLLAMA_MODEL: 模型名
        OLLAMA_TEMPERATURE: 采样温度
        OLLAMA_MAX_TOKENS: 最大生成 token 数
        TASKBOARD_LLM_TIMEOUT_S: 生成调用超时（秒）
    """

    api_url: str = Field(
        default="http://localhost:11434/api/generate",
        description="Ollama /api/generate 地址",
    )
    tags_url: str = Field(
        default="http://localhost:11434/api/tags",
        description="Ollama /api/tags 地址",
    )
    model: str = Field(
        default="llama3.2:1b",
        description="Ollama 模型名",
    )
    temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        allow_inf_nan=False,
        description="采样温度",
    )
    max_tokens: int = Field(
        default=500,
        ge=1,
        description="最大生成 token 数（映射到 Ollama num_predict）",
    )
    timeout_s: int = Field(
        default=120,
        ge=1,
        description="生成调用超时（秒）",
    )


_DEFAULTS = ProviderConfig()


def _read_number(env_var: str, field: str, cast) -> dict:
    """读取单个数值配置，无法解析或超出字段范围时回退默认值"""
    val = os.environ.get(env_var)
    if not val:
        return {}
    try:
        value = cast(val)
        # 逐字段校验范围，单个坏值不影响其他配置
        ProviderConfig.model_validate({field: value})
    except (ValueError, ValidationError):
        log.warning(
            "invalid_provider_config",
            env_var=env_var,
            value=val,
            fallback=getattr(_DEFAULTS, field),
        )
        return {}
    return {field: value}


def load_provider_config() -> ProviderConfig:
    """从环境变量加载 Provider 配置

    环境变量映射:
        OLLAMA_API_URL -> api_url
        OLLAMA_TAGS_URL -> tags_url
        OLLAMA_MODEL -> model
        OLLAMA_TEMPERATURE -> temperature (默认 0.7)
        OLLAMA_MAX_TOKENS -> max_tokens (默认 500)
        TASKBOARD_LLM_TIMEOUT_S -> timeout_s (默认 120)

    Returns:
        ProviderConfig 实例
    """
    kwargs: dict = {}

    if val := os.environ.get("OLLAMA_API_URL"):
        kwargs["api_url"] = val

    if val := os.environ.get("OLLAMA_TAGS_URL"):
        kwargs["tags_url"] = val

    if val := os.environ.get("OLLAMA_MODEL"):
        kwargs["model"] = val

    kwargs.update(_read_number("OLLAMA_TEMPERATURE", "temperature", float))
    kwargs.update(_read_number("OLLAMA_MAX_TOKENS", "max_tokens", int))
    kwargs.update(_read_number("TASKBOARD_LLM_TIMEOUT_S", "timeout_s", int))

    return ProviderConfig(**kwargs)

"""数据模型 -- GenerateResult + ProbeResult"""

from pydantic import BaseModel, Field


class GenerateResult(BaseModel):
    """一次 /api/generate 调用的结果

    content / model_name 为上游原样解析值，缺失时为空串，
    占位文本由调用方决定。
    """

    content: str = Field(default="", description="生成文本")
    model_name: str = Field(default="", description="上游报告的模型名")
    done: bool = Field(default=True, description="上游 done 标记")
    duration_ms: int = Field(ge=0, description="端到端耗时（毫秒）")


class ProbeResult(BaseModel):
    """健康探测结果"""

    reachable: bool = Field(description="是否建立了 HTTP 连接并拿到响应")
    status_code: int | None = Field(default=None, description="上游状态码")

    @property
    def ok(self) -> bool:
        return self.reachable and self.status_code is not None and 200 <= self.status_code < 300

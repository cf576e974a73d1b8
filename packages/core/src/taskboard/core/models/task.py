"""Task Domain Model

tasks 表只有一种实体，无外键关系。
TaskCreateInput / TaskUpdateInput 负责请求载荷的校验与规范化，
TaskDraft 是写入 Store 的已校验字段集合。
"""

from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError

from ..config import TITLE_MAX_LENGTH
from .enums import TaskStatus


class TaskDraft(BaseModel):
    """已校验的可变字段（create / replace 共用）"""

    title: str = Field(description="任务标题（已 trim）")
    description: str | None = Field(default=None, description="可选描述，None 与空串区分")
    status: TaskStatus = Field(default=TaskStatus.TODO, description="当前状态")


class Task(TaskDraft):
    """Task 数据模型 -- id 由 Store 分配，创建后不可变"""

    id: int = Field(description="自增主键")


def _normalize_title(value: str | None) -> str:
    if value is None or not value.strip():
        raise PydanticCustomError("title_required", "Title is required.")
    title = value.strip()
    if len(title) > TITLE_MAX_LENGTH:
        raise PydanticCustomError(
            "title_too_long",
            "Title must be {max_length} characters or fewer.",
            {"max_length": TITLE_MAX_LENGTH},
        )
    return title


class TaskCreateInput(BaseModel):
    """POST /api/tasks 请求体

    status 可省略，默认 Todo。
    """

    title: str | None = Field(default=None, validate_default=True)
    description: str | None = None
    status: TaskStatus = TaskStatus.TODO

    @field_validator("title")
    @classmethod
    def _check_title(cls, value: str | None) -> str:
        return _normalize_title(value)

    @field_validator("status", mode="before")
    @classmethod
    def _check_status_type(cls, value: object) -> object:
        # 只接受整数状态码，拒绝 true / "1" / 1.0 之类的宽松转换
        if isinstance(value, bool) or not isinstance(value, int):
            raise PydanticCustomError(
                "status_type", "Status must be an integer status code (0, 1 or 2)."
            )
        return value

    def to_draft(self) -> TaskDraft:
        return TaskDraft(
            title=self.title,
            description=self.description,
            status=self.status,
        )


class TaskUpdateInput(TaskCreateInput):
    """PUT /api/tasks/{id} 请求体 -- 整体替换，status 必填"""

    status: TaskStatus

"""Taskboard Core Domain Models -- 公共类型导出

所有公共模型类型从此入口导入。
"""

from .enums import TaskStatus
from .task import Task, TaskCreateInput, TaskDraft, TaskUpdateInput

__all__ = [
    # 枚举
    "TaskStatus",
    # Task
    "Task",
    "TaskDraft",
    # 请求载荷
    "TaskCreateInput",
    "TaskUpdateInput",
]

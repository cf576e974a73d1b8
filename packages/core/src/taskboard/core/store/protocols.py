"""Store Protocol 接口定义

使用 Python Protocol 实现结构化子类型（duck typing）。
"""

from typing import Protocol

from ..models.task import Task, TaskDraft


class TaskStore(Protocol):
    """Task 存储接口"""

    async def list_tasks(self) -> list[Task]:
        """查询全部任务"""
        ...

    async def get_task(self, task_id: int) -> Task | None:
        """根据主键查询任务"""
        ...

    async def create_task(self, draft: TaskDraft) -> Task:
        """插入任务，分配 id"""
        ...

    async def replace_task(self, task_id: int, draft: TaskDraft) -> bool:
        """整体替换可变字段，不存在时返回 False"""
        ...

    async def delete_task(self, task_id: int) -> bool:
        """删除任务，不存在时返回 False"""
        ...

"""TaskService -- 任务 CRUD 业务逻辑

校验规则：
1. title 必填，trim 后非空，且不超过 200 字符
2. description 原样保存（None 与空串区分）
3. status 创建时可省略（默认 Todo），更新时必填
更新为整体替换，先检查存在性再校验载荷。
"""

from typing import Any

import structlog
from pydantic import BaseModel, ValidationError
from taskboard.core.exceptions import TaskNotFoundError, TaskValidationError
from taskboard.core.models import Task, TaskCreateInput, TaskDraft, TaskUpdateInput
from taskboard.core.store import StoreGroup

log = structlog.get_logger()


def _field_errors(exc: ValidationError) -> dict[str, list[str]]:
    """将 pydantic 校验错误整理为 字段 -> 消息列表"""
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"]) or "body"
        errors.setdefault(field, []).append(error["msg"])
    return errors


def parse_task_payload(model_cls: type[BaseModel], payload: Any) -> TaskDraft:
    """校验请求载荷并返回 TaskDraft

    Raises:
        TaskValidationError: 载荷不是 JSON 对象或字段不合法
    """
    if not isinstance(payload, dict):
        raise TaskValidationError({"body": ["A JSON object request body is required."]})
    try:
        return model_cls.model_validate(payload).to_draft()
    except ValidationError as e:
        raise TaskValidationError(_field_errors(e)) from e


class TaskService:
    """任务业务服务"""

    def __init__(self, store_group: StoreGroup) -> None:
        self._stores = store_group

    async def list_tasks(self) -> list[Task]:
        """返回全部任务快照"""
        return await self._stores.task_store.list_tasks()

    async def get_task(self, task_id: int) -> Task:
        """查询单个任务

        Raises:
            TaskNotFoundError: 任务不存在
        """
        task = await self._stores.task_store.get_task(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    async def create_task(self, payload: Any) -> Task:
        """校验并创建任务

        Raises:
            TaskValidationError: 载荷不合法（不写入 Store）
        """
        draft = parse_task_payload(TaskCreateInput, payload)
        task = await self._stores.task_store.create_task(draft)
        log.info("task_created", task_id=task.id, status=task.status.name)
        return task

    async def update_task(self, task_id: int, payload: Any) -> None:
        """整体替换 title/description/status

        存在性检查优先：任务不存在时直接抛 TaskNotFoundError，
        不再校验载荷。

        Raises:
            TaskNotFoundError: 任务不存在
            TaskValidationError: 载荷不合法
        """
        if await self._stores.task_store.get_task(task_id) is None:
            raise TaskNotFoundError(task_id)

        draft = parse_task_payload(TaskUpdateInput, payload)
        # 检查与写入之间任务可能已被并发删除
        if not await self._stores.task_store.replace_task(task_id, draft):
            raise TaskNotFoundError(task_id)
        log.info("task_updated", task_id=task_id, status=draft.status.name)

    async def delete_task(self, task_id: int) -> None:
        """删除任务

        Raises:
            TaskNotFoundError: 任务不存在
        """
        if not await self._stores.task_store.delete_task(task_id):
            raise TaskNotFoundError(task_id)
        log.info("task_deleted", task_id=task_id)

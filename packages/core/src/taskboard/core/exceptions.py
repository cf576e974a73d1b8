"""Core 异常体系

TaskNotFoundError -> 404，TaskValidationError -> 400（字段级错误）。
映射由 gateway 的异常处理器完成。
"""


class TaskError(Exception):
    """Task 领域基础异常"""


class TaskNotFoundError(TaskError):
    """目标任务不存在"""

    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task {task_id} does not exist")
        self.task_id = task_id


class TaskValidationError(TaskError):
    """任务输入校验失败

    errors 为字段名 -> 错误消息列表的映射，例如
    {"title": ["Title is required."]}。
    """

    def __init__(self, errors: dict[str, list[str]]) -> None:
        super().__init__("; ".join(f"{k}: {', '.join(v)}" for k, v in errors.items()))
        self.errors = errors

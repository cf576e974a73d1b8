"""TaskService 单元测试

直接调用 Service，验证校验规则与存在性优先级，不经过 HTTP 层。
"""

from types import SimpleNamespace

import pytest
import pytest_asyncio
from taskboard.core.exceptions import TaskNotFoundError, TaskValidationError
from taskboard.core.models import Task, TaskDraft, TaskStatus
from taskboard.core.store import TaskStore, create_store_group
from taskboard.gateway.services.task_service import TaskService


@pytest_asyncio.fixture
async def service(tmp_path):
    store_group = await create_store_group(str(tmp_path / "service.db"))
    yield TaskService(store_group)
    await store_group.conn.close()


async def test_create_and_get(service: TaskService):
    task = await service.create_task({"title": "Learn X", "status": 1})

    assert task.id == 1
    assert task.status == TaskStatus.IN_PROGRESS
    assert await service.get_task(task.id) == task


async def test_create_rejects_non_object_payload(service: TaskService):
    with pytest.raises(TaskValidationError) as exc_info:
        await service.create_task(["title"])
    assert list(exc_info.value.errors) == ["body"]
    assert await service.list_tasks() == []


async def test_create_collects_multiple_field_errors(service: TaskService):
    with pytest.raises(TaskValidationError) as exc_info:
        await service.create_task({"title": "", "status": 7})
    assert set(exc_info.value.errors) == {"title", "status"}


async def test_get_missing_raises(service: TaskService):
    with pytest.raises(TaskNotFoundError):
        await service.get_task(42)


async def test_update_missing_checked_before_payload(service: TaskService):
    with pytest.raises(TaskNotFoundError):
        await service.update_task(42, {"title": ""})


async def test_update_replaces_fields(service: TaskService):
    task = await service.create_task({"title": "a", "description": "d"})

    await service.update_task(task.id, {"title": "b", "status": 2})

    updated = await service.get_task(task.id)
    assert updated.title == "b"
    assert updated.description is None
    assert updated.status == TaskStatus.DONE


async def test_delete_then_missing(service: TaskService):
    task = await service.create_task({"title": "a"})

    await service.delete_task(task.id)

    with pytest.raises(TaskNotFoundError):
        await service.delete_task(task.id)
    with pytest.raises(TaskNotFoundError):
        await service.get_task(task.id)


class InMemoryTaskStore:
    """满足 TaskStore 协议的内存实现"""

    def __init__(self) -> None:
        self._tasks: dict[int, Task] = {}
        self._next_id = 1

    async def list_tasks(self) -> list[Task]:
        return [self._tasks[key] for key in sorted(self._tasks)]

    async def get_task(self, task_id: int) -> Task | None:
        return self._tasks.get(task_id)

    async def create_task(self, draft: TaskDraft) -> Task:
        task = Task(id=self._next_id, **draft.model_dump())
        self._tasks[task.id] = task
        self._next_id += 1
        return task

    async def replace_task(self, task_id: int, draft: TaskDraft) -> bool:
        if task_id not in self._tasks:
            return False
        self._tasks[task_id] = Task(id=task_id, **draft.model_dump())
        return True

    async def delete_task(self, task_id: int) -> bool:
        return self._tasks.pop(task_id, None) is not None


async def test_service_depends_only_on_store_protocol():
    store: TaskStore = InMemoryTaskStore()
    service = TaskService(SimpleNamespace(task_store=store))

    task = await service.create_task({"title": " in memory "})
    await service.update_task(task.id, {"title": "swapped", "status": 1})

    assert await service.list_tasks() == [
        Task(id=1, title="swapped", description=None, status=TaskStatus.IN_PROGRESS)
    ]
    with pytest.raises(TaskNotFoundError):
        await service.update_task(2, {"title": ""})

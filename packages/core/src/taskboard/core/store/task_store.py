"""TaskStore SQLite 实现

每个写操作单独提交；失败时回滚，不会留下部分写入。
"""

import aiosqlite

from ..models.task import Task, TaskDraft

# SQLite INTEGER 为 64 位有符号整数，超出范围的 id 不可能存在
_ID_MIN = -(2**63)
_ID_MAX = 2**63 - 1


def _id_in_range(task_id: int) -> bool:
    return _ID_MIN <= task_id <= _ID_MAX


class SqliteTaskStore:
    """TaskStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def list_tasks(self) -> list[Task]:
        """查询全部任务（快照），按 id 升序即插入顺序"""
        cursor = await self._conn.execute(
            "SELECT id, title, description, status FROM tasks ORDER BY id"
        )
        rows = await cursor.fetchall()
        return [self._row_to_task(row) for row in rows]

    async def get_task(self, task_id: int) -> Task | None:
        """根据主键查询任务"""
        if not _id_in_range(task_id):
            return None
        cursor = await self._conn.execute(
            "SELECT id, title, description, status FROM tasks WHERE id = ?",
            (task_id,),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_task(row)

    async def create_task(self, draft: TaskDraft) -> Task:
        """插入任务并返回带新 id 的完整实体"""
        try:
            cursor = await self._conn.execute(
                "INSERT INTO tasks (title, description, status) VALUES (?, ?, ?)",
                (draft.title, draft.description, int(draft.status)),
            )
            task_id = cursor.lastrowid
            await self._conn.commit()
        except Exception:
            await self._conn.rollback()
            raise
        return Task(id=task_id, **draft.model_dump())

    async def replace_task(self, task_id: int, draft: TaskDraft) -> bool:
        """整体覆盖 title/description/status

        Returns:
            False 如果任务不存在
        """
        if not _id_in_range(task_id):
            return False
        try:
            cursor = await self._conn.execute(
                """
                UPDATE tasks
                SET title = ?, description = ?, status = ?
                WHERE id = ?
                """,
                (draft.title, draft.description, int(draft.status), task_id),
            )
            await self._conn.commit()
        except Exception:
            await self._conn.rollback()
            raise
        return cursor.rowcount > 0

    async def delete_task(self, task_id: int) -> bool:
        """删除任务

        Returns:
            False 如果任务不存在
        """
        if not _id_in_range(task_id):
            return False
        try:
            cursor = await self._conn.execute(
                "DELETE FROM tasks WHERE id = ?",
                (task_id,),
            )
            await self._conn.commit()
        except Exception:
            await self._conn.rollback()
            raise
        return cursor.rowcount > 0

    @staticmethod
    def _row_to_task(row: aiosqlite.Row) -> Task:
        """将数据库行转换为 Task 模型"""
        return Task(
            id=row[0],
            title=row[1],
            description=row[2],
            status=row[3],
        )

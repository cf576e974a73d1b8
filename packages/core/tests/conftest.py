"""packages/core 测试配置 -- 核心层 fixture

数据库连接 fixture（db_conn）由仓库根 conftest 提供。
"""

import aiosqlite
import pytest_asyncio


@pytest_asyncio.fixture
async def task_store(db_conn: aiosqlite.Connection):
    """基于临时数据库的 SqliteTaskStore"""
    from taskboard.core.store.task_store import SqliteTaskStore

    return SqliteTaskStore(db_conn)

"""SQLite 数据库初始化

PRAGMA 配置 + tasks 表 DDL。
使用 aiosqlite 异步操作。
"""

import aiosqlite

# tasks 表 DDL（AUTOINCREMENT 保证删除后的 id 不会被复用）
# length() 遇 NUL 截断计数，非空检查按字节长度进行
_TASKS_DDL = """
CREATE TABLE IF NOT EXISTS tasks (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    title       TEXT NOT NULL CHECK (length(CAST(title AS BLOB)) > 0 AND length(title) <= 200),
    description TEXT,
    status      INTEGER NOT NULL DEFAULT 0 CHECK (status IN (0, 1, 2))
);
"""


async def init_db(conn: aiosqlite.Connection) -> None:
    """初始化数据库：设置 PRAGMA + 创建表

    Args:
        conn: aiosqlite 数据库连接
    """
    await conn.execute("PRAGMA journal_mode = WAL;")
    await conn.execute("PRAGMA busy_timeout = 5000;")

    await conn.execute(_TASKS_DDL)
    await conn.commit()


async def verify_wal_mode(conn: aiosqlite.Connection) -> bool:
    """验证 WAL 模式是否生效

    Returns:
        True 如果 WAL 模式已启用
    """
    cursor = await conn.execute("PRAGMA journal_mode;")
    row = await cursor.fetchone()
    return row is not None and row[0].lower() == "wal"

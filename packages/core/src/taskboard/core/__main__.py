"""CLI 入口模块 -- python -m taskboard.core <command>

支持的命令：
  init-db     在配置路径创建数据库与 tasks 表
  list-tasks  打印当前全部任务
"""

import asyncio
import sys

from .config import get_db_path

_COMMANDS = {
    "init-db": "在配置路径创建数据库与 tasks 表",
    "list-tasks": "打印当前全部任务",
}


def _print_usage() -> None:
    print("用法: python -m taskboard.core <command>")
    print("命令:")
    for name, help_text in _COMMANDS.items():
        print(f"  {name:<11} {help_text}")


def main() -> None:
    """CLI 主入口"""
    if len(sys.argv) < 2:
        _print_usage()
        sys.exit(1)

    command = sys.argv[1]

    if command == "init-db":
        asyncio.run(init_database())
    elif command == "list-tasks":
        asyncio.run(list_tasks())
    else:
        print(f"未知命令: {command}")
        print(f"可用命令: {', '.join(_COMMANDS)}")
        sys.exit(1)


async def init_database() -> None:
    """创建 schema（已存在时无副作用）"""
    from .store import create_store_group

    db_path = get_db_path()
    print(f"数据库路径: {db_path}")

    store_group = await create_store_group(db_path)
    await store_group.conn.close()
    print("初始化完成")


async def list_tasks() -> None:
    """以 id / status / title 三列打印任务"""
    from .store import create_store_group

    store_group = await create_store_group(get_db_path())
    try:
        tasks = await store_group.task_store.list_tasks()
    finally:
        await store_group.conn.close()

    if not tasks:
        print("(无任务)")
        return
    for task in tasks:
        print(f"{task.id:>5}  {task.status.name:<11}  {task.title}")


if __name__ == "__main__":
    main()

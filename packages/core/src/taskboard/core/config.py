"""配置常量模块 -- 可通过环境变量覆盖

包含数据库路径、标题长度上限等可配置常量。
"""

import os
from pathlib import Path


def _get_base_dir() -> Path:
    """获取项目 data 基础目录"""
    return Path(os.environ.get("TASKBOARD_DATA_DIR", "data"))


def get_db_path() -> str:
    """获取 SQLite 数据库路径"""
    return os.environ.get(
        "TASKBOARD_DB_PATH",
        str(_get_base_dir() / "sqlite" / "taskboard.db"),
    )


# 任务标题最大字符数（trim 之后计算）
TITLE_MAX_LENGTH: int = 200

"""枚举定义

TaskStatus 以整数编码存储与序列化：Todo=0, InProgress=1, Done=2。
"""

from enum import IntEnum


class TaskStatus(IntEnum):
    """任务进度状态"""

    TODO = 0
    IN_PROGRESS = 1
    DONE = 2

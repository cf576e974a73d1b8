"""python -m taskboard.gateway -- 以 uvicorn 启动 API"""

import uvicorn

from .config import get_bind


def main() -> None:
    host, port = get_bind()
    # 日志由 setup_logging 统一配置，不使用 uvicorn 默认 dictConfig
    uvicorn.run("taskboard.gateway.main:app", host=host, port=port, log_config=None)


if __name__ == "__main__":
    main()

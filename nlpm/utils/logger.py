"""nlpm 日志配置

日志统一写 stderr：`nlpm script` / `nlpm run` 启动的子进程继承 stdout，
两者不能混在一起。级别和格式由环境变量控制:

    NLPM_LOG_LEVEL=DEBUG   显示跳过已存在 HEAD 包等调试信息
    NLPM_LOG_JSON=1        每行一个 JSON 对象，供 CI 解析
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Mapping

LOG_LEVEL_ENV = "NLPM_LOG_LEVEL"
LOG_JSON_ENV = "NLPM_LOG_JSON"

TEXT_FORMAT = "%(asctime)s [%(levelname)-7s] %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """单行 JSON 格式，字段: timestamp / level / logger / message，异常时加 exception"""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def setup_logging(level: str = "INFO", json_output: bool = False) -> None:
    """替换根日志器的 handler，未知级别名按 INFO 处理"""
    reset_logging()
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JSONFormatter() if json_output else logging.Formatter(TEXT_FORMAT))
    root.addHandler(handler)


def setup_from_env(environ: Mapping[str, str] | None = None) -> None:
    """按 NLPM_LOG_LEVEL / NLPM_LOG_JSON 配置日志"""
    env = os.environ if environ is None else environ
    setup_logging(
        level=env.get(LOG_LEVEL_ENV, "INFO"),
        json_output=env.get(LOG_JSON_ENV, "") == "1",
    )


def reset_logging() -> None:
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()

"""Shell 命令执行工具 — 统一子进程调用

通过 CommandExecutor 协议抽象子进程执行，方便测试替换和跨平台适配。
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
from dataclasses import dataclass
from typing import Protocol

logger = logging.getLogger(__name__)


# =========================================================================
# 命令执行结果
# =========================================================================

@dataclass
class CommandResult:
    """命令执行结果（与 subprocess 解耦）"""

    returncode: int
    stdout: str
    stderr: str

    @property
    def success(self) -> bool:
        return self.returncode == 0


# =========================================================================
# 命令执行器协议
# =========================================================================

class CommandExecutor(Protocol):
    """命令执行器协议 — 抽象子进程调用

    测试时可注入 mock 实现，无需 patch subprocess。
    """

    def execute(
        self,
        cmd: str | list[str],
        *,
        cwd: str = ".",
        env: dict[str, str] | None = None,
        timeout: int | None = None,
    ) -> CommandResult:
        """执行命令并返回结果"""
        ...


# =========================================================================
# 默认实现: 本地执行器
# =========================================================================

class LocalExecutor:
    """本地命令执行器（默认实现）"""

    def execute(
        self,
        cmd: str | list[str],
        *,
        cwd: str = ".",
        env: dict[str, str] | None = None,
        timeout: int | None = None,
    ) -> CommandResult:
        args = shlex.split(cmd) if isinstance(cmd, str) else cmd
        try:
            r = subprocess.run(
                args, capture_output=True, text=True,
                cwd=cwd, env=env, check=False, timeout=timeout,
            )
        except (OSError, subprocess.SubprocessError) as e:
            logger.debug("命令无法执行: %s (%s)", args, e)
            return CommandResult(returncode=-1, stdout="", stderr=str(e))
        return CommandResult(
            returncode=r.returncode,
            stdout=r.stdout,
            stderr=r.stderr,
        )


# =========================================================================
# 全局默认执行器（可替换）
# =========================================================================

_default_executor: CommandExecutor = LocalExecutor()


def get_executor() -> CommandExecutor:
    """获取全局默认命令执行器"""
    return _default_executor


def set_executor(executor: CommandExecutor) -> None:
    """替换全局默认命令执行器（用于测试）"""
    global _default_executor  # noqa: PLW0603
    _default_executor = executor


# =========================================================================
# 脚本执行（输出直通终端）
# =========================================================================

def run_with_env(
    cmd: str, *, extra_env: dict[str, str], cwd: str = ".",
) -> int:
    """在附加环境变量下通过 shell 执行命令字符串，返回退出码

    与 CommandExecutor 不同，这里不捕获输出：脚本的 stdout/stderr
    直接继承当前终端。

    Args:
        cmd: 命令字符串（交由 shell 解释）
        extra_env: 覆盖到当前进程环境之上的变量
        cwd: 工作目录
    """
    env = {**os.environ, **extra_env}
    logger.info("执行: %s (cwd=%s)", cmd, cwd)
    r = subprocess.run(cmd, shell=True, cwd=cwd, env=env, check=False)  # noqa: S602
    if r.returncode != 0:
        logger.warning("命令退出码非零 (rc=%d): %s", r.returncode, cmd)
    return r.returncode

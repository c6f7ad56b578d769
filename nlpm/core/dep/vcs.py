"""版本控制适配器

安装器只依赖 VcsAdapter 协议（clone / fetch_ref / checkout_ref），
每个操作只报告成功与否。默认实现 GitVcs 通过 CommandExecutor 调用 git，
工作目录显式传入，不切换进程当前目录。
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Protocol

from nlpm.core.dep.models import ResolvedVersion, VersionKind
from nlpm.utils.shell import CommandExecutor, CommandResult, get_executor

logger = logging.getLogger(__name__)


class VcsAdapter(Protocol):
    """版本控制客户端协议"""

    def clone(self, repo: str, dest: Path, depth: int = 1) -> bool:
        """浅克隆仓库到 dest"""
        ...

    def fetch_ref(self, workdir: Path, version: ResolvedVersion) -> bool:
        """在 workdir 中拉取指定提交或标签"""
        ...

    def checkout_ref(self, workdir: Path, version: ResolvedVersion) -> bool:
        """在 workdir 中检出指定提交或标签"""
        ...


class GitVcs:
    """基于 git 命令行的 VcsAdapter 实现"""

    def __init__(
        self,
        executor: CommandExecutor | None = None,
        git_bin: str = "git",
    ) -> None:
        self._executor = executor
        self.git_bin = git_bin
        # 禁止 git 在终端上交互式询问凭据
        self._env = {**os.environ, "GIT_TERMINAL_PROMPT": "0"}

    @property
    def executor(self) -> CommandExecutor:
        return self._executor or get_executor()

    def _git(self, args: list[str], cwd: Path) -> bool:
        cmd = [self.git_bin, *args]
        logger.debug("  git: %s (cwd=%s)", " ".join(cmd), cwd)
        r: CommandResult = self.executor.execute(cmd, cwd=str(cwd), env=self._env)
        if not r.success:
            logger.debug(
                "  git 失败 (rc=%d): %s", r.returncode, r.stderr.strip()[:300],
            )
        return r.success

    def clone(self, repo: str, dest: Path, depth: int = 1) -> bool:
        return self._git(
            ["clone", "--depth", str(depth), repo, str(dest)], cwd=dest.parent,
        )

    def fetch_ref(self, workdir: Path, version: ResolvedVersion) -> bool:
        if version.kind is VersionKind.TAG:
            args = ["fetch", "--depth", "1", "origin", "tag", version.ref]
        else:
            args = ["fetch", "--depth", "1", "origin", version.ref]
        return self._git(args, cwd=workdir)

    def checkout_ref(self, workdir: Path, version: ResolvedVersion) -> bool:
        return self._git(["checkout", "--quiet", version.ref], cwd=workdir)

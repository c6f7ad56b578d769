"""存储目录的文件系统操作

所有路径都以绝对路径显式传入，不依赖进程级当前目录。
"""

from __future__ import annotations

import os
import shutil
import stat
import sys
from pathlib import Path

from nlpm.core.exceptions import DirectoryOperationFailed


def _make_writable_and_retry(func, path, _exc) -> None:  # noqa: ANN001
    # .git/objects 下的文件是只读的，Windows 上需要先去掉只读位
    os.chmod(path, stat.S_IWRITE)
    func(path)


def remove_tree(path: Path) -> None:
    """删除文件或目录（递归），失败抛 DirectoryOperationFailed"""
    if not path.exists() and not path.is_symlink():
        raise DirectoryOperationFailed(f"路径不存在: {path}")
    try:
        if path.is_dir() and not path.is_symlink():
            if sys.version_info >= (3, 12):
                shutil.rmtree(path, onexc=_make_writable_and_retry)
            else:
                shutil.rmtree(path, onerror=_make_writable_and_retry)
        else:
            path.unlink()
    except OSError as e:
        raise DirectoryOperationFailed(f"删除失败: {path} - {e}") from e


def ensure_dir(path: Path) -> bool:
    """确保目录存在，返回是否新建"""
    if path.is_dir():
        return False
    try:
        path.mkdir(parents=True)
    except OSError as e:
        raise DirectoryOperationFailed(f"创建目录失败: {path} - {e}") from e
    return True


def list_entries(path: Path) -> list[Path]:
    """列出目录的直接子项（顺序由平台决定），目录不存在时返回空列表"""
    if not path.is_dir():
        return []
    try:
        return list(path.iterdir())
    except OSError as e:
        raise DirectoryOperationFailed(f"读取目录失败: {path} - {e}") from e

"""依赖包数据模型

数据类:
- PackageDependency: 清单中的单个依赖
- Manifest: 清单文件（依赖 + 脚本）
- ResolvedKey: 存储目录名即身份
- ResolvedVersion: 版本解析结果
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

HEAD = "HEAD"
DEFAULT_VERSION = "#" + HEAD


class VersionKind(str, Enum):
    """版本类型：提交哈希或标签"""

    COMMIT = "#"
    TAG = "v"


@dataclass(frozen=True)
class PackageDependency:
    """清单中声明的单个依赖"""

    name: str
    repo: str
    version: str | None = None  # "#<commit>" 或 "v<tag>"，缺省等价于 "#HEAD"


@dataclass
class Manifest:
    """清单文件内容"""

    dependencies: list[PackageDependency] = field(default_factory=list)
    scripts: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ResolvedKey:
    """存储键，同时也是存储目录下的子目录名

    只应通过 version.make_key() 构造。
    """

    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ResolvedVersion:
    """依赖版本解析结果"""

    key: ResolvedKey
    kind: VersionKind
    value: str

    @property
    def is_head(self) -> bool:
        """未固定版本（跟随远端最新），只有 #HEAD 算，vHEAD 是名为 vHEAD 的标签"""
        return self.kind is VersionKind.COMMIT and self.value == HEAD

    @property
    def ref(self) -> str:
        """用于 fetch / checkout 的 Git 引用

        标签保留 v 前缀（v1.2.0 即仓库中的标签名），提交直接使用哈希。
        """
        if self.kind is VersionKind.TAG:
            return self.kind.value + self.value
        return self.value

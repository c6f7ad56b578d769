"""版本描述解析

把依赖的 version 字段解析为 (类型, 值)，并生成唯一的存储键
"<name>@<kind><value>"。键同时作为存储目录名，因此这里负责拒绝
无法在各平台上作为目录名使用的字符。
"""

from __future__ import annotations

import re

from nlpm.core.dep.models import (
    HEAD,
    PackageDependency,
    ResolvedKey,
    ResolvedVersion,
    VersionKind,
)
from nlpm.core.exceptions import InvalidPackageName, InvalidVersionFormat

_VERSION_RE = re.compile(r"^([#v])(.+)$", re.DOTALL)

# Windows 保留字符、路径分隔符以及控制字符
_UNSAFE_CHARS_RE = re.compile(r'[<>:"/\\|?*\x00-\x1f]')


def _is_safe_segment(text: str) -> bool:
    if not text or text in (".", ".."):
        return False
    if text != text.strip() or text.endswith("."):
        return False
    return _UNSAFE_CHARS_RE.search(text) is None


def make_key(name: str, kind: VersionKind, value: str) -> ResolvedKey:
    """由 (name, kind, value) 构造存储键（纯函数）"""
    if not _is_safe_segment(name) or "@" in name:
        raise InvalidPackageName(name)
    if not _is_safe_segment(value):
        raise InvalidVersionFormat(name, kind.value + value)
    return ResolvedKey(f"{name}@{kind.value}{value}")


def resolve(dependency: PackageDependency) -> ResolvedVersion:
    """解析依赖版本

    - 未指定版本: 类型 "#"，值 "HEAD"
    - "#<hash>": 固定到提交
    - "v<tag>": 固定到标签

    Raises:
        InvalidVersionFormat: 版本为空或不匹配 (#|v)<value>
        InvalidPackageName: 包名不能用作目录名
    """
    if dependency.version is None:
        kind, value = VersionKind.COMMIT, HEAD
    else:
        m = _VERSION_RE.match(dependency.version)
        if m is None:
            raise InvalidVersionFormat(dependency.name, dependency.version)
        kind, value = VersionKind(m.group(1)), m.group(2)

    key = make_key(dependency.name, kind, value)
    return ResolvedVersion(key=key, kind=kind, value=value)

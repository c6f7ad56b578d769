"""依赖解析与存储目录维护引擎

拆分说明:
- models.py: 数据模型
- version.py: 版本描述解析 + 存储键
- manifest.py: 清单文件加载
- vcs.py: 版本控制适配器（git）
- installer.py: 递归安装
- reconciler.py: 标记-清除
- paths.py: 脚本搜索路径
"""

from nlpm.core.dep.installer import PackageInstaller
from nlpm.core.dep.manifest import ManifestLoader
from nlpm.core.dep.models import (
    Manifest,
    PackageDependency,
    ResolvedKey,
    ResolvedVersion,
    VersionKind,
)
from nlpm.core.dep.reconciler import StoreReconciler
from nlpm.core.dep.vcs import GitVcs, VcsAdapter
from nlpm.core.dep.version import make_key, resolve

__all__ = [
    "GitVcs",
    "Manifest",
    "ManifestLoader",
    "PackageDependency",
    "PackageInstaller",
    "ResolvedKey",
    "ResolvedVersion",
    "StoreReconciler",
    "VcsAdapter",
    "VersionKind",
    "make_key",
    "resolve",
]

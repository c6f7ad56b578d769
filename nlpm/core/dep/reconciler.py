"""存储目录清理（标记-清除）

1. 标记: 从根清单出发，沿已安装目录中的嵌套清单递归收集可达的存储键
2. 清除: 删除存储目录下所有不可达的子项

只读取磁盘上已有的嵌套清单，不访问网络，也不重新克隆。
尚未安装的依赖只贡献自身的键。
"""

from __future__ import annotations

import logging
from pathlib import Path

from nlpm.core.dep.manifest import ManifestLoader
from nlpm.core.dep.models import Manifest, PackageDependency
from nlpm.core.dep.version import resolve
from nlpm.utils.fs import list_entries, remove_tree

logger = logging.getLogger(__name__)


class StoreReconciler:
    """存储目录标记-清除器"""

    def __init__(self, store_dir: Path, loader: ManifestLoader | None = None) -> None:
        self.store_dir = store_dir.resolve()
        self.loader = loader or ManifestLoader()

    def reachable(self, manifest: Manifest) -> set[str]:
        """计算根清单可达的全部存储键"""
        marked: set[str] = set()
        self._mark(manifest.dependencies, marked)
        return marked

    def _mark(self, dependencies: list[PackageDependency], marked: set[str]) -> None:
        for dep in dependencies:
            key = str(resolve(dep).key)
            if key in marked:
                continue
            marked.add(key)
            entry = self.store_dir / key
            if not entry.is_dir():
                continue
            nested = self.loader.load(entry)
            if nested is not None:
                self._mark(nested.dependencies, marked)

    def reconcile(self, manifest: Manifest) -> list[Path]:
        """删除不可达的存储子项，返回被删除的路径列表"""
        logger.info("正在清理未引用的包...")
        marked = self.reachable(manifest)
        removed: list[Path] = []
        for entry in list_entries(self.store_dir):
            if entry.name in marked:
                continue
            path = entry.absolute()
            logger.info("删除 %s", path)
            remove_tree(path)
            removed.append(path)
        return removed

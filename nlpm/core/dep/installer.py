"""递归安装器

职责:
- 把单个依赖安装到扁平存储目录（目录名即存储键）
- 发现依赖自身的清单并递归安装其依赖，全部作为同级目录
- 固定版本: fetch + checkout，失败时回滚刚克隆的目录
- 去除 .git 元数据

重复安装策略:
- 固定版本（提交/标签）已存在: 跳过，从不原地修改
- 未固定版本（HEAD）已存在且是顶层依赖: 删除后重新克隆
- 未固定版本已存在且是传递依赖: 保持不动
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from nlpm.core.dep.manifest import ManifestLoader
from nlpm.core.dep.models import PackageDependency, ResolvedVersion
from nlpm.core.dep.version import resolve
from nlpm.core.exceptions import (
    CheckoutFailed,
    CloneFailed,
    DirectoryOperationFailed,
    FetchFailed,
)
from nlpm.utils.fs import remove_tree

if TYPE_CHECKING:
    from nlpm.core.dep.vcs import VcsAdapter

logger = logging.getLogger(__name__)

VCS_METADATA_DIR = ".git"

# install() 的返回值
INSTALLED = "installed"
SKIPPED = "skipped"


class PackageInstaller:
    """依赖包递归安装器"""

    def __init__(
        self,
        store_dir: Path,
        vcs: VcsAdapter,
        loader: ManifestLoader | None = None,
        clone_depth: int = 1,
    ) -> None:
        self.store_dir = store_dir.resolve()
        self.vcs = vcs
        self.loader = loader or ManifestLoader()
        self.clone_depth = clone_depth

    def install_all(self, dependencies: list[PackageDependency]) -> dict[str, str]:
        """安装顶层依赖列表，返回 {存储键: installed|skipped}"""
        results: dict[str, str] = {}
        for dep in dependencies:
            key = str(resolve(dep).key)
            results[key] = self.install(dep)
        return results

    def install(self, dependency: PackageDependency, *, transitive: bool = False) -> str:
        """安装单个依赖（及其传递依赖）到存储目录

        Args:
            dependency: 要安装的依赖
            transitive: 是否由嵌套清单发现（顶层调用为 False）

        Returns:
            INSTALLED 或 SKIPPED

        Raises:
            InvalidVersionFormat / CloneFailed / FetchFailed / CheckoutFailed /
            ManifestLoadFailed / DirectoryOperationFailed
        """
        resolved = resolve(dependency)
        target = self.store_dir / str(resolved.key)

        if resolved.is_head and target.exists() and not transitive:
            logger.info('刷新未固定版本的包 "%s"', resolved.key)
            remove_tree(target)

        if target.exists():
            if resolved.is_head:
                logger.debug('传递依赖 "%s" 已存在，保持不变', resolved.key)
            else:
                logger.info('跳过包 "%s"，已存在', resolved.key)
            return SKIPPED

        logger.info('正在安装包 "%s"...', resolved.key)
        self._clone(dependency, target)
        try:
            self._install_nested(target)
            if not resolved.is_head:
                self._pin(dependency, resolved, target)
        except Exception:
            self._rollback(target)
            raise
        self._strip_vcs_metadata(target)
        return INSTALLED

    # ------------------------------------------------------------------
    # 内部步骤
    # ------------------------------------------------------------------

    def _clone(self, dependency: PackageDependency, target: Path) -> None:
        if self.vcs.clone(dependency.repo, target, depth=self.clone_depth):
            return
        if target.exists():
            try:
                remove_tree(target)
            except DirectoryOperationFailed as e:
                raise DirectoryOperationFailed(
                    f"克隆 '{dependency.name}' 失败，且残留目录无法删除: {target}"
                ) from e
        raise CloneFailed(dependency.name, dependency.repo)

    def _install_nested(self, target: Path) -> None:
        """读取新目录中的清单，把其依赖安装为同级目录"""
        nested = self.loader.load(target)
        if nested is None:
            return
        for dep in nested.dependencies:
            self.install(dep, transitive=True)

    def _pin(
        self, dependency: PackageDependency, resolved: ResolvedVersion, target: Path,
    ) -> None:
        kind = resolved.kind.value
        if not self.vcs.fetch_ref(target, resolved):
            raise FetchFailed(dependency.name, kind, resolved.ref)
        if not self.vcs.checkout_ref(target, resolved):
            raise CheckoutFailed(dependency.name, kind, resolved.ref)

    def _rollback(self, target: Path) -> None:
        if not target.exists():
            return
        logger.warning("安装失败，回滚目录: %s", target)
        try:
            remove_tree(target)
        except DirectoryOperationFailed as e:
            logger.error("回滚失败: %s", e)

    @staticmethod
    def _strip_vcs_metadata(target: Path) -> None:
        meta = target / VCS_METADATA_DIR
        if meta.exists():
            remove_tree(meta)

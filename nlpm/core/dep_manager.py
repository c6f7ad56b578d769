"""依赖包管理器

把清单加载、递归安装、存储清理和脚本执行串成对外的几个操作。

存储目录是唯一的持久状态：它的直接子目录名就是已安装的存储键，
不存在单独的锁文件或索引。

用法:
    from nlpm.core.dep_manager import DepManager

    dm = DepManager()
    dm.install()            # 安装全部依赖，然后清理未引用的包
    dm.clean()              # 只清理
    dm.run_script("test")   # 在 NELUA_PATH 环境下执行清单脚本
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from nlpm.core.dep.installer import PackageInstaller
from nlpm.core.dep.manifest import ManifestLoader
from nlpm.core.dep.models import Manifest
from nlpm.core.dep.paths import build_env
from nlpm.core.dep.reconciler import StoreReconciler
from nlpm.core.dep.vcs import GitVcs, VcsAdapter
from nlpm.core.exceptions import ScriptNotFound, ValidationError
from nlpm.utils.fs import ensure_dir, remove_tree
from nlpm.utils.shell import run_with_env

logger = logging.getLogger(__name__)


@dataclass
class InstallReport:
    """一次 install 的结果汇总"""

    results: dict[str, str] = field(default_factory=dict)
    removed: list[Path] = field(default_factory=list)


class DepManager:
    """依赖包统一管理器"""

    def __init__(
        self,
        project_dir: str = "",
        packages_dir: str = "",
        vcs: VcsAdapter | None = None,
    ) -> None:
        from nlpm.core.config import get_config
        cfg = get_config()
        self.config = cfg
        self.project_dir = Path(project_dir or ".").resolve()
        store = Path(packages_dir or cfg.packages_dir)
        if not store.is_absolute():
            store = self.project_dir / store
        self.packages_dir = store.resolve()
        self.loader = ManifestLoader(cfg.manifest_file)
        self.vcs = vcs or GitVcs(git_bin=cfg.git_bin)

    # ------------------------------------------------------------------
    # 清单
    # ------------------------------------------------------------------

    def load_manifest(self) -> Manifest:
        """加载项目根清单（不存在抛 ManifestMissing）"""
        return self.loader.load_root(self.project_dir)

    def new_manifest(self) -> Path:
        """在项目目录创建清单模板"""
        return self.loader.write_template(self.project_dir)

    # ------------------------------------------------------------------
    # 安装 / 清理
    # ------------------------------------------------------------------

    def install(self) -> InstallReport:
        """安装根清单中的全部依赖（含传递依赖），然后清理未引用的包"""
        manifest = self.load_manifest()

        if not self.packages_dir.is_dir():
            logger.info("包目录 '%s' 不存在，正在创建", self.packages_dir)
        ensure_dir(self.packages_dir)

        installer = PackageInstaller(
            self.packages_dir, self.vcs,
            loader=self.loader, clone_depth=self.config.clone_depth,
        )
        logger.info("正在安装依赖包...")
        results = installer.install_all(manifest.dependencies)
        logger.info("依赖包安装完成")

        removed = self._reconciler().reconcile(manifest)
        logger.info("清理完成")
        return InstallReport(results=results, removed=removed)

    def clean(self) -> list[Path]:
        """删除根清单不再引用的包"""
        manifest = self.load_manifest()
        removed = self._reconciler().reconcile(manifest)
        logger.info("清理完成")
        return removed

    def nuke(self) -> bool:
        """删除整个包目录，目录不存在返回 False"""
        if not self.packages_dir.exists():
            logger.info("包目录 '%s' 不存在", self.packages_dir)
            return False
        remove_tree(self.packages_dir)
        logger.info("已删除包目录 '%s'", self.packages_dir)
        return True

    def reachable(self) -> set[str]:
        """根清单当前可达的存储键"""
        return self._reconciler().reachable(self.load_manifest())

    def _reconciler(self) -> StoreReconciler:
        return StoreReconciler(self.packages_dir, loader=self.loader)

    # ------------------------------------------------------------------
    # 脚本执行
    # ------------------------------------------------------------------

    def script_env(self) -> dict[str, str]:
        return build_env(
            self.packages_dir, self.config.nelua_lib_dir,
            search_path_var=self.config.search_path_var,
        )

    def run_command(self, command: str) -> int:
        """在包搜索路径环境下执行任意命令，返回退出码"""
        if not command.strip():
            raise ValidationError("`run` 需要一个命令参数")
        return run_with_env(
            command, extra_env=self.script_env(), cwd=str(self.project_dir),
        )

    def run_script(self, name: str) -> int:
        """执行清单 scripts 中定义的脚本，返回退出码"""
        manifest = self.load_manifest()
        script = manifest.scripts.get(name)
        if script is None:
            raise ScriptNotFound(f"脚本 '{name}' 未在清单中定义")
        logger.info("运行脚本 '%s'", name)
        return self.run_command(script)

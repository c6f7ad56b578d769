"""模块搜索路径构建

为脚本执行环境生成 NELUA_PATH：先是固定的系统默认位置，
然后是存储目录下每个已安装包的两个查找模式
（<包目录>/?.nelua 与 <包目录>/?/init.nelua）。
"""

from __future__ import annotations

from pathlib import Path

from nlpm.utils.fs import list_entries

MODULE_PATTERN = "?.nelua"
INIT_MODULE_PATTERN = "?/init.nelua"
SEARCH_PATH_SEPARATOR = ";"


def _patterns(root: str) -> list[str]:
    return [f"{root}/{MODULE_PATTERN}", f"{root}/{INIT_MODULE_PATTERN}"]


def default_search_paths(lib_dir: str) -> list[str]:
    """当前目录 + Nelua 标准库目录"""
    return [*_patterns("."), *_patterns(lib_dir.rstrip("/\\"))]


def build_search_paths(store_dir: Path, lib_dir: str) -> list[str]:
    """生成完整的搜索模式列表

    存储子项的顺序与目录列举顺序一致（由平台决定，不排序），
    每个子项的两个模式总是相邻。
    """
    paths = default_search_paths(lib_dir)
    for entry in list_entries(store_dir):
        paths.extend(_patterns(entry.resolve().as_posix()))
    return paths


def build_env(
    store_dir: Path, lib_dir: str, *,
    search_path_var: str = "NELUA_PATH",
    packages_path_var: str = "NLPM_PACKAGES_PATH",
) -> dict[str, str]:
    """生成脚本执行时附加的环境变量"""
    paths = build_search_paths(store_dir, lib_dir)
    return {
        search_path_var: SEARCH_PATH_SEPARATOR.join(paths),
        packages_path_var: str(store_dir.resolve()),
    }

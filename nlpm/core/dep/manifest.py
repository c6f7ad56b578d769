"""清单文件加载

职责:
- 探测目录下是否存在清单文件（nlpm_package.yml）
- 解析为 Manifest，存在但无法解析时抛 ManifestLoadFailed
- 生成新的清单模板
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from nlpm.core.dep.models import Manifest, PackageDependency
from nlpm.core.exceptions import ManifestLoadFailed, ManifestMissing, ValidationError
from nlpm.utils.yaml_io import atomic_write, load_yaml

logger = logging.getLogger(__name__)

DEFAULT_MANIFEST_FILE = "nlpm_package.yml"

MANIFEST_TEMPLATE = """\
# nlpm 清单文件
#
# dependencies:
#   - name: 包名（安装后的目录名前缀）
#     repo: Git 仓库地址
#     version: 可选，"#<commit>" 或 "v<tag>"，缺省为 "#HEAD"
#               注意 "#" 开头的值必须加引号，否则会被 YAML 当作注释
#
# scripts:
#   名称: 通过 `nlpm script <名称>` 执行的命令

dependencies: []

scripts: {}
"""


class ManifestLoader:
    """清单加载器 - 按目录查找并解析清单文件"""

    def __init__(self, filename: str = DEFAULT_MANIFEST_FILE) -> None:
        self.filename = filename

    def path_in(self, directory: Path) -> Path:
        return directory / self.filename

    def load(self, directory: Path) -> Manifest | None:
        """加载目录下的清单，不存在返回 None

        Raises:
            ManifestLoadFailed: 文件存在但格式无效
        """
        path = self.path_in(directory)
        if not path.is_file():
            return None
        try:
            data = load_yaml(path)
        except (yaml.YAMLError, OSError, ValueError) as e:
            raise ManifestLoadFailed(f"清单文件解析失败: {path} - {e}") from e
        try:
            manifest = parse_manifest(data)
        except ValidationError as e:
            raise ManifestLoadFailed(f"清单文件内容无效: {path} - {e}") from e
        logger.debug("已加载清单 %s (%d 个依赖)", path, len(manifest.dependencies))
        return manifest

    def load_root(self, directory: Path) -> Manifest:
        """加载项目根清单，不存在时抛 ManifestMissing"""
        manifest = self.load(directory)
        if manifest is None:
            raise ManifestMissing(f"清单文件 '{self.path_in(directory)}' 不存在")
        return manifest

    def write_template(self, directory: Path) -> Path:
        """在目录下创建新的清单模板，已存在时报错"""
        path = self.path_in(directory)
        if path.exists():
            raise ValidationError(f"清单文件 '{path}' 已存在")
        atomic_write(path, MANIFEST_TEMPLATE)
        logger.info("已创建 %s", path)
        return path


def _require_str(entry: dict[str, Any], field_name: str, index: int) -> str:
    value = entry.get(field_name)
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(
            f"dependencies[{index}] 缺少有效的 '{field_name}' 字段"
        )
    return value


def parse_dependency(entry: Any, index: int = 0) -> PackageDependency:
    """把清单中的一条依赖解析为 PackageDependency"""
    if not isinstance(entry, dict):
        raise ValidationError(f"dependencies[{index}] 必须是映射")
    name = _require_str(entry, "name", index)
    repo = _require_str(entry, "repo", index)
    version = entry.get("version")
    if version is not None and not isinstance(version, str):
        raise ValidationError(
            f"dependencies[{index}] ('{name}') 的 version 必须是字符串"
        )
    return PackageDependency(name=name, repo=repo, version=version)


def parse_manifest(data: dict[str, Any]) -> Manifest:
    """把 YAML 字典解析为 Manifest，dependencies/scripts 均可缺省"""
    raw_deps = data.get("dependencies") or []
    if not isinstance(raw_deps, list):
        raise ValidationError("'dependencies' 必须是列表")
    deps = [parse_dependency(entry, i) for i, entry in enumerate(raw_deps)]

    raw_scripts = data.get("scripts") or {}
    if not isinstance(raw_scripts, dict):
        raise ValidationError("'scripts' 必须是映射")
    scripts: dict[str, str] = {}
    for name, cmd in raw_scripts.items():
        if not isinstance(cmd, str):
            raise ValidationError(f"脚本 '{name}' 的命令必须是字符串")
        scripts[str(name)] = cmd

    return Manifest(dependencies=deps, scripts=scripts)

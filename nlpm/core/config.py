"""集中配置管理

支持从 YAML 文件加载 + 环境变量覆盖 + 编程式覆盖。
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

import yaml

from nlpm.core.exceptions import ConfigError
from nlpm.utils.yaml_io import load_yaml

logger = logging.getLogger(__name__)

PACKAGES_PATH_ENV = "NLPM_PACKAGES_PATH"
DEFAULT_CONFIG_FILE = "nlpm.yml"
_STR_FIELDS = ("packages_dir", "manifest_file", "nelua_lib_dir", "search_path_var", "git_bin")


@dataclass
class Config:
    """nlpm 全局配置"""

    # 目录
    packages_dir: str = "nlpm_packages"
    manifest_file: str = "nlpm_package.yml"
    nelua_lib_dir: str = "/usr/local/lib/nelua/lib"

    # 脚本环境
    search_path_var: str = "NELUA_PATH"

    # Git
    git_bin: str = "git"
    clone_depth: int = 1

    extra: dict = field(default_factory=dict)

    @classmethod
    def from_file(cls, path: str = DEFAULT_CONFIG_FILE) -> Config:
        """从 YAML 文件加载配置，不存在则返回默认"""
        try:
            data = load_yaml(path)
        except (OSError, ValueError) as e:
            raise ConfigError(f"配置文件无法读取: {path} - {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"配置文件格式错误: {path} - {e}") from e
        if not data:
            return cls()
        known = {f.name for f in cls.__dataclass_fields__.values()}
        matched = {k: v for k, v in data.items() if k in known}
        extra = {k: v for k, v in data.items() if k not in known}
        cfg = cls(**matched)
        cfg.extra = extra
        for name in _STR_FIELDS:
            value = getattr(cfg, name)
            if not isinstance(value, str) or not value:
                raise ConfigError(f"{name} 必须是非空字符串: {value!r}")
        if type(cfg.clone_depth) is not int or cfg.clone_depth < 1:
            raise ConfigError(f"clone_depth 必须是正整数: {cfg.clone_depth!r}")
        return cfg

    def apply_env(self) -> Config:
        """应用环境变量覆盖（NLPM_PACKAGES_PATH）"""
        override = os.getenv(PACKAGES_PATH_ENV)
        if override:
            self.packages_dir = override
        return self


# 全局单例，首次 import 时不加载文件；由 CLI 入口显式初始化
_current: Config | None = None


def get_config() -> Config:
    """获取当前配置（未初始化则返回默认值 + 环境变量覆盖）"""
    global _current  # noqa: PLW0603
    if _current is None:
        _current = Config().apply_env()
    return _current


def init_config(path: str = DEFAULT_CONFIG_FILE) -> Config:
    """从文件初始化全局配置"""
    global _current  # noqa: PLW0603
    _current = Config.from_file(path).apply_env()
    logger.debug("配置已加载: %s", path)
    return _current


def reset_config() -> None:
    """清除全局配置（测试用）"""
    global _current  # noqa: PLW0603
    _current = None

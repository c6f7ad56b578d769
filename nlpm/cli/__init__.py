"""nlpm 命令行接口

CLI 按领域拆分为子模块，每个模块注册自己的命令到 main group。
"""

from __future__ import annotations

import functools
from typing import Any, Callable

import click

from nlpm import __version__
from nlpm.core.config import DEFAULT_CONFIG_FILE, init_config
from nlpm.core.exceptions import NlpmError
from nlpm.utils.logger import setup_from_env

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def handle_errors(func: Callable[..., Any]) -> Callable[..., Any]:
    """把 NlpmError 转换为 click 错误（stderr 输出 + 退出码 1）"""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except NlpmError as e:
            raise click.ClickException(str(e)) from e

    return wrapper


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(version=__version__)
@click.option(
    "--config", "config_path", default=DEFAULT_CONFIG_FILE,
    help="配置文件路径（不存在时使用默认配置）",
)
@handle_errors
def main(config_path: str) -> None:
    """nlpm - Nelua 源码依赖包管理器"""
    setup_from_env()
    init_config(config_path)


# 注册各领域子命令
from nlpm.cli.cmd_deps import register as _reg_deps  # noqa: E402
from nlpm.cli.cmd_run import register as _reg_run  # noqa: E402

_reg_deps(main)
_reg_run(main)

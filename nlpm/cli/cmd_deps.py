"""CLI — 依赖包管理命令"""

from __future__ import annotations

import click

from nlpm.cli import handle_errors
from nlpm.core.dep.installer import INSTALLED
from nlpm.core.dep_manager import DepManager


def register(group: click.Group) -> None:
    group.add_command(install)
    group.add_command(clean)
    group.add_command(new)
    group.add_command(nuke)


@click.command()
@handle_errors
def install() -> None:
    """安装清单中的全部依赖到包目录，并清理未引用的包"""
    dm = DepManager()
    report = dm.install()
    installed = sum(1 for s in report.results.values() if s == INSTALLED)
    click.echo(
        f"完成: {len(report.results)} 个顶层依赖 ({installed} 个新安装), "
        f"清理 {len(report.removed)} 个包"
    )


@click.command()
@handle_errors
def clean() -> None:
    """删除清单不再引用的包"""
    removed = DepManager().clean()
    for path in removed:
        click.echo(f"已删除: {path}")


@click.command()
@handle_errors
def new() -> None:
    """在当前目录创建新的清单文件"""
    path = DepManager().new_manifest()
    click.echo(f"{path.name} 创建成功")


@click.command()
@handle_errors
def nuke() -> None:
    """删除整个包目录"""
    dm = DepManager()
    if dm.nuke():
        click.echo(f"已删除 '{dm.packages_dir}' 目录")
    else:
        click.echo(f"'{dm.packages_dir}' 目录不存在")

"""CLI — 在包搜索路径环境下执行脚本或命令"""

from __future__ import annotations

import shlex

import click

from nlpm.cli import handle_errors
from nlpm.core.dep_manager import DepManager


def register(group: click.Group) -> None:
    group.add_command(script)
    group.add_command(run)


@click.command()
@click.argument("name")
@click.pass_context
@handle_errors
def script(ctx: click.Context, name: str) -> None:
    """执行清单 scripts 中定义的脚本"""
    rc = DepManager().run_script(name)
    ctx.exit(rc)


@click.command(
    context_settings={
        "ignore_unknown_options": True,
        "allow_interspersed_args": False,
    },
)
@click.argument("command", nargs=-1, required=True, type=click.UNPROCESSED)
@click.pass_context
@handle_errors
def run(ctx: click.Context, command: tuple[str, ...]) -> None:
    """执行任意命令，例如: nlpm run -- nelua main.nelua

    各参数按原样转义后交给 shell，带空格的参数不会被再次拆分。
    """
    rc = DepManager().run_command(shlex.join(command))
    ctx.exit(rc)

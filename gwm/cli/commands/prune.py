"""GWM prune 命令实现"""

import click

from gwm.core.exceptions import GWMException
from gwm.core.logger import OperationScope, get_logger
from gwm.core.worktree_manager import WorktreeManager
from gwm.cli.utils import get_formatter, locate_project

logger = get_logger("prune_command")


@click.command()
@click.pass_context
def prune(ctx: click.Context) -> None:
    """清理已手动删除目录的 worktree 元数据"""
    formatter = get_formatter(ctx)

    try:
        with OperationScope("prune_worktrees"):
            project_root = locate_project()

            click.echo(formatter.info("Pruning worktree references..."))
            output = WorktreeManager(project_root).prune()
            if output:
                click.echo(output)
            click.echo(formatter.success("Pruning complete"))

    except GWMException as e:
        logger.error("Failed to prune worktrees", error=e.message)
        click.echo(formatter.exception(e), err=True)
        raise SystemExit(1)

"""GWM switch 命令实现

在分支对应的 worktree 中启动交互式 shell（替换当前进程）。
"""

import click

from gwm.core.exceptions import GWMException, InputValidationError, WorktreeNotFound
from gwm.core.logger import OperationScope, get_logger
from gwm.core.worktree_manager import WorktreeManager
from gwm.cli.commands.list import format_worktree_table
from gwm.cli.utils import get_formatter, launch_shell, locate_project

logger = get_logger("switch_command")


@click.command()
@click.argument("branch", required=False, default="")
@click.pass_context
def switch(ctx: click.Context, branch: str) -> None:
    """切换到分支对应的 worktree

    \b
    使用示例:
    gwm switch feature/auth-system
    """
    formatter = get_formatter(ctx)

    try:
        with OperationScope("switch_worktree", branch=branch):
            if not branch:
                raise InputValidationError("Branch name required")

            project_root = locate_project()
            manager = WorktreeManager(project_root)

            try:
                worktree_path = manager.get_worktree_path(branch)
            except WorktreeNotFound as e:
                click.echo(formatter.exception(e), err=True)
                click.echo(formatter.info("Available worktrees:"))
                click.echo(format_worktree_table(formatter, manager.list_worktrees()))
                raise SystemExit(1)

    except GWMException as e:
        logger.error("Failed to switch worktree", branch=branch, error=e.message)
        click.echo(formatter.exception(e), err=True)
        raise SystemExit(1)

    logger.info("Launching shell in worktree", branch=branch, path=str(worktree_path))
    click.echo(formatter.success(f"Switching to worktree: {worktree_path}"))
    launch_shell(worktree_path)

"""GWM remove 命令实现

按路径或分支名删除 worktree。
"""

import click

from gwm.core.exceptions import GWMException, InputValidationError
from gwm.core.logger import OperationScope, get_logger
from gwm.core.worktree_manager import WorktreeManager
from gwm.cli.utils import get_formatter, locate_project

logger = get_logger("remove_command")


@click.command()
@click.argument("target", required=False, default="")
@click.option(
    "-f",
    "--force",
    is_flag=True,
    help="强制删除，忽略未提交改动",
)
@click.pass_context
def remove(ctx: click.Context, target: str, force: bool) -> None:
    """删除 worktree（参数可以是路径或分支名）

    \b
    使用示例:
    gwm remove ../myproject-feature-auth
    gwm remove feature-auth
    gwm remove feature-auth --force
    """
    formatter = get_formatter(ctx)

    try:
        with OperationScope("remove_worktree", target=target, force=force):
            if not target:
                raise InputValidationError("Worktree path or branch name required")

            project_root = locate_project()
            manager = WorktreeManager(project_root)

            click.echo(formatter.info(f"Removing worktree: {target}"))
            worktree_path = manager.remove_worktree(target, force=force)

            click.echo(formatter.success(f"Worktree removed: {worktree_path}"))

    except GWMException as e:
        logger.error("Failed to remove worktree", target=target, error=e.message)
        click.echo(formatter.exception(e), err=True)
        raise SystemExit(1)

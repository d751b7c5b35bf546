"""GWM list 命令实现

列出所有 worktree 及其状态。
"""

from typing import List

import click

from gwm.core.data_structures import WorktreeRecord
from gwm.core.exceptions import GWMException
from gwm.core.logger import OperationScope, get_logger
from gwm.core.worktree_manager import WorktreeManager
from gwm.cli.utils import OutputFormatter, get_formatter, locate_project

logger = get_logger("list_command")

LIST_HEADERS = ["PATH", "BRANCH", "COMMIT", "STATUS"]


def format_worktree_table(formatter: OutputFormatter, worktrees: List[WorktreeRecord]) -> str:
    """格式化 worktree 表格

    分支显示完整引用（refs/heads/...），分离 HEAD 时显示 N/A。
    """
    rows = [
        [str(wt.path), wt.branch or "N/A", wt.short_head, wt.status_text]
        for wt in worktrees
    ]
    return formatter.format_table(LIST_HEADERS, rows, column_widths=[50, 20, 10])


@click.command(name="list")
@click.pass_context
def list_command(ctx: click.Context) -> None:
    """列出所有 worktree"""
    formatter = get_formatter(ctx)

    try:
        with OperationScope("list_worktrees"):
            project_root = locate_project()
            worktrees = WorktreeManager(project_root).list_worktrees()

            click.echo(formatter.info("Current worktrees:"))
            click.echo(format_worktree_table(formatter, worktrees))

    except GWMException as e:
        logger.error("Failed to list worktrees", error=e.message)
        click.echo(formatter.exception(e), err=True)
        raise SystemExit(1)

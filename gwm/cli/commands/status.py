"""GWM status 命令实现

逐个显示 worktree 的 ``git status --short --branch``。
单个 worktree 失败只报告，不中断其他 worktree。
"""

import click

from gwm.core.exceptions import GWMException
from gwm.core.logger import OperationScope, get_logger
from gwm.core.worktree_manager import WorktreeManager
from gwm.cli.utils import get_formatter, locate_project

logger = get_logger("status_command")


@click.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """显示所有 worktree 的状态"""
    formatter = get_formatter(ctx)

    try:
        with OperationScope("worktree_status"):
            project_root = locate_project()
            reports = WorktreeManager(project_root).collect_status()

            click.echo(formatter.info("Worktree status overview:"))
            for report in reports:
                click.echo()
                click.echo(f"=== {report.path} ===")
                if report.ok:
                    click.echo(report.output)
                else:
                    click.echo(formatter.error(f"Cannot access worktree: {report.error}"))

            failed = sum(1 for r in reports if not r.ok)
            if failed:
                click.echo()
                click.echo(formatter.warning(f"{failed} of {len(reports)} worktrees could not be queried"))

    except GWMException as e:
        logger.error("Failed to show worktree status", error=e.message)
        click.echo(formatter.exception(e), err=True)
        raise SystemExit(1)

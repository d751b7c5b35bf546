"""GWM cleanup 命令实现

先 prune，再查找并删除按命名约定识别出的孤立 worktree 目录。
"""

from typing import Optional

import click

from gwm.core.cleanup_scanner import CleanupScanner
from gwm.core.exceptions import GWMException
from gwm.core.git_client import GitClient
from gwm.core.logger import OperationScope, get_logger
from gwm.cli.utils import InteractivePrompt, get_formatter, locate_project

logger = get_logger("cleanup_command")


@click.command()
@click.option(
    "-f",
    "--force",
    is_flag=True,
    help="不确认，直接删除所有孤立目录（不可恢复）",
)
@click.option(
    "-d",
    "--base-dir",
    type=click.Path(file_okay=False),
    help="扫描的基础目录（默认：仓库的父目录）",
)
@click.pass_context
def cleanup(ctx: click.Context, force: bool, base_dir: Optional[str]) -> None:
    """删除孤立的 worktree 目录

    \b
    使用示例:
    gwm cleanup          # 列出孤立目录并确认后删除
    gwm cleanup --force  # 直接删除
    """
    formatter = get_formatter(ctx)

    try:
        with OperationScope("cleanup_worktrees", force=force):
            project_root = locate_project()
            scanner = CleanupScanner(project_root, GitClient(project_root))

            click.echo(formatter.info("Cleaning up stale worktrees..."))
            orphans = scanner.scan(base_dir)

            if not orphans:
                click.echo(formatter.success("No orphaned worktree directories found"))
                return

            click.echo(formatter.warning(f"Found {len(orphans)} potentially orphaned directories:"))
            click.echo(formatter.format_list([str(p) for p in orphans]))

            if not force:
                click.echo()
                if not InteractivePrompt.confirm("Remove these directories?", default=False):
                    click.echo(formatter.info("Cleanup cancelled"))
                    return

            for path in orphans:
                click.echo(formatter.info(f"Removing orphaned directory: {path}"))
            removed = scanner.remove_orphans(orphans)

            click.echo(formatter.success(f"Cleaned up {len(removed)} orphaned directories"))
            if len(removed) < len(orphans):
                click.echo(formatter.warning(f"Failed to remove {len(orphans) - len(removed)} directories"))

    except GWMException as e:
        logger.error("Failed to clean up worktrees", error=e.message)
        click.echo(formatter.exception(e), err=True)
        raise SystemExit(1)

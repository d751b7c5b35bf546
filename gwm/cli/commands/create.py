"""GWM create 命令实现

为分支创建新的 worktree，并复制配置文件。
分支来源自动判断：本地分支 > 远程分支 > 从主分支新建。
"""

from pathlib import Path
from typing import Optional

import click

from gwm.core.config_store import ConfigStore, parse_file_list
from gwm.core.data_structures import BranchSource, CopyReport, CreateResult
from gwm.core.exceptions import GWMException, InputValidationError
from gwm.core.logger import OperationScope, get_logger
from gwm.core.worktree_manager import WorktreeManager
from gwm.cli.utils import OutputFormatter, get_formatter, locate_project

logger = get_logger("create_command")


def describe_resolution(result: CreateResult) -> str:
    """描述选中的分支来源"""
    resolution = result.resolution
    if resolution.source is BranchSource.LOCAL:
        return f"Branch '{resolution.branch}' exists locally"
    if resolution.source is BranchSource.REMOTE:
        return (
            f"Branch '{resolution.branch}' exists on remote, "
            f"created local tracking branch from '{resolution.start_point}'"
        )
    return f"Created new branch '{resolution.branch}' from '{resolution.start_point}'"


def echo_copy_report(formatter: OutputFormatter, report: CopyReport) -> None:
    """输出配置文件复制结果"""
    click.echo(formatter.info("Copying config files to worktree..."))
    for file_name in report.copied:
        click.echo(formatter.info(f"  ✓ Copied: {file_name}"))
    for file_name in report.skipped:
        click.echo(formatter.info(f"  - Skipped: {file_name} (not found)"))
    for file_name in report.failed:
        click.echo(formatter.warning(f"  ✗ Failed to copy: {file_name}"))

    if report.copied_count:
        click.echo(formatter.success(f"Copied {report.copied_count} config files"))
    if report.failed_count:
        click.echo(formatter.warning(f"Failed to copy {report.failed_count} config files"))


@click.command()
@click.argument("branch", required=False, default="")
@click.argument("path", required=False)
@click.option(
    "-d",
    "--base-dir",
    type=click.Path(file_okay=False),
    help="worktree 的基础目录（默认：仓库的父目录）",
)
@click.option(
    "-p",
    "--prefix",
    default="",
    help="worktree 目录名前缀",
)
@click.option(
    "-f",
    "--force",
    is_flag=True,
    help="目标目录已存在时仍继续（谨慎使用）",
)
@click.option(
    "-c",
    "--copy-configs/--no-copy-configs",
    default=True,
    help="是否复制配置文件到新 worktree（默认复制）",
)
@click.option(
    "--config-files",
    help="逗号分隔的配置文件列表，覆盖 .worktree-config",
)
@click.pass_context
def create(
    ctx: click.Context,
    branch: str,
    path: Optional[str],
    base_dir: Optional[str],
    prefix: str,
    force: bool,
    copy_configs: bool,
    config_files: Optional[str],
) -> None:
    """为分支创建新的 worktree

    \b
    使用示例:
    gwm create feature/auth-system
    gwm create hotfix/bug-123 ../hotfix-workspace
    gwm create feature/test --no-copy-configs
    gwm create feature/db --config-files ".env,.env.local"
    """
    formatter = get_formatter(ctx)

    try:
        with OperationScope("create_worktree", branch=branch, force=force):
            if not branch:
                raise InputValidationError("Branch name required")

            project_root = locate_project()
            manager = WorktreeManager(project_root)

            files = None
            if copy_configs:
                if config_files:
                    files = parse_file_list(config_files)
                else:
                    files = ConfigStore(project_root).load()

            if path:
                target = Path(path).absolute()
            else:
                target = manager.path_deriver.derive(branch, base_dir=base_dir, prefix=prefix)
            click.echo(formatter.info(f"Creating worktree for branch '{branch}' at '{target}'"))

            result = manager.create_worktree(
                branch,
                path=target,
                force=force,
                copy_configs=copy_configs,
                config_files=files,
            )

            click.echo(formatter.info(describe_resolution(result)))
            if result.copy_report is not None:
                echo_copy_report(formatter, result.copy_report)

            click.echo(formatter.success(f"Worktree created at: {result.path}"))
            click.echo(formatter.info(f"To switch to this worktree: cd '{result.path}'"))

    except GWMException as e:
        logger.error("Failed to create worktree", branch=branch, error=e.message)
        click.echo(formatter.exception(e), err=True)
        raise SystemExit(1)

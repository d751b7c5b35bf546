"""GWM config 命令实现

管理 .worktree-config 中需要复制到新 worktree 的文件列表。"""

from pathlib import Path
from typing import Optional

import click

from gwm.core.config_store import ConfigStore
from gwm.core.exceptions import GWMException, InputValidationError
from gwm.core.logger import OperationScope, get_logger
from gwm.cli.utils import OutputFormatter, get_formatter, locate_project

logger = get_logger("config_command")


class ConfigCommand:
    """配置管理命令"""

    def __init__(self, project_path: Path, formatter: OutputFormatter):
        self.store = ConfigStore(project_path)
        self.formatter = formatter

    def execute_list(self) -> None:
        """列出文件及其是否存在"""
        click.echo(self.formatter.info("Current config files to copy:"))
        entries = self.store.list_entries()
        if not entries:
            click.echo("  (none configured)")
            return

        for entry in entries:
            if entry.found:
                click.echo(f"  ✓ {entry.path}")
            else:
                click.echo(f"  - {entry.path} (not found)")

    def execute_add(self, file_path: str) -> None:
        """追加文件"""
        if self.store.add(file_path):
            click.echo(self.formatter.success(f"Added '{file_path}' to config files"))
        else:
            click.echo(self.formatter.warning(f"File '{file_path}' already in config list"))

    def execute_remove(self, file_path: str) -> None:
        """移除文件"""
        if self.store.remove(file_path):
            click.echo(self.formatter.success(f"Removed '{file_path}' from config files"))
        else:
            click.echo(self.formatter.warning(f"File '{file_path}' not found in config list"))

    def execute_reset(self) -> None:
        """恢复默认列表"""
        self.store.reset()
        click.echo(self.formatter.success("Reset config files to defaults"))


@click.command()
@click.option("--list", "list_", is_flag=True, help="列出配置的文件（默认）")
@click.option("--add", "add_file", metavar="FILE", help="追加文件")
@click.option("--remove", "remove_file", metavar="FILE", help="移除文件")
@click.option("--reset", is_flag=True, help="恢复默认列表")
@click.pass_context
def config(
    ctx: click.Context,
    list_: bool,
    add_file: Optional[str],
    remove_file: Optional[str],
    reset: bool,
) -> None:
    """管理复制到新 worktree 的配置文件列表

    \b
    使用示例:
    gwm config --list
    gwm config --add .env.production
    gwm config --remove .vscode/settings.json
    gwm config --reset
    """
    formatter = get_formatter(ctx)
    actions = [list_, add_file is not None, remove_file is not None, reset]

    try:
        with OperationScope("manage_config"):
            if sum(actions) > 1:
                raise InputValidationError(
                    "Only one of --list, --add, --remove, --reset can be used"
                )
            if add_file == "":
                raise InputValidationError("File path required for --add")
            if remove_file == "":
                raise InputValidationError("File path required for --remove")

            cmd = ConfigCommand(locate_project(), formatter)

            if add_file is not None:
                cmd.execute_add(add_file)
            elif remove_file is not None:
                cmd.execute_remove(remove_file)
            elif reset:
                cmd.execute_reset()
            else:
                cmd.execute_list()

    except GWMException as e:
        logger.error("Config command failed", error=e.message)
        click.echo(formatter.exception(e), err=True)
        raise SystemExit(1)

"""GWM CLI 主入口"""

import sys

import click

from gwm.cli.commands.cleanup import cleanup
from gwm.cli.commands.config import config
from gwm.cli.commands.create import create
from gwm.cli.commands.list import list_command
from gwm.cli.commands.prune import prune
from gwm.cli.commands.remove import remove
from gwm.cli.commands.status import status
from gwm.cli.commands.switch import switch
from gwm.cli.utils import OutputFormatter
from gwm.core.exceptions import GWMException
from gwm.core.logger import LoggerConfig, configure_logger


@click.group()
@click.version_option(version="0.1.0")
@click.option(
    '--verbose',
    is_flag=True,
    help='详细日志输出（调试用）'
)
@click.option(
    '--no-color',
    is_flag=True,
    help='关闭彩色输出'
)
@click.pass_context
def cli(ctx, verbose, no_color):
    """GWM - Git Worktree Manager

    管理 git worktree，并把未跟踪的本地配置文件（.env、编辑器设置等）
    复制到新建的 worktree 中。

    \b
    命令：
      create <branch> [path]  为分支创建 worktree
      list                    列出所有 worktree
      remove <path|branch>    删除 worktree
      switch <branch>         在 worktree 中打开 shell
      status                  查看所有 worktree 的状态
      prune                   清理失效的 worktree 元数据
      cleanup                 删除孤立的 worktree 目录
      config                  管理要复制的配置文件
      help                    显示帮助信息

    \b
    示例:
      gwm create feature/auth-system
      gwm create feature/db --config-files ".env,.env.local"
      gwm remove feature/auth-system --force
      gwm config --add .env.production
    """
    ctx.ensure_object(dict)
    ctx.obj['verbose'] = verbose
    ctx.obj['no_color'] = no_color

    if verbose:
        configure_logger(LoggerConfig(level="DEBUG", console_output=True))
    else:
        configure_logger(LoggerConfig())


@click.command(name="help")
@click.pass_context
def help_command(ctx):
    """显示帮助信息"""
    click.echo(ctx.find_root().get_help())


# 注册命令
cli.add_command(create)
cli.add_command(list_command, name="list")
cli.add_command(remove)
cli.add_command(switch)
cli.add_command(status)
cli.add_command(prune)
cli.add_command(cleanup)
cli.add_command(config)
cli.add_command(help_command, name="help")


def main():
    """CLI 入口点，处理全局异常"""
    try:
        cli()
    except GWMException as e:
        click.echo(OutputFormatter().exception(e), err=True)
        sys.exit(1)
    except Exception as e:
        # 其他未处理的异常
        click.echo(f"[ERROR] {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()

"""CLI 交互工具封装"""

import os
from pathlib import Path
from typing import NoReturn

import click


DEFAULT_SHELL = "/bin/bash"


class InteractivePrompt:
    """交互式提示工具"""

    @staticmethod
    def confirm(message: str, default: bool = False, show_default: bool = True) -> bool:
        """交互确认，读取一行输入"""
        return click.confirm(message, default=default, show_default=show_default)


def launch_shell(path: Path) -> NoReturn:
    """在指定目录启动用户的交互式 shell，替换当前进程

    成功时不会返回。

    Args:
        path: 工作目录
    """
    shell = os.environ.get("SHELL") or DEFAULT_SHELL
    os.chdir(path)
    os.execvp(shell, [shell])

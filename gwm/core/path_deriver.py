"""分支名称到 worktree 路径的映射

将 Git 分支名转换为文件系统安全的目录名，并按固定规则拼出 worktree 路径：
``<base_dir>/<prefix><项目名>-<清理后的分支名>``。
"""

import re
from pathlib import Path
from typing import Optional, Union

from gwm.core.exceptions import InputValidationError
from gwm.core.logger import get_logger


logger = get_logger("path_deriver")

# 字母、数字、`.`、`_`、`-` 之外的字符全部替换为 `-`
_UNSAFE_CHARS = re.compile(r'[^A-Za-z0-9._-]')


def sanitize_branch_name(branch_name: str) -> str:
    """清理分支名中的特殊字符

    不合并连续的 `-`，也不去掉首尾的 `-`：
    ``feature/user@auth_v2`` → ``feature-user-auth_v2``

    Args:
        branch_name: 原始分支名

    Returns:
        只含 ``[A-Za-z0-9._-]`` 的目录名片段
    """
    return _UNSAFE_CHARS.sub('-', branch_name)


class PathDeriver:
    """worktree 路径推导器

    纯函数式：相同的分支名、基础目录、前缀总是得到相同的路径，
    不访问文件系统，也不处理路径冲突。
    """

    def __init__(self, repo_root: Union[str, Path]):
        """初始化路径推导器

        Args:
            repo_root: 仓库根目录
        """
        self.repo_root = Path(repo_root)

    @property
    def repo_name(self) -> str:
        """仓库目录名"""
        return self.repo_root.name

    @property
    def default_base_dir(self) -> Path:
        """默认基础目录：仓库根目录的父目录"""
        return self.repo_root.parent

    def worktree_name(self, branch_name: str, prefix: str = "") -> str:
        """计算 worktree 目录名

        Args:
            branch_name: 分支名
            prefix: 目录名前缀

        Returns:
            ``<prefix><项目名>-<清理后的分支名>``

        Raises:
            InputValidationError: 分支名为空时抛出
        """
        if not branch_name:
            raise InputValidationError("Branch name required")

        return f"{prefix or ''}{self.repo_name}-{sanitize_branch_name(branch_name)}"

    def derive(
        self,
        branch_name: str,
        base_dir: Optional[Union[str, Path]] = None,
        prefix: str = "",
    ) -> Path:
        """推导 worktree 的完整路径

        Args:
            branch_name: 分支名
            base_dir: 基础目录，默认为仓库根目录的父目录
            prefix: 目录名前缀

        Returns:
            worktree 路径
        """
        base = Path(base_dir).absolute() if base_dir else self.default_base_dir
        path = base / self.worktree_name(branch_name, prefix)

        logger.debug(
            "Worktree path derived",
            branch=branch_name,
            base_dir=str(base),
            prefix=prefix,
            path=str(path),
        )
        return path

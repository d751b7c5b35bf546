"""项目路径查找工具

提供类似 git 的目录查找机制，从当前目录逐级向上查找仓库根目录。
"""

from pathlib import Path
from typing import Optional

from gwm.core.exceptions import GitCommandError, RepositoryNotFoundError
from gwm.core.git_client import GitClient
from gwm.core.logger import get_logger

logger = get_logger("project_utils")

GIT_METADATA = ".git"


def main_root_of_linked_worktree(worktree_root: Path) -> Path:
    """由链接 worktree 找到主仓库根目录（共享 .git 目录的父目录）

    Raises:
        RepositoryNotFoundError: ``.git`` 文件指向的仓库无效
    """
    try:
        common_dir = GitClient(worktree_root).get_common_dir()
    except GitCommandError as e:
        raise RepositoryNotFoundError(
            "Not in a git repository",
            details=e.details or e.message,
        ) from e

    # 子模块的 .git 文件指向 .git/modules/<name>，它本身就是根目录
    if common_dir.name != GIT_METADATA:
        return worktree_root
    return common_dir.parent


def find_repo_root(start_path: Optional[Path] = None) -> Path:
    """查找仓库根目录

    从起始目录开始，逐级向上查找包含 ``.git`` 的目录。
    在链接 worktree 中（``.git`` 是文件）返回主仓库的根目录。

    Args:
        start_path: 起始查找目录，默认为当前工作目录

    Returns:
        仓库根目录路径

    Raises:
        RepositoryNotFoundError: 直到文件系统根目录都未找到
    """
    if start_path is None:
        start_path = Path.cwd()

    current = Path(start_path).resolve()

    while True:
        metadata = current / GIT_METADATA
        if metadata.is_dir():
            logger.debug("Repository root found", root=str(current))
            return current

        if metadata.is_file():
            root = main_root_of_linked_worktree(current)
            logger.debug("Repository root found from linked worktree", worktree=str(current), root=str(root))
            return root

        parent = current.parent
        if parent == current:
            raise RepositoryNotFoundError(
                "fatal: not a git repository (or any of the parent directories): .git",
                details=f"searched from: {start_path}",
            )

        current = parent


def validate_repository(repo_root: Path, git_client: Optional[GitClient] = None) -> None:
    """确认仓库元数据可用

    Raises:
        RepositoryNotFoundError: git 不认为这是一个仓库
    """
    client = git_client or GitClient(repo_root)
    if not client.is_repository():
        raise RepositoryNotFoundError(
            "Not in a git repository",
            details=f"git rev-parse failed in {repo_root}",
        )


def locate_project(start_path: Optional[Path] = None) -> Path:
    """查找并校验仓库根目录，所有命令在执行前调用"""
    repo_root = find_repo_root(start_path)
    validate_repository(repo_root)
    return repo_root

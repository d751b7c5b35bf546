"""孤立 worktree 目录扫描

按命名约定（``<项目名>-*``）在基础目录中查找看起来像 worktree、
但已不在 ``git worktree list`` 中的目录。这是启发式判断：
手动创建的同名目录也会被当作孤立目录。
"""

import shutil
from pathlib import Path
from typing import Iterable, List, Optional, Set, Union

from gwm.core.interfaces import IGitClient
from gwm.core.logger import get_logger

logger = get_logger("cleanup_scanner")


def looks_like_orphan(dir_path: Path, repo_name: str, known_paths: Set[Path]) -> bool:
    """判断目录是否像孤立的 worktree

    Args:
        dir_path: 候选目录
        repo_name: 仓库目录名
        known_paths: 当前已注册的 worktree 路径

    Returns:
        名称以 ``<repo_name>-`` 开头且不在 known_paths 中时返回 True
    """
    if not dir_path.name.startswith(f"{repo_name}-"):
        return False
    return dir_path not in known_paths


class CleanupScanner:
    """孤立目录扫描与删除"""

    def __init__(self, repo_root: Union[str, Path], git_client: IGitClient):
        self.repo_root = Path(repo_root)
        self.git_client = git_client

    def known_worktree_paths(self) -> Set[Path]:
        """当前已注册 worktree 的绝对路径"""
        return {Path(wt.path).resolve() for wt in self.git_client.list_worktrees()}

    def scan(self, base_dir: Optional[Union[str, Path]] = None) -> List[Path]:
        """查找孤立目录

        先执行 prune 清理失效元数据，再扫描基础目录（只看一层）。

        Args:
            base_dir: 基础目录，默认为仓库根目录的父目录

        Returns:
            孤立目录列表（按名称排序）
        """
        self.git_client.prune_worktrees()

        base = Path(base_dir).absolute() if base_dir else self.repo_root.parent
        if not base.is_dir():
            logger.info("Base directory does not exist", base_dir=str(base))
            return []

        known_paths = self.known_worktree_paths()
        repo_name = self.repo_root.name

        orphans = [
            entry.resolve()
            for entry in sorted(base.iterdir())
            if entry.is_dir() and not entry.is_symlink()
            and looks_like_orphan(entry.resolve(), repo_name, known_paths)
        ]

        logger.info("Orphan scan completed", base_dir=str(base), orphan_count=len(orphans))
        return orphans

    def remove_orphans(self, paths: Iterable[Path]) -> List[Path]:
        """递归删除目录

        Args:
            paths: 要删除的目录

        Returns:
            成功删除的目录
        """
        removed = []
        for path in paths:
            try:
                shutil.rmtree(path)
            except OSError as e:
                logger.warning("Failed to remove orphaned directory", path=str(path), error=str(e))
                continue
            logger.info("Orphaned directory removed", path=str(path))
            removed.append(path)
        return removed

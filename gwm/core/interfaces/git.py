"""Git 操作相关接口定义"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

from gwm.core.data_structures import WorktreeRecord


class IGitClient(ABC):
    """Git 客户端接口

    只暴露 worktree 管理实际用到的操作。
    """

    @abstractmethod
    def is_repository(self) -> bool:
        """检查仓库是否有效"""
        pass

    @abstractmethod
    def ref_exists(self, ref: str) -> bool:
        """检查完整引用名是否存在"""
        pass

    @abstractmethod
    def get_default_branch(self) -> Optional[str]:
        """获取远程默认分支名，未配置时返回 None"""
        pass

    @abstractmethod
    def add_worktree(
        self,
        path: Path,
        commit_ish: str,
        new_branch: Optional[str] = None,
        track: bool = False,
        force: bool = False,
    ) -> None:
        """创建 worktree"""
        pass

    @abstractmethod
    def remove_worktree(self, path: Path, force: bool = False) -> None:
        """删除 worktree"""
        pass

    @abstractmethod
    def list_worktrees(self) -> List[WorktreeRecord]:
        """列出所有 worktree"""
        pass

    @abstractmethod
    def prune_worktrees(self) -> str:
        """清理失效的 worktree 元数据"""
        pass

    @abstractmethod
    def short_status(self, path: Path) -> str:
        """获取指定目录的简短状态"""
        pass

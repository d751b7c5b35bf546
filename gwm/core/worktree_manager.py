"""统一的 Worktree 管理器

在 git worktree 原语之上做前置校验和后续处理：创建、列表、删除、
切换目标查找、状态和 prune。不做回滚，git 自身保证单条命令的原子性。
"""

import os
from pathlib import Path
from typing import List, Optional, Union

from gwm.core.branch_resolver import BranchResolver
from gwm.core.config_copier import ConfigCopier
from gwm.core.data_structures import (
    BranchSource,
    CreateResult,
    StatusReport,
    WorktreeRecord,
)
from gwm.core.exceptions import (
    GitCommandError,
    InputValidationError,
    WorktreeAlreadyExists,
    WorktreeNotFound,
)
from gwm.core.git_client import GitClient
from gwm.core.interfaces import IGitClient
from gwm.core.logger import get_logger
from gwm.core.path_deriver import PathDeriver

logger = get_logger("worktree_manager")


class WorktreeManager:
    """统一的 Worktree 管理器"""

    def __init__(self, project_path: Union[str, Path], git_client: Optional[IGitClient] = None):
        """初始化 Worktree 管理器

        Args:
            project_path: 仓库根目录
            git_client: Git 客户端，默认使用 GitClient
        """
        self.project_path = Path(project_path)
        self.git_client = git_client or GitClient(self.project_path)
        self.path_deriver = PathDeriver(self.project_path)
        self.branch_resolver = BranchResolver(self.git_client)
        logger.debug("WorktreeManager initialized", project_path=str(self.project_path))

    def create_worktree(
        self,
        branch: str,
        path: Optional[Union[str, Path]] = None,
        base_dir: Optional[Union[str, Path]] = None,
        prefix: str = "",
        force: bool = False,
        copy_configs: bool = True,
        config_files: Optional[List[str]] = None,
    ) -> CreateResult:
        """创建 worktree

        Args:
            branch: 分支名
            path: 指定路径，不指定时按命名规则推导
            base_dir: 推导路径用的基础目录
            prefix: 推导路径用的前缀
            force: 目标路径已存在时仍继续（不清空目录）
            copy_configs: 是否复制配置文件
            config_files: 要复制的文件列表

        Returns:
            CreateResult

        Raises:
            InputValidationError: 分支名为空
            WorktreeAlreadyExists: 目标路径已存在且未指定 force
            GitCommandError: git worktree add 失败
        """
        if not branch:
            raise InputValidationError("Branch name required")

        if path:
            worktree_path = Path(path).absolute()
        else:
            worktree_path = self.path_deriver.derive(branch, base_dir=base_dir, prefix=prefix)

        logger.info("Creating worktree", branch=branch, path=str(worktree_path), force=force)

        if worktree_path.exists() and not force:
            raise WorktreeAlreadyExists(
                f"Directory '{worktree_path}' already exists. Use --force to override.",
                details={"path": str(worktree_path)},
            )

        resolution = self.branch_resolver.resolve(branch)

        if resolution.source is BranchSource.LOCAL:
            self.git_client.add_worktree(worktree_path, branch, force=force)
        elif resolution.source is BranchSource.REMOTE:
            self.git_client.add_worktree(
                worktree_path,
                resolution.start_point,
                new_branch=branch,
                track=True,
                force=force,
            )
        else:
            self.git_client.add_worktree(
                worktree_path,
                resolution.start_point,
                new_branch=branch,
                force=force,
            )

        result = CreateResult(path=worktree_path, resolution=resolution)

        if copy_configs and config_files:
            copier = ConfigCopier(self.project_path)
            result.copy_report = copier.copy(worktree_path, config_files)

        logger.info(
            "Worktree added successfully",
            branch=branch,
            source=resolution.source.value,
            path=str(worktree_path),
        )
        return result

    def list_worktrees(self) -> List[WorktreeRecord]:
        """获取所有已注册的 worktree（每次重新查询）"""
        return self.git_client.list_worktrees()

    def find_worktree_by_branch(self, branch: str) -> Optional[WorktreeRecord]:
        """按分支名查找 worktree

        Args:
            branch: 分支名（不带 refs/heads/）

        Returns:
            第一个匹配的 WorktreeRecord，不存在时返回 None
        """
        for worktree in self.list_worktrees():
            if worktree.matches_branch(branch):
                return worktree
        return None

    def get_worktree_path(self, branch: str) -> Path:
        """获取分支对应 worktree 的路径

        Raises:
            InputValidationError: 分支名为空
            WorktreeNotFound: 没有关联该分支的 worktree
        """
        if not branch:
            raise InputValidationError("Branch name required")

        worktree = self.find_worktree_by_branch(branch)
        if worktree is None:
            raise WorktreeNotFound(f"No worktree found for branch '{branch}'")
        return worktree.path

    def resolve_target(self, target: str) -> Path:
        """把 remove 的参数解析为 worktree 路径

        已存在的目录直接当作路径；否则按分支名查找；
        找不到但包含路径分隔符时按路径交给 git。

        Raises:
            InputValidationError: 参数为空
            WorktreeNotFound: 既不是路径也找不到对应分支
        """
        if not target:
            raise InputValidationError("Worktree path or branch name required")

        # 相对路径按当前工作目录解释
        candidate = Path(target).absolute()
        if candidate.is_dir():
            return candidate

        worktree = self.find_worktree_by_branch(target)
        if worktree is not None:
            return worktree.path

        if os.sep in target or (os.altsep and os.altsep in target):
            return candidate

        raise WorktreeNotFound(f"No worktree found for branch '{target}'")

    def remove_worktree(self, target: str, force: bool = False) -> Path:
        """删除 worktree

        Args:
            target: 路径或分支名
            force: 跳过 git 对未提交改动的检查

        Returns:
            被删除的 worktree 路径
        """
        worktree_path = self.resolve_target(target)
        logger.info("Removing worktree", path=str(worktree_path), force=force)
        self.git_client.remove_worktree(worktree_path, force=force)
        return worktree_path

    def collect_status(self) -> List[StatusReport]:
        """逐个查询 worktree 的简短状态，单个失败不影响其余"""
        reports = []
        for worktree in self.list_worktrees():
            try:
                output = self.git_client.short_status(worktree.path)
                reports.append(StatusReport(path=worktree.path, output=output))
            except GitCommandError as e:
                logger.warning("Failed to get worktree status", path=str(worktree.path), error=str(e))
                reports.append(StatusReport(path=worktree.path, error=e.details or e.message))
        return reports

    def prune(self) -> str:
        """清理失效的 worktree 元数据"""
        return self.git_client.prune_worktrees()

"""分支解析

判断请求的分支是本地分支、远程跟踪分支还是新分支，
并据此选择 worktree 的创建方式。
"""

from gwm.core.data_structures import BranchResolution, BranchSource
from gwm.core.exceptions import InputValidationError
from gwm.core.git_client import DEFAULT_REMOTE
from gwm.core.interfaces import IGitClient
from gwm.core.logger import get_logger


logger = get_logger("branch_resolver")

FALLBACK_MAIN_BRANCH = "main"


class BranchResolver:
    """分支解析器

    按优先级依次检查：
    1. 本地分支 ``refs/heads/<branch>`` → 直接检出
    2. 远程分支 ``refs/remotes/origin/<branch>`` → 新建跟踪分支
    3. 都不存在 → 从主分支新建
    """

    def __init__(self, git_client: IGitClient, remote: str = DEFAULT_REMOTE):
        self.git_client = git_client
        self.remote = remote

    def get_main_branch(self) -> str:
        """主分支名：远程 HEAD 指向的分支，未配置时为 main"""
        main_branch = self.git_client.get_default_branch() or FALLBACK_MAIN_BRANCH
        logger.debug("Main branch resolved", branch=main_branch)
        return main_branch

    def resolve(self, branch_name: str) -> BranchResolution:
        """解析分支来源

        Args:
            branch_name: 分支名

        Returns:
            BranchResolution

        Raises:
            InputValidationError: 分支名为空时抛出
        """
        if not branch_name:
            raise InputValidationError("Branch name required")

        if self.git_client.ref_exists(f"refs/heads/{branch_name}"):
            logger.info("Local branch detected", branch=branch_name)
            return BranchResolution(branch_name, BranchSource.LOCAL)

        remote_ref = f"{self.remote}/{branch_name}"
        if self.git_client.ref_exists(f"refs/remotes/{remote_ref}"):
            logger.info("Remote branch detected", branch=branch_name, remote=self.remote)
            return BranchResolution(branch_name, BranchSource.REMOTE, start_point=remote_ref)

        main_branch = self.get_main_branch()
        logger.info("Branch not found, creating new branch", branch=branch_name, base=main_branch)
        return BranchResolution(branch_name, BranchSource.NEW, start_point=main_branch)

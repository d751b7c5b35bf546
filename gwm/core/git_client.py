"""Git 操作封装类

通过 subprocess 调用 git 可执行文件，提供 worktree 管理所需的操作。
使用 structlog 记录所有操作。
"""

import subprocess
from pathlib import Path
from typing import List, Optional

from gwm.core.data_structures import WorktreeRecord
from gwm.core.exceptions import GitCommandError
from gwm.core.interfaces import IGitClient
from gwm.core.logger import get_logger


logger = get_logger("git_client")

DEFAULT_REMOTE = "origin"


def parse_worktree_porcelain(output: str) -> List[WorktreeRecord]:
    """解析 ``git worktree list --porcelain`` 的输出

    每个 worktree 是一个以空行分隔的块::

        worktree /path/to/worktree
        HEAD 1234abcd...
        branch refs/heads/main

    其他可能的行：``bare``、``detached``、``locked [reason]``、``prunable [reason]``。

    Args:
        output: 命令输出

    Returns:
        WorktreeRecord 列表，顺序与输出一致
    """
    records: List[WorktreeRecord] = []
    current: Optional[WorktreeRecord] = None

    for line in output.splitlines():
        if not line.strip():
            if current is not None:
                records.append(current)
                current = None
            continue

        key, _, value = line.partition(" ")

        if key == "worktree":
            if current is not None:
                records.append(current)
            current = WorktreeRecord(path=Path(value))
        elif current is None:
            continue
        elif key == "HEAD":
            current.head = value
        elif key == "branch":
            current.branch = value
        elif key == "bare":
            current.is_bare = True
        elif key == "detached":
            current.is_detached = True
        elif key == "locked":
            current.is_locked = True
        elif key == "prunable":
            current.is_prunable = True

    if current is not None:
        records.append(current)

    return records


class GitClient(IGitClient):
    """Git 操作客户端

    提供 Git 命令的统一接口和异常处理。
    """

    def __init__(self, repo_path: Optional[Path] = None):
        """初始化 GitClient

        Args:
            repo_path: Git 仓库路径，默认为当前目录
        """
        self.repo_path = Path(repo_path) if repo_path else Path.cwd()
        logger.debug("GitClient initialized", repo_path=str(self.repo_path))

    def run_command(
        self,
        cmd: List[str],
        cwd: Optional[Path] = None,
        check: bool = True,
    ) -> str:
        """运行 Git 命令

        Args:
            cmd: 命令列表
            cwd: 工作目录，默认使用 repo_path
            check: 是否在命令失败时抛出异常

        Returns:
            命令输出

        Raises:
            GitCommandError: 命令执行失败时抛出
        """
        cwd = cwd or self.repo_path

        logger.debug("Running git command", command=" ".join(cmd), cwd=str(cwd))

        try:
            result = subprocess.run(
                cmd,
                cwd=cwd,
                capture_output=True,
                text=True,
                check=False,
            )
        except (subprocess.SubprocessError, OSError) as e:
            logger.error(
                "Git command error",
                command=" ".join(cmd),
                error=str(e),
            )
            raise GitCommandError(f"Failed to execute git command: {e}", details=str(e)) from e

        if check and result.returncode != 0:
            error_msg = (result.stderr or result.stdout).strip()
            logger.error(
                "Git command failed",
                command=" ".join(cmd),
                return_code=result.returncode,
                error=error_msg,
            )
            raise GitCommandError(
                f"Git command failed: {' '.join(cmd)}",
                details=error_msg,
            )

        output = result.stdout.strip()
        logger.debug("Git command succeeded", output_length=len(output))

        return output

    def command_succeeds(self, cmd: List[str], cwd: Optional[Path] = None) -> bool:
        """运行命令，只关心是否成功"""
        try:
            result = subprocess.run(
                cmd,
                cwd=cwd or self.repo_path,
                capture_output=True,
                text=True,
                check=False,
            )
        except (subprocess.SubprocessError, OSError) as e:
            logger.debug("Git probe could not run", command=" ".join(cmd), error=str(e))
            return False
        return result.returncode == 0

    def is_repository(self) -> bool:
        """检查 repo_path 是否为有效的 Git 仓库"""
        valid = self.command_succeeds(["git", "rev-parse", "--git-dir"])
        logger.debug("Repository validity checked", repo_path=str(self.repo_path), valid=valid)
        return valid

    def get_common_dir(self) -> Path:
        """获取共享的 .git 目录（链接 worktree 中指向主仓库的 .git）

        Raises:
            GitCommandError: 不是有效仓库时抛出
        """
        output = self.run_command(["git", "rev-parse", "--git-common-dir"])
        common_dir = Path(output)
        if not common_dir.is_absolute():
            common_dir = self.repo_path / common_dir
        return common_dir.resolve()

    def ref_exists(self, ref: str) -> bool:
        """检查引用是否存在

        Args:
            ref: 完整引用名，例如 refs/heads/main

        Returns:
            引用存在返回 True，否则返回 False
        """
        exists = self.command_succeeds(["git", "show-ref", "--verify", "--quiet", ref])
        logger.debug("Ref existence checked", ref=ref, exists=exists)
        return exists

    def get_default_branch(self, remote: str = DEFAULT_REMOTE) -> Optional[str]:
        """通过远程 HEAD 符号引用获取默认分支

        Args:
            remote: 远程名

        Returns:
            分支名；远程 HEAD 未配置时返回 None
        """
        prefix = f"refs/remotes/{remote}/"
        output = self.run_command(
            ["git", "symbolic-ref", f"{prefix}HEAD"],
            check=False,
        )
        if not output.startswith(prefix):
            logger.debug("Remote HEAD not configured", remote=remote)
            return None

        branch = output[len(prefix):]
        logger.debug("Default branch resolved", remote=remote, branch=branch)
        return branch or None

    def add_worktree(
        self,
        path: Path,
        commit_ish: str,
        new_branch: Optional[str] = None,
        track: bool = False,
        force: bool = False,
    ) -> None:
        """创建 worktree

        Args:
            path: worktree 路径
            commit_ish: 检出的分支或起点
            new_branch: 需要新建的分支名
            track: 新分支是否跟踪 commit_ish
            force: 传递 --force 给 git

        Raises:
            GitCommandError: 创建失败时抛出
        """
        cmd = ["git", "worktree", "add"]
        if force:
            cmd.append("--force")
        if track:
            cmd.append("--track")
        if new_branch:
            cmd.extend(["-b", new_branch])
        cmd.extend([str(path), commit_ish])

        self.run_command(cmd)
        logger.info(
            "Worktree created successfully",
            path=str(path),
            commit_ish=commit_ish,
            new_branch=new_branch,
        )

    def remove_worktree(self, path: Path, force: bool = False) -> None:
        """删除 worktree

        Args:
            path: worktree 路径
            force: 是否强制删除

        Raises:
            GitCommandError: 删除失败时抛出
        """
        cmd = ["git", "worktree", "remove"]
        if force:
            cmd.append("--force")
        cmd.append(str(path))

        self.run_command(cmd)
        logger.info("Worktree deleted successfully", path=str(path), force=force)

    def list_worktrees(self) -> List[WorktreeRecord]:
        """获取所有 worktree 列表

        Returns:
            WorktreeRecord 列表

        Raises:
            GitCommandError: 获取失败时抛出
        """
        output = self.run_command(["git", "worktree", "list", "--porcelain"])
        worktrees = parse_worktree_porcelain(output)
        logger.debug("Worktree list retrieved", count=len(worktrees))
        return worktrees

    def prune_worktrees(self) -> str:
        """清理已删除目录的 worktree 元数据

        Returns:
            git 输出（--verbose）
        """
        output = self.run_command(["git", "worktree", "prune", "--verbose"])
        logger.info("Worktree references pruned", output=output)
        return output

    def short_status(self, path: Path) -> str:
        """获取 worktree 的简短状态

        Args:
            path: worktree 路径

        Returns:
            ``git status --short --branch`` 输出

        Raises:
            GitCommandError: 目录不可访问或命令失败时抛出
        """
        return self.run_command(["git", "status", "--short", "--branch"], cwd=Path(path))

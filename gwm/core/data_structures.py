"""GWM 核心数据结构定义

定义 WorktreeRecord、分支解析结果、配置复制报告等核心业务对象。"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional


BRANCH_REF_PREFIX = "refs/heads/"
SHORT_COMMIT_LENGTH = 7


@dataclass
class WorktreeRecord:
    """git worktree list --porcelain 中的一条记录"""
    path: Path
    branch: Optional[str] = None
    head: str = ""
    is_bare: bool = False
    is_detached: bool = False
    is_locked: bool = False
    is_prunable: bool = False

    @property
    def short_head(self) -> str:
        """短提交号"""
        return self.head[:SHORT_COMMIT_LENGTH]

    @property
    def branch_name(self) -> Optional[str]:
        """去掉 refs/heads/ 前缀的分支名"""
        if self.branch is None:
            return None
        if self.branch.startswith(BRANCH_REF_PREFIX):
            return self.branch[len(BRANCH_REF_PREFIX):]
        return self.branch

    @property
    def status_flags(self) -> List[str]:
        """已设置的状态标志，固定顺序"""
        flags = []
        if self.is_bare:
            flags.append("bare")
        if self.is_detached:
            flags.append("detached")
        if self.is_locked:
            flags.append("locked")
        if self.is_prunable:
            flags.append("prunable")
        return flags

    @property
    def status_text(self) -> str:
        """状态描述，无标志时为 clean"""
        return " ".join(self.status_flags) or "clean"

    def matches_branch(self, branch_name: str) -> bool:
        """是否关联到指定分支"""
        return self.branch_name == branch_name


class BranchSource(Enum):
    """新 worktree 的分支来源"""
    LOCAL = "local"
    REMOTE = "remote"
    NEW = "new"


@dataclass
class BranchResolution:
    """分支解析结果"""
    branch: str
    source: BranchSource
    start_point: Optional[str] = None


@dataclass
class ConfigEntry:
    """配置文件列表中的一项"""
    path: str
    found: bool


@dataclass
class CopyReport:
    """配置文件复制结果"""
    copied: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)

    @property
    def copied_count(self) -> int:
        return len(self.copied)

    @property
    def failed_count(self) -> int:
        return len(self.failed)


@dataclass
class CreateResult:
    """worktree 创建结果"""
    path: Path
    resolution: BranchResolution
    copy_report: Optional[CopyReport] = None


@dataclass
class StatusReport:
    """单个 worktree 的 git status 结果"""
    path: Path
    output: str = ""
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

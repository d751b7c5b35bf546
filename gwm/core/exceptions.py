"""GWM 异常体系"""

from typing import Any, Optional


class GWMException(Exception):
    """基础异常类"""
    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(self.message)


class InputValidationError(GWMException):
    """参数缺失或为空"""
    pass


class RepositoryNotFoundError(GWMException):
    """当前目录不在 Git 仓库中"""
    pass


# Worktree 相关异常
class WorktreeException(GWMException):
    """Worktree 操作异常"""
    pass


class WorktreeAlreadyExists(WorktreeException):
    """Worktree 目标路径已存在"""
    pass


class WorktreeNotFound(WorktreeException):
    """找不到分支对应的 worktree"""
    pass


# 配置相关异常
class ConfigException(GWMException):
    """配置异常"""
    pass


class ConfigValidationError(ConfigException):
    """配置项无效"""
    pass


class ConfigIOError(ConfigException):
    """配置文件读写失败"""
    pass


# Git 操作异常
class GitException(GWMException):
    """Git 操作异常"""
    pass


class GitCommandError(GitException):
    """Git 命令执行失败"""
    pass

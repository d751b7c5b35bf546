"""测试公共 fixture"""

import subprocess
from pathlib import Path

import pytest


def git(repo_path: Path, *args: str) -> str:
    """在仓库中执行 git 命令，失败时抛出异常"""
    result = subprocess.run(
        ["git", *args],
        cwd=repo_path,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


def init_repo(repo_path: Path) -> Path:
    """创建带一次初始提交的仓库，主分支为 main"""
    repo_path.mkdir(parents=True, exist_ok=True)
    git(repo_path, "init")
    git(repo_path, "symbolic-ref", "HEAD", "refs/heads/main")
    git(repo_path, "config", "user.email", "test@example.com")
    git(repo_path, "config", "user.name", "Test User")
    git(repo_path, "config", "commit.gpgsign", "false")

    (repo_path / "README.md").write_text("# Test Repository\n")
    git(repo_path, "add", "README.md")
    git(repo_path, "commit", "-m", "Initial commit")
    return repo_path


@pytest.fixture
def git_repo(tmp_path):
    """临时 git 仓库：<tmp>/myrepo，worktree 默认建在 <tmp> 下"""
    return init_repo(tmp_path / "myrepo")

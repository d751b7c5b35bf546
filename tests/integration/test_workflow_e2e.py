"""端到端集成测试

在真实的临时 git 仓库中运行完整工作流：
- 创建 worktree（本地分支、远程分支、新分支）
- 配置文件复制
- 列表、状态、删除、prune、cleanup
"""

import shutil
import subprocess
from pathlib import Path

import pytest
from click.testing import CliRunner

from gwm.cli.main import cli


pytestmark = pytest.mark.integration


def git(repo: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args],
        cwd=repo,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def cloned_repo(git_repo, tmp_path):
    """带 origin 远程的克隆仓库，origin 上有一个本地不存在的分支"""
    origin = tmp_path / "origin.git"
    git(tmp_path, "clone", "--bare", str(git_repo), str(origin))

    git(git_repo, "checkout", "-b", "remote-only")
    (git_repo / "remote.txt").write_text("from remote\n")
    git(git_repo, "add", "remote.txt")
    git(git_repo, "commit", "-m", "Remote commit")
    git(git_repo, "push", str(origin), "remote-only")
    git(git_repo, "checkout", "main")

    clone = tmp_path / "clone"
    git(tmp_path, "clone", str(origin), str(clone))
    git(clone, "config", "user.email", "test@example.com")
    git(clone, "config", "user.name", "Test User")
    return clone


class TestWorktreeLifecycle:
    """worktree 完整生命周期"""

    def test_create_list_status_remove(self, runner, git_repo, tmp_path, monkeypatch):
        """测试创建、列表、状态、删除"""
        monkeypatch.chdir(git_repo)

        result = runner.invoke(cli, ["list"])
        assert result.exit_code == 0, result.output
        assert "refs/heads/main" in result.output

        result = runner.invoke(cli, ["create", "feature/login", "--no-copy-configs"])
        assert result.exit_code == 0, result.output
        worktree = tmp_path / "myrepo-feature-login"
        assert worktree.is_dir()

        result = runner.invoke(cli, ["list"])
        assert str(worktree) in result.output
        assert "refs/heads/feature/login" in result.output

        result = runner.invoke(cli, ["status"])
        assert result.exit_code == 0, result.output
        assert "## feature/login" in result.output

        result = runner.invoke(cli, ["remove", "feature/login"])
        assert result.exit_code == 0, result.output
        assert not worktree.exists()
        # 分支本身保留
        assert git(git_repo, "branch", "--list", "feature/login")

    def test_existing_local_branch_not_recreated(self, runner, git_repo, tmp_path, monkeypatch):
        """测试已有本地分支时直接检出"""
        git(git_repo, "branch", "existing")
        head_before = git(git_repo, "rev-parse", "existing")
        monkeypatch.chdir(git_repo)

        result = runner.invoke(cli, ["create", "existing", "--no-copy-configs"])

        assert result.exit_code == 0, result.output
        assert git(git_repo, "branch", "--list", "existing").count("existing") == 1
        assert git(tmp_path / "myrepo-existing", "rev-parse", "HEAD") == head_before

    def test_force_on_existing_directory(self, runner, git_repo, tmp_path, monkeypatch):
        """测试目标目录已存在时 --force 的效果"""
        (tmp_path / "myrepo-feat").mkdir()
        monkeypatch.chdir(git_repo)

        result = runner.invoke(cli, ["create", "feat"])
        assert result.exit_code == 1
        assert "already exists" in result.output

        result = runner.invoke(cli, ["create", "feat", "--force"])
        assert result.exit_code == 0, result.output
        assert (tmp_path / "myrepo-feat" / "README.md").exists()

    def test_config_files_copied(self, runner, git_repo, tmp_path, monkeypatch):
        """测试未跟踪的配置文件复制到新 worktree"""
        (git_repo / ".env").write_text("TOKEN=abc\n")
        (git_repo / ".mcp.json").write_text('{"servers": []}\n')
        (git_repo / ".vscode").mkdir()
        (git_repo / ".vscode" / "settings.json").write_text("{}\n")
        monkeypatch.chdir(git_repo)

        result = runner.invoke(cli, ["create", "feat"])

        assert result.exit_code == 0, result.output
        worktree = tmp_path / "myrepo-feat"
        assert (worktree / ".env").read_text() == "TOKEN=abc\n"
        assert (worktree / ".mcp.json").exists()
        assert (worktree / ".vscode" / "settings.json").exists()
        assert not (worktree / ".env.local").exists()

    def test_config_list_drives_copy(self, runner, git_repo, tmp_path, monkeypatch):
        """测试 config 命令修改的列表用于后续创建"""
        (git_repo / ".env.production").write_text("P=1\n")
        monkeypatch.chdir(git_repo)

        result = runner.invoke(cli, ["config", "--add", ".env.production"])
        assert result.exit_code == 0, result.output

        result = runner.invoke(cli, ["create", "feat"])
        assert result.exit_code == 0, result.output
        assert (tmp_path / "myrepo-feat" / ".env.production").exists()

    def test_prune_and_cleanup(self, runner, git_repo, tmp_path, monkeypatch):
        """测试 prune 清理元数据，cleanup 删除孤立目录"""
        monkeypatch.chdir(git_repo)
        runner.invoke(cli, ["create", "gone", "--no-copy-configs"])
        runner.invoke(cli, ["create", "kept", "--no-copy-configs"])
        shutil.rmtree(tmp_path / "myrepo-gone")

        result = runner.invoke(cli, ["prune"])
        assert result.exit_code == 0, result.output
        assert "myrepo-gone" not in git(git_repo, "worktree", "list")

        orphan = tmp_path / "myrepo-orphan-test"
        orphan.mkdir()
        result = runner.invoke(cli, ["cleanup", "--force"])

        assert result.exit_code == 0, result.output
        assert not orphan.exists()
        assert (tmp_path / "myrepo-kept").is_dir()

    def test_commands_work_from_linked_worktree(self, runner, git_repo, tmp_path, monkeypatch):
        """测试在链接 worktree 中运行命令"""
        monkeypatch.chdir(git_repo)
        runner.invoke(cli, ["create", "feat", "--no-copy-configs"])

        monkeypatch.chdir(tmp_path / "myrepo-feat")
        result = runner.invoke(cli, ["list"])

        assert result.exit_code == 0, result.output
        assert "refs/heads/main" in result.output
        assert "refs/heads/feat" in result.output

    def test_create_from_linked_worktree_uses_main_root(self, runner, git_repo, tmp_path, monkeypatch):
        """测试在链接 worktree 中创建时，命名和配置来源都基于主仓库"""
        (git_repo / ".env").write_text("MAIN=1\n")
        monkeypatch.chdir(git_repo)
        runner.invoke(cli, ["create", "feat", "--no-copy-configs"])

        monkeypatch.chdir(tmp_path / "myrepo-feat")
        result = runner.invoke(cli, ["create", "other", "--config-files", ".env"])

        assert result.exit_code == 0, result.output
        other = tmp_path / "myrepo-other"
        assert (other / ".env").read_text() == "MAIN=1\n"
        assert not (tmp_path / "myrepo-feat-other").exists()


class TestRelativePaths:
    """相对路径按当前工作目录解释"""

    def test_create_and_remove_relative_path_from_subdirectory(self, runner, git_repo, tmp_path, monkeypatch):
        """测试在子目录中用相对路径创建和删除"""
        (git_repo / ".env").write_text("A=1\n")
        subdir = git_repo / "src"
        subdir.mkdir()
        monkeypatch.chdir(subdir)

        result = runner.invoke(cli, ["create", "feat", "../../wt-rel", "--config-files", ".env"])

        assert result.exit_code == 0, result.output
        worktree = tmp_path / "wt-rel"
        assert (worktree / "README.md").exists()
        assert (worktree / ".env").read_text() == "A=1\n"
        assert not (tmp_path.parent / "wt-rel").exists()
        assert str(worktree) in git(git_repo, "worktree", "list")

        result = runner.invoke(cli, ["remove", "../../wt-rel"])

        assert result.exit_code == 0, result.output
        assert not worktree.exists()

    def test_relative_path_collision_checked(self, runner, git_repo, tmp_path, monkeypatch):
        """测试相对路径的存在检查针对 git 实际使用的目录"""
        subdir = git_repo / "src"
        subdir.mkdir()
        (tmp_path / "taken").mkdir()
        (tmp_path / "taken" / "file.txt").write_text("x\n")
        monkeypatch.chdir(subdir)

        result = runner.invoke(cli, ["create", "feat", "../../taken"])

        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_relative_base_dir(self, runner, git_repo, tmp_path, monkeypatch):
        """测试相对的 --base-dir"""
        subdir = git_repo / "src"
        subdir.mkdir()
        monkeypatch.chdir(subdir)

        result = runner.invoke(cli, ["create", "feat", "-d", "../..", "--no-copy-configs"])

        assert result.exit_code == 0, result.output
        assert (tmp_path / "myrepo-feat" / "README.md").exists()


class TestRemoteBranches:
    """远程分支处理"""

    def test_remote_branch_creates_tracking_branch(self, runner, cloned_repo, tmp_path, monkeypatch):
        """测试只在远程存在的分支创建跟踪分支"""
        monkeypatch.chdir(cloned_repo)

        result = runner.invoke(cli, ["create", "remote-only", "--no-copy-configs"])

        assert result.exit_code == 0, result.output
        assert "exists on remote" in result.output
        worktree = tmp_path / "clone-remote-only"
        assert (worktree / "remote.txt").read_text() == "from remote\n"
        upstream = git(cloned_repo, "rev-parse", "--abbrev-ref", "remote-only@{upstream}")
        assert upstream == "origin/remote-only"

    def test_new_branch_starts_from_remote_head(self, runner, cloned_repo, tmp_path, monkeypatch):
        """测试新分支从远程 HEAD 指向的分支创建"""
        monkeypatch.chdir(cloned_repo)

        result = runner.invoke(cli, ["create", "brand-new", "--no-copy-configs"])

        assert result.exit_code == 0, result.output
        assert "from 'main'" in result.output
        assert git(cloned_repo, "rev-parse", "brand-new") == git(cloned_repo, "rev-parse", "main")

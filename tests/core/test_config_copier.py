"""ConfigCopier 单元测试"""

import shutil
from unittest.mock import patch

from gwm.core.config_copier import ConfigCopier


class TestConfigCopier:
    """配置文件复制测试"""

    def test_copy_existing_and_skip_missing(self, tmp_path):
        """测试复制存在的文件并跳过缺失的文件"""
        main = tmp_path / "main"
        worktree = tmp_path / "wt"
        main.mkdir()
        worktree.mkdir()
        (main / ".env").write_text("SECRET=1\n")

        report = ConfigCopier(main).copy(worktree, [".env", ".env.local"])

        assert report.copied == [".env"]
        assert report.skipped == [".env.local"]
        assert report.failed == []
        assert (worktree / ".env").read_text() == "SECRET=1\n"
        assert not (worktree / ".env.local").exists()

    def test_creates_parent_directories(self, tmp_path):
        """测试保留相对目录结构"""
        main = tmp_path / "main"
        (main / ".vscode").mkdir(parents=True)
        (main / ".vscode" / "settings.json").write_text("{}")
        worktree = tmp_path / "wt"
        worktree.mkdir()

        report = ConfigCopier(main).copy(worktree, [".vscode/settings.json"])

        assert report.copied_count == 1
        assert (worktree / ".vscode" / "settings.json").read_text() == "{}"

    def test_directory_entry_is_skipped(self, tmp_path):
        """测试目录条目不会被复制"""
        main = tmp_path / "main"
        (main / "config").mkdir(parents=True)
        worktree = tmp_path / "wt"
        worktree.mkdir()

        report = ConfigCopier(main).copy(worktree, ["config"])
        assert report.skipped == ["config"]

    def test_overwrites_existing_target(self, tmp_path):
        """测试覆盖 worktree 中已有的文件"""
        main = tmp_path / "main"
        worktree = tmp_path / "wt"
        main.mkdir()
        worktree.mkdir()
        (main / ".env").write_text("NEW\n")
        (worktree / ".env").write_text("OLD\n")

        ConfigCopier(main).copy(worktree, [".env"])
        assert (worktree / ".env").read_text() == "NEW\n"

    def test_copy_failure_does_not_stop_others(self, tmp_path):
        """测试单个文件失败不影响其他文件"""
        main = tmp_path / "main"
        worktree = tmp_path / "wt"
        main.mkdir()
        worktree.mkdir()
        (main / "a").write_text("a")
        (main / "b").write_text("b")

        real_copy2 = shutil.copy2

        def flaky_copy(src, dst):
            if str(src).endswith("a"):
                raise PermissionError("denied")
            return real_copy2(src, dst)

        with patch("gwm.core.config_copier.shutil.copy2", side_effect=flaky_copy):
            report = ConfigCopier(main).copy(worktree, ["a", "b"])

        assert report.failed == ["a"]
        assert report.copied == ["b"]
        assert report.failed_count == 1

"""PathDeriver 单元测试"""

from pathlib import Path

import pytest

from gwm.core.exceptions import InputValidationError
from gwm.core.path_deriver import PathDeriver, sanitize_branch_name


class TestSanitizeBranchName:
    """分支名清理测试"""

    @pytest.mark.parametrize("branch,expected", [
        ("main", "main"),
        ("feature/auth", "feature-auth"),
        ("feature/user@auth_v2", "feature-user-auth_v2"),
        ("release-1.2.0", "release-1.2.0"),
        ("a b", "a-b"),
    ])
    def test_replaces_unsafe_characters(self, branch, expected):
        """测试非安全字符替换为 -"""
        assert sanitize_branch_name(branch) == expected

    def test_does_not_collapse_dashes(self):
        """测试连续的 - 不合并"""
        assert sanitize_branch_name("a//b") == "a--b"
        assert sanitize_branch_name("/lead") == "-lead"

    def test_result_only_contains_safe_characters(self):
        """测试结果只包含安全字符"""
        result = sanitize_branch_name("x~y^z:w?*[]\\中文")
        assert all(c.isascii() and (c.isalnum() or c in "._-") for c in result)


class TestPathDeriver:
    """路径推导测试"""

    def test_repo_name_and_default_base_dir(self):
        """测试项目名和默认基础目录"""
        deriver = PathDeriver("/home/u/myrepo")
        assert deriver.repo_name == "myrepo"
        assert deriver.default_base_dir == Path("/home/u")

    def test_derive_default_location(self):
        """测试默认路径为仓库同级目录"""
        deriver = PathDeriver(Path("/home/u/myrepo"))
        path = deriver.derive("feature/auth")
        assert path == Path("/home/u/myrepo-feature-auth")

    def test_derive_with_base_dir_and_prefix(self):
        """测试基础目录和前缀"""
        deriver = PathDeriver(Path("/home/u/myrepo"))
        path = deriver.derive("fix/bug", base_dir="/tmp/wt", prefix="wt-")
        assert path == Path("/tmp/wt/wt-myrepo-fix-bug")

    def test_derive_is_deterministic(self):
        """测试相同输入得到相同路径"""
        deriver = PathDeriver(Path("/home/u/myrepo"))
        assert deriver.derive("a/b", prefix="p") == deriver.derive("a/b", prefix="p")

    def test_empty_branch_rejected(self):
        """测试空分支名"""
        deriver = PathDeriver(Path("/home/u/myrepo"))
        with pytest.raises(InputValidationError, match="Branch name required"):
            deriver.derive("")

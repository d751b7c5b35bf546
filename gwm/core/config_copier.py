"""配置文件复制器

把主仓库根目录中的未跟踪配置文件（.env、编辑器设置等）复制到新 worktree，
保留相对目录结构。尽力而为：单个文件失败不影响其余文件，也不影响 worktree 创建。
"""

import shutil
from pathlib import Path
from typing import Iterable, Union

from gwm.core.data_structures import CopyReport
from gwm.core.logger import get_logger

logger = get_logger("config_copier")


class ConfigCopier:
    """配置文件复制器"""

    def __init__(self, main_path: Union[str, Path]):
        """初始化复制器

        Args:
            main_path: 源目录（仓库根目录）
        """
        self.main_path = Path(main_path)

    def copy(self, worktree_path: Union[str, Path], files: Iterable[str]) -> CopyReport:
        """复制文件列表到 worktree

        Args:
            worktree_path: 目标 worktree 路径
            files: 相对路径列表

        Returns:
            CopyReport
        """
        worktree_path = Path(worktree_path)
        report = CopyReport()

        for file_name in files:
            source_file = self.main_path / file_name
            target_file = worktree_path / file_name

            if not source_file.is_file():
                logger.debug("Config file not found, skipped", file=file_name)
                report.skipped.append(file_name)
                continue

            try:
                target_file.parent.mkdir(parents=True, exist_ok=True)
                shutil.copy2(source_file, target_file)
            except OSError as e:
                logger.warning(
                    "Failed to copy config file",
                    file=file_name,
                    target=str(target_file),
                    error=str(e),
                )
                report.failed.append(file_name)
                continue

            logger.debug("Config file copied", file=file_name, target=str(target_file))
            report.copied.append(file_name)

        logger.info(
            "Config files copy completed",
            worktree_path=str(worktree_path),
            copied=report.copied_count,
            skipped=len(report.skipped),
            failed=report.failed_count,
        )
        return report

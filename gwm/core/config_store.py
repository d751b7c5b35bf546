"""配置文件列表存储

管理仓库根目录下的 ``.worktree-config``：需要复制到新 worktree 的文件列表，
每行一个相对路径，``#`` 开头的行为注释。文件不存在或无法读取时使用内置默认列表。
"""

from pathlib import Path
from typing import List, Optional, Union

from gwm.core.data_structures import ConfigEntry
from gwm.core.exceptions import ConfigIOError, ConfigValidationError
from gwm.core.logger import get_logger

logger = get_logger("config_store")


CONFIG_FILENAME = ".worktree-config"

CONFIG_HEADER = (
    "# Worktree Manager Configuration\n"
    "# List of files to copy to new worktrees, one path per line relative to the project root\n"
)

DEFAULT_CONFIG_FILES = (
    # 环境变量
    ".env",
    ".env.local",
    ".env.development",
    ".env.test",
    # 编辑器
    ".vscode/settings.json",
    ".vscode/launch.json",
    # 本地配置
    "config/local.json",
    "config/development.json",
    # 工具
    ".taskmaster/config.json",
    ".mcp.json",
)


def parse_config_lines(content: str) -> List[str]:
    """解析配置文件内容

    非空且（去掉前导空白后）不以 ``#`` 开头的行原样作为一个条目。

    Args:
        content: 文件内容

    Returns:
        条目列表
    """
    entries = []
    for line in content.split("\n"):
        line = line.rstrip("\r")
        if not line or line.lstrip().startswith("#"):
            continue
        entries.append(line)
    return entries


def parse_file_list(value: Optional[str]) -> List[str]:
    """解析 --config-files 的逗号分隔列表"""
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


class ConfigStore:
    """配置文件列表存储

    每次操作都重新读取文件，不在内存中缓存。
    """

    def __init__(self, project_root: Union[str, Path]):
        """初始化配置存储

        Args:
            project_root: 仓库根目录
        """
        self.project_root = Path(project_root)

    @property
    def config_path(self) -> Path:
        """获取配置文件路径"""
        return self.project_root / CONFIG_FILENAME

    @staticmethod
    def get_default_files() -> List[str]:
        """获取默认文件列表的副本"""
        return list(DEFAULT_CONFIG_FILES)

    def load(self) -> List[str]:
        """加载文件列表

        Returns:
            文件列表；文件不存在或无法读取时为默认列表
        """
        path = self.config_path

        if not path.exists():
            logger.debug("Configuration file not found, using defaults", path=str(path))
            return self.get_default_files()

        try:
            content = path.read_bytes().decode("utf-8", errors="replace")
        except OSError as e:
            logger.warning(
                "Failed to read configuration file, using defaults",
                path=str(path),
                error=str(e),
            )
            return self.get_default_files()

        files = parse_config_lines(content)
        logger.debug("Configuration loaded", path=str(path), count=len(files))
        return files

    def save(self, files: List[str]) -> None:
        """保存文件列表（带固定头部注释）

        Args:
            files: 文件列表

        Raises:
            ConfigIOError: 写入失败时抛出
        """
        content = CONFIG_HEADER + "".join(f"{f}\n" for f in files)
        try:
            self.config_path.write_text(content, encoding="utf-8")
        except OSError as e:
            logger.error("Failed to write configuration file", path=str(self.config_path), error=str(e))
            raise ConfigIOError(
                f"Failed to write configuration file: {self.config_path}",
                details=str(e),
            ) from e
        logger.info("Configuration saved", path=str(self.config_path), count=len(files))

    def list_entries(self) -> List[ConfigEntry]:
        """列出文件列表及其在仓库根目录中是否存在"""
        return [
            ConfigEntry(path=f, found=(self.project_root / f).is_file())
            for f in self.load()
        ]

    def add(self, file_path: str) -> bool:
        """追加一个文件

        Args:
            file_path: 相对路径

        Returns:
            追加成功返回 True；已存在返回 False

        Raises:
            ConfigValidationError: 路径为空时抛出
        """
        if not file_path:
            raise ConfigValidationError("File path required for --add")

        files = self.load()
        if file_path in files:
            logger.warning("File already in config list", file=file_path)
            return False

        files.append(file_path)
        self.save(files)
        logger.info("File added to config list", file=file_path)
        return True

    def remove(self, file_path: str) -> bool:
        """移除第一个完全匹配的文件

        Args:
            file_path: 相对路径

        Returns:
            移除成功返回 True；不存在返回 False（不修改文件）

        Raises:
            ConfigValidationError: 路径为空时抛出
        """
        if not file_path:
            raise ConfigValidationError("File path required for --remove")

        files = self.load()
        if file_path not in files:
            logger.warning("File not found in config list", file=file_path)
            return False

        files.remove(file_path)
        self.save(files)
        logger.info("File removed from config list", file=file_path)
        return True

    def reset(self) -> List[str]:
        """恢复默认列表并保存"""
        files = self.get_default_files()
        self.save(files)
        logger.info("Configuration reset to defaults")
        return files

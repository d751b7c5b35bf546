"""CLI 工具包导出"""

from .formatting import (
    OutputFormatter,
    FormatterConfig,
    Color,
    get_formatter,
)
from .interactive import InteractivePrompt, launch_shell
from .project_utils import find_repo_root, locate_project, validate_repository

__all__ = [
    'OutputFormatter',
    'FormatterConfig',
    'Color',
    'get_formatter',
    'InteractivePrompt',
    'launch_shell',
    'find_repo_root',
    'locate_project',
    'validate_repository',
]

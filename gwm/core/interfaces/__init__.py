"""GWM 核心模块接口定义"""

from .git import IGitClient

__all__ = [
    'IGitClient',
]

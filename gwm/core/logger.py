"""结构化日志系统

基于 structlog 的日志记录器，日志统一挂在标准库 ``gwm`` 命名空间下。
默认不输出任何内容，``--verbose`` 时输出到 stderr。
"""

import logging
import sys
import time
import uuid
from typing import Any, Dict, Optional

import structlog


ROOT_LOGGER_NAME = "gwm"


class LoggerConfig:
    """日志配置类"""

    def __init__(self, level: str = "WARNING", console_output: bool = False):
        """初始化日志配置

        Args:
            level: 日志级别 (DEBUG, INFO, WARNING, ERROR)
            console_output: 是否输出到 stderr
        """
        self.level = level
        self.console_output = console_output


def _setup_structlog(config: LoggerConfig) -> None:
    """配置标准库 handler 和 structlog 处理链"""
    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    if config.console_output:
        handler: logging.Handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.NullHandler()

    root.addHandler(handler)
    root.setLevel(getattr(logging, config.level.upper(), logging.WARNING))
    # 不向 root logger 传播，避免 lastResort handler 打印警告
    root.propagate = False

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


class Logger:
    """结构化日志记录器

    事件名 + 键值上下文，例如 ``logger.info("Worktree created", path=...)``。
    """

    def __init__(self, name: str = ROOT_LOGGER_NAME):
        """初始化日志记录器

        Args:
            name: 日志记录器名称，自动挂到 ``gwm.`` 命名空间下
        """
        if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
            name = f"{ROOT_LOGGER_NAME}.{name}"
        self.name = name
        self.logger = structlog.get_logger(name)

    def debug(self, event: str, **kwargs) -> None:
        """记录 DEBUG 级别日志"""
        self.logger.debug(event, **kwargs)

    def info(self, event: str, **kwargs) -> None:
        """记录 INFO 级别日志"""
        self.logger.info(event, **kwargs)

    def warning(self, event: str, **kwargs) -> None:
        """记录 WARNING 级别日志"""
        self.logger.warning(event, **kwargs)

    def error(self, event: str, **kwargs) -> None:
        """记录 ERROR 级别日志"""
        self.logger.error(event, **kwargs)

    def bind(self, **kwargs) -> 'Logger':
        """绑定上下文信息到日志记录器

        Args:
            **kwargs: 要绑定的上下文信息

        Returns:
            新的日志记录器实例，绑定了指定的上下文
        """
        new_logger = Logger(self.name)
        new_logger.logger = self.logger.bind(**kwargs)
        return new_logger


class OperationScope:
    """操作范围上下文管理器

    记录 ``<name>_started`` 和 ``<name>_succeeded`` / ``<name>_failed`` 事件，
    附带耗时。异常继续向外传播。
    """

    def __init__(
        self,
        operation_name: str,
        logger: Optional[Logger] = None,
        **context: Any,
    ):
        self.operation_name = operation_name
        self.context: Dict[str, Any] = context
        self.operation_id = str(uuid.uuid4())
        self.logger = (logger or get_logger("operation")).bind(operation_id=self.operation_id)
        self.status: Optional[str] = None
        self.duration_ms: Optional[int] = None
        self._start = 0.0

    def __enter__(self) -> 'OperationScope':
        self._start = time.time()
        self.logger.info(f"{self.operation_name}_started", **self.context)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.duration_ms = int((time.time() - self._start) * 1000)
        # SystemExit(0) 视为正常结束
        failed = exc_type is not None and not (
            exc_type is SystemExit and getattr(exc_val, "code", 1) in (0, None)
        )
        self.status = "failure" if failed else "success"

        if failed:
            self.logger.error(
                f"{self.operation_name}_failed",
                duration_ms=self.duration_ms,
                error_type=exc_type.__name__,
                error_message=str(exc_val),
                **self.context,
            )
        else:
            self.logger.info(
                f"{self.operation_name}_succeeded",
                duration_ms=self.duration_ms,
                **self.context,
            )
        return False


_configured = False


def configure_logger(config: LoggerConfig) -> None:
    """配置全局日志输出

    Args:
        config: 日志配置对象
    """
    global _configured
    _setup_structlog(config)
    _configured = True


def get_logger(name: str = ROOT_LOGGER_NAME) -> Logger:
    """获取日志记录器实例

    首次调用时使用默认配置（静默）。

    Args:
        name: 日志记录器名称

    Returns:
        日志记录器实例
    """
    if not _configured:
        configure_logger(LoggerConfig())
    return Logger(name)

"""CLI 输出格式化工具

提供带严重级别标签的消息和对齐表格。"""

from typing import Any, List, Optional


class Color:
    """ANSI 颜色代码"""
    RESET = '\033[0m'
    BOLD = '\033[1m'

    RED = '\033[31m'
    GREEN = '\033[32m'
    YELLOW = '\033[33m'
    BLUE = '\033[34m'


class FormatterConfig:
    """格式化配置中心"""

    def __init__(self, no_color: bool = False):
        """初始化配置
        Args:
            no_color: 是否禁用颜色输出
        """
        self.no_color = no_color

    def colorize(self, text: str, color: str) -> str:
        """根据配置为文本添加 ANSI 颜色
        Args:
            text: 目标文本
            color: ANSI 颜色代码
        Returns:
            格式化后的文本
        """
        if self.no_color:
            return text
        return f"{color}{text}{Color.RESET}"


class OutputFormatter:
    """CLI 输出格式化器实现"""

    def __init__(self, config: Optional[FormatterConfig] = None):
        """初始化格式化器
        Args:
            config: 格式化配置
        """
        self.config = config or FormatterConfig()

    def _tagged(self, tag: str, color: str, message: str) -> str:
        return f"{self.config.colorize(f'[{tag}]', color)} {message}"

    def success(self, message: str) -> str:
        """格式化成功消息"""
        return self._tagged("SUCCESS", Color.GREEN, message)

    def error(self, message: str) -> str:
        """格式化错误消息"""
        return self._tagged("ERROR", Color.RED, message)

    def warning(self, message: str) -> str:
        """格式化警告消息"""
        return self._tagged("WARNING", Color.YELLOW, message)

    def info(self, message: str) -> str:
        """格式化普通信息消息"""
        return self._tagged("INFO", Color.BLUE, message)

    def exception(self, exc: Exception) -> str:
        """格式化异常，附带字符串形式的 details（例如 git 的 stderr）"""
        message = self.error(getattr(exc, "message", None) or str(exc))
        details = getattr(exc, "details", None)
        if isinstance(details, str) and details:
            message += "\n" + "\n".join(f"  {line}" for line in details.splitlines())
        return message

    def format_table(
        self,
        headers: List[str],
        rows: List[List[Any]],
        column_widths: Optional[List[int]] = None
    ) -> str:
        """格式化对齐的表格字符串
        Args:
            headers: 表头列表
            rows: 数据行列表
            column_widths: 可选的最小列宽
        """
        if not headers:
            return ""

        # 自动计算列宽
        widths = []
        for i, header in enumerate(headers):
            max_width = len(str(header))
            for row in rows:
                if i < len(row):
                    max_width = max(max_width, len(str(row[i])))
            if column_widths and i < len(column_widths):
                max_width = max(max_width, column_widths[i])
            widths.append(max_width)

        def render(cells: List[Any]) -> str:
            return "  ".join(str(cell).ljust(widths[i]) for i, cell in enumerate(cells)).rstrip()

        lines = [self.config.colorize(render(headers), Color.BOLD)]
        lines.append(render(["-" * len(str(h)) for h in headers]))
        for row in rows:
            lines.append(render(row))

        return "\n".join(lines)

    def format_list(self, items: List[str], bullet: str = "-") -> str:
        """格式化列表"""
        return "\n".join(f"  {bullet} {item}" for item in items)


def get_formatter(ctx) -> OutputFormatter:
    """根据全局 --no-color 选项创建格式化器"""
    obj = ctx.find_root().obj or {}
    return OutputFormatter(FormatterConfig(no_color=obj.get('no_color', False)))

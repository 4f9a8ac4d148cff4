"""消息格式化工具模块。

提供统一的错误消息、日志消息格式化功能。
"""

from pathlib import Path
from typing import Any


class MessageFormatter:
    """统一的消息格式化器"""

    @staticmethod
    def operation_failed(
        operation: str, target: str | Path, error: Exception | None = None
    ) -> str:
        """操作失败消息"""
        msg = f"{operation}失败: {target}"
        if error:
            msg += f" - {error}"
        return msg

    @staticmethod
    def validation_error(field: str, value: Any, reason: str | None = None) -> str:
        """参数验证错误消息"""
        msg = f"参数验证失败 - {field}: {value}"
        if reason:
            msg += f" ({reason})"
        return msg

    @staticmethod
    def dimensions(width: int, height: int) -> str:
        """尺寸描述"""
        return f"{width}x{height}"

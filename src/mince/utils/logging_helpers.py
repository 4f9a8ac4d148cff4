"""日志工具模块。

提供统一的日志记录器获取与全局日志配置。
"""

import inspect
import logging


def get_logger(name: str | None = None) -> logging.Logger:
    """获取日志记录器。

    Args:
        name: 日志记录器名称，默认使用调用模块的 __name__

    Returns:
        logging.Logger: 日志记录器
    """
    if name is None:
        frame = inspect.currentframe()
        if frame and frame.f_back:
            name = frame.f_back.f_globals.get("__name__", "mince")
        else:
            name = "mince"

    return logging.getLogger(name)


def configure_logging(level: str | None = None) -> None:
    """按全局配置初始化根日志

    Args:
        level: 覆盖配置中的日志级别
    """
    from ..config import get_config

    logging_config = get_config().logging
    logging.basicConfig(
        level=(level or logging_config.LOG_LEVEL).upper(),
        format=logging_config.LOG_FORMAT,
    )

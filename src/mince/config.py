"""统一配置管理模块。

提供应用程序的全局配置管理，包括默认值、环境变量支持等。
"""

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class CodecDefaults:
    """编解码相关的默认配置"""

    # JPEG 固定最高质量，不对外提供有损质量配置
    JPEG_QUALITY: int = 100
    PNG_COMPRESS_LEVEL: int = 6

    # JPEG 不支持透明度，透明像素合成到该背景色
    JPEG_BACKGROUND: tuple[int, int, int] = (255, 255, 255)


@dataclass(frozen=True)
class ExportDefaults:
    """导出相关的默认配置"""

    FILE_STEM: str = "mince_image"


@dataclass(frozen=True)
class LoggingDefaults:
    """日志相关的默认配置"""

    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class AppConfig:
    """应用程序配置管理器

    支持环境变量覆盖默认配置
    """

    def __init__(self):
        self.codec = CodecDefaults()
        self.export = ExportDefaults()
        self.logging = LoggingDefaults()

        self._load_from_env()

    def _load_from_env(self):
        """从环境变量加载配置"""
        if compress_level := os.getenv("MINCE_PNG_COMPRESS_LEVEL"):
            level = max(0, min(9, int(compress_level)))
            object.__setattr__(self.codec, "PNG_COMPRESS_LEVEL", level)

        if log_level := os.getenv("MINCE_LOG_LEVEL"):
            object.__setattr__(self.logging, "LOG_LEVEL", log_level.upper())


# 全局配置实例
config = AppConfig()


def get_config() -> AppConfig:
    """获取全局配置实例"""
    return config


def reset_config():
    """重置配置（主要用于测试）"""
    global config
    config = AppConfig()

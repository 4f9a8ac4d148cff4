"""图像转换库。

加载 -> 查看 -> 缩放 -> 导出，基于 Pillow。
"""

__version__ = "0.1.0"
__description__ = "图像加载、缩放与导出流水线，基于 Pillow"

from .core import BlobFile, Mince, PathFile
from .exceptions import (
    DecodeImageError,
    DetectImageFormatError,
    EncodeImageError,
    FileReadError,
    GenericError,
    InvalidDimensionsError,
    MinceError,
    UnsupportedFormatError,
)
from .models import ImageFormat, Metadata


__all__ = [
    "BlobFile",
    "DecodeImageError",
    "DetectImageFormatError",
    "EncodeImageError",
    "FileReadError",
    "GenericError",
    "ImageFormat",
    "InvalidDimensionsError",
    "Metadata",
    "Mince",
    "MinceError",
    "PathFile",
    "UnsupportedFormatError",
    "get_version",
]


def get_version() -> str:
    """获取版本号。"""
    return __version__

"""数据模型包。

定义图像格式与元数据等数据结构。
"""

from .constants import ImageFormats, get_format_alias, supports_transparency
from .image_format import ImageFormat
from .metadata import Metadata


__all__ = [
    "ImageFormat",
    "ImageFormats",
    "Metadata",
    "get_format_alias",
    "supports_transparency",
]

"""图像格式相关常量定义。

支持的输出格式与 Pillow 格式名、MIME 类型、扩展名之间的映射。
"""

from typing import Final


class ImageFormats:
    """支持格式的静态映射表"""

    # 用户友好的别名
    ALIASES: Final[dict[str, str]] = {
        "JPG": "JPEG",
        # 多图 JPEG（MPF 扩展）仍是 JPEG 码流
        "MPO": "JPEG",
    }

    # Pillow 格式名 -> 枚举值
    PIL_FORMATS: Final[dict[str, str]] = {
        "JPEG": "jpeg",
        "PNG": "png",
        "GIF": "gif",
    }

    MIME_TYPES: Final[dict[str, str]] = {
        "jpeg": "image/jpeg",
        "png": "image/png",
        "gif": "image/gif",
    }

    EXTENSIONS: Final[dict[str, str]] = {
        "jpeg": "jpeg",
        "png": "png",
        "gif": "gif",
    }

    # 不支持格式的哨兵值，元数据查询永不失败
    UNSUPPORTED_MIME: Final[str] = "image/unsupported"
    UNSUPPORTED_EXTENSION: Final[str] = "unsupported"

    # 没有魔数、只校验头部字段的 Pillow 插件，不算可识别的签名
    WEAK_SIGNATURE_FORMATS: Final[set[str]] = {"TGA", "SPIDER"}

    # 可透明的格式
    TRANSPARENCY_FORMATS: Final[set[str]] = {"PNG", "GIF"}


def get_format_alias(format_str: str) -> str:
    """获取格式的标准名称"""
    format_upper = format_str.upper()
    return ImageFormats.ALIASES.get(format_upper, format_upper)


def supports_transparency(format_str: str) -> bool:
    """检查格式是否支持透明度"""
    return get_format_alias(format_str) in ImageFormats.TRANSPARENCY_FORMATS
